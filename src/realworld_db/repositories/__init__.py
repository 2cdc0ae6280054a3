"""Repositories wrapping database access per entity."""

from .article_repo import ArticleRepository
from .comment_repo import CommentRepository
from .favorite_repo import FavoriteRepository
from .follow_repo import FollowRepository
from .user_repo import UserRepository

__all__ = [
    "ArticleRepository",
    "CommentRepository",
    "FavoriteRepository",
    "FollowRepository",
    "UserRepository",
]
