# src/realworld_db/models/__init__.py
"""SQLAlchemy models for the RealWorld data model."""

from .article import Article, ArticleFavorite
from .comment import ArticleComment
from .follow import Follow
from .user import User

__all__ = [
    "Article", "ArticleFavorite",
    "ArticleComment",
    "Follow",
    "User",
]
