"""Pydantic schemas validating repository inputs."""

from .article import ArticleCreate, ArticleUpdate
from .comment import CommentCreate
from .user import Profile, UserCreate, UserUpdate

__all__ = [
    "ArticleCreate",
    "ArticleUpdate",
    "CommentCreate",
    "Profile",
    "UserCreate",
    "UserUpdate",
]
