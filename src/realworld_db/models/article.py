# src/realworld_db/models/article.py
"""SQLAlchemy models for articles and favorites."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, PrimaryKeyConstraint, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realworld_db.db.session import Base
from realworld_db.db.time import created_at_default, utcnow
from realworld_db.db.types import TagList, UTCDateTime, generate_id

if TYPE_CHECKING:
    from realworld_db.models.comment import ArticleComment
    from realworld_db.models.user import User


class Article(Base):
    """Authored content addressed publicly by its slug.

    Tags are stored inline as an ordered list. Filtering by tag goes through
    the GIN index on PostgreSQL; listing every distinct tag is a full scan.
    """

    __tablename__ = "article"
    __table_args__ = (
        UniqueConstraint("slug", name="article_slug_key"),
        Index("article_tags_gin", "tag_list", postgresql_using="gin"),
    )

    article_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=generate_id)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    # Derived from the title by the caller; see realworld_db.utils.slug.
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    tag_list: Mapped[list[str]] = mapped_column(TagList, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=created_at_default, server_default=func.now()
    )

    author: Mapped[User] = relationship("User", back_populates="articles")
    favorites: Mapped[list[ArticleFavorite]] = relationship(
        "ArticleFavorite",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments: Mapped[list[ArticleComment]] = relationship(
        "ArticleComment",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(ArticleComment.created_at, ArticleComment.comment_id)",
    )

    def __repr__(self) -> str:
        return f"<Article {self.slug!r}>"


class ArticleFavorite(Base):
    """A user marking an article as a favorite.

    Authors may favorite their own articles.
    """

    __tablename__ = "article_favorite"
    __table_args__ = (
        PrimaryKeyConstraint("article_id", "user_id", name="article_favorite_pkey"),
    )

    article_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("article.article_id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user.user_id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
