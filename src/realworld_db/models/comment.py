# src/realworld_db/models/comment.py
"""SQLAlchemy model for article comments."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realworld_db.db.session import Base
from realworld_db.db.time import created_at_default, utcnow
from realworld_db.db.types import UTCDateTime

if TYPE_CHECKING:
    from realworld_db.models.article import Article
    from realworld_db.models.user import User


class ArticleComment(Base):
    """Comment attached to an article.

    ``comment_id`` comes from a sequence: concurrent inserts and rolled back
    transactions leave gaps and can commit out of order, so it is an identity
    only. Display order is ``created_at`` with ``comment_id`` as tie-breaker.
    """

    __tablename__ = "article_comment"
    __table_args__ = (
        Index("article_comment_article_id_created_at_idx", "article_id", "created_at"),
    )

    # SQLite only autoincrements INTEGER PRIMARY KEY columns.
    comment_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
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
    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=created_at_default, server_default=func.now()
    )

    article: Mapped[Article] = relationship("Article", back_populates="comments")
    author: Mapped[User] = relationship("User")
