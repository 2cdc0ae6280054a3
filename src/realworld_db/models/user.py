# src/realworld_db/models/user.py
"""SQLAlchemy model for user accounts."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realworld_db.db.session import Base
from realworld_db.db.time import utcnow
from realworld_db.db.types import CaseInsensitiveText, UTCDateTime, generate_id

if TYPE_CHECKING:
    from realworld_db.models.article import Article


class User(Base):
    """Account identity, credentials and public profile.

    ``username`` and ``email`` are unique regardless of case and keep the
    spelling they were registered with.
    """

    # Quoted by SQLAlchemy since "user" is a reserved word.
    __tablename__ = "user"
    __table_args__ = (
        UniqueConstraint("username", name="user_username_key"),
        UniqueConstraint("email", name="user_email_key"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=generate_id)
    username: Mapped[str] = mapped_column(CaseInsensitiveText, nullable=False)
    email: Mapped[str] = mapped_column(CaseInsensitiveText, nullable=False)
    # Always present, empty until the user writes one.
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Argon2id PHC string; plaintext never reaches this table.
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    # Immutable by convention after insert.
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, server_default=func.now()
    )
    # NULL until the first change after creation.
    updated_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    articles: Mapped[list[Article]] = relationship(
        "Article",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.username!r}>"
