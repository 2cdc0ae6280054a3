# src/realworld_db/models/follow.py
"""Directed follow edges between users."""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, PrimaryKeyConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from realworld_db.db.session import Base
from realworld_db.db.time import utcnow
from realworld_db.db.types import UTCDateTime


class Follow(Base):
    """``following_user_id`` follows ``followed_user_id``.

    The primary key leads with the follower so it also serves
    "who am I following" lookups; "who follows me" scans the table.
    """

    __tablename__ = "follow"
    __table_args__ = (
        PrimaryKeyConstraint("following_user_id", "followed_user_id", name="follow_pkey"),
        CheckConstraint(
            "followed_user_id != following_user_id",
            name="user_cannot_follow_self",
        ),
    )

    following_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    followed_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user.user_id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, server_default=func.now()
    )
    # Nothing on this row is mutable, so a non-null value points at an unexpected write.
    updated_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
