"""Data access helpers for the follow graph."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, exists, insert, select

from realworld_db.models.follow import Follow
from realworld_db.repositories.base import Repository

__all__ = ["FollowRepository"]

logger = logging.getLogger(__name__)


class FollowRepository(Repository):
    """Directed follow edges between users."""

    def follow(self, follower_id: uuid.UUID, followee_id: uuid.UUID) -> Follow:
        """Create the edge ``follower_id -> followee_id``.

        Following twice is not silently accepted; callers wanting idempotent
        behaviour catch the violation.

        Raises:
            ConstraintViolation: ``user_cannot_follow_self`` for a self-follow,
                ``follow_pkey`` for an existing edge, or a foreign key
                violation when either user does not exist.
        """
        with self.write():
            # Core insert: an ORM add would clash with an edge already in the identity map.
            self.session.execute(
                insert(Follow).values(
                    following_user_id=follower_id,
                    followed_user_id=followee_id,
                )
            )
        edge = self.session.get_one(Follow, (follower_id, followee_id))
        logger.debug("User %s now follows %s", follower_id, followee_id)
        return edge

    def unfollow(self, follower_id: uuid.UUID, followee_id: uuid.UUID) -> bool:
        """Remove the edge if present.

        Returns:
            True if an edge was deleted, False if there was none.
        """
        with self.write():
            result = self.session.execute(
                delete(Follow)
                .where(
                    Follow.following_user_id == follower_id,
                    Follow.followed_user_id == followee_id,
                )
            )
        return bool(result.rowcount)

    def is_following(self, follower_id: uuid.UUID, followee_id: uuid.UUID) -> bool:
        """Return True if ``follower_id`` follows ``followee_id``."""
        with self.read():
            return bool(
                self.session.scalar(
                    select(
                        exists().where(
                            Follow.following_user_id == follower_id,
                            Follow.followed_user_id == followee_id,
                        )
                    )
                )
            )

    def following_ids(self, user_id: uuid.UUID) -> list[uuid.UUID]:
        """Return the users ``user_id`` follows (primary key prefix scan)."""
        with self.read():
            result = self.session.scalars(
                select(Follow.followed_user_id)
                .where(Follow.following_user_id == user_id)
                .order_by(Follow.created_at)
            )
            return list(result)

    def follower_ids(self, user_id: uuid.UUID) -> list[uuid.UUID]:
        """Return the users following ``user_id``.

        No index covers this direction; it scans the table.
        """
        with self.read():
            result = self.session.scalars(
                select(Follow.following_user_id)
                .where(Follow.followed_user_id == user_id)
                .order_by(Follow.created_at)
            )
            return list(result)
