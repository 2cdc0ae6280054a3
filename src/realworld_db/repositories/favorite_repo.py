"""Data access helpers for article favorites."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, exists, func, insert, select

from realworld_db.models.article import ArticleFavorite
from realworld_db.repositories.base import Repository

__all__ = ["FavoriteRepository"]

logger = logging.getLogger(__name__)


class FavoriteRepository(Repository):
    """Many-to-many "user likes article" relation."""

    def favorite(self, article_id: uuid.UUID, user_id: uuid.UUID) -> ArticleFavorite:
        """Record that ``user_id`` favorited ``article_id``.

        Raises:
            ConstraintViolation: ``article_favorite_pkey`` when already
                favorited (callers map this to a no-op), or a foreign key
                violation for an unknown article or user.
        """
        with self.write():
            self.session.execute(
                insert(ArticleFavorite).values(article_id=article_id, user_id=user_id)
            )
        logger.debug("User %s favorited article %s", user_id, article_id)
        return self.session.get_one(ArticleFavorite, (article_id, user_id))

    def unfavorite(self, article_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Remove the favorite if present; returns whether a row was deleted."""
        with self.write():
            result = self.session.execute(
                delete(ArticleFavorite).where(
                    ArticleFavorite.article_id == article_id,
                    ArticleFavorite.user_id == user_id,
                )
            )
        return bool(result.rowcount)

    def is_favorited(self, article_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Return True if ``user_id`` has favorited ``article_id``."""
        with self.read():
            return bool(
                self.session.scalar(
                    select(
                        exists().where(
                            ArticleFavorite.article_id == article_id,
                            ArticleFavorite.user_id == user_id,
                        )
                    )
                )
            )

    def count(self, article_id: uuid.UUID) -> int:
        """Return how many users favorited ``article_id``.

        Computed from the relation on every call; no counter is stored.
        """
        with self.read():
            total = self.session.scalar(
                select(func.count()).select_from(ArticleFavorite).where(
                    ArticleFavorite.article_id == article_id
                )
            )
        return total or 0
