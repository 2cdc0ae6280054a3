"""Data access helpers for article comments."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select

from realworld_db.errors import NotFound
from realworld_db.models.comment import ArticleComment
from realworld_db.repositories.base import Repository
from realworld_db.schemas.comment import CommentCreate

__all__ = ["CommentRepository"]

logger = logging.getLogger(__name__)


class CommentRepository(Repository):
    """Comments on articles, listed in creation order."""

    def create(
        self,
        article_id: uuid.UUID,
        author_id: uuid.UUID,
        data: CommentCreate,
    ) -> ArticleComment:
        """Append a comment to an article.

        Raises:
            ConstraintViolation: If the article or author does not exist.
        """
        comment = ArticleComment(article_id=article_id, user_id=author_id, body=data.body)
        with self.write():
            self.session.add(comment)
        logger.debug("Added comment %s to article %s", comment.comment_id, article_id)
        return comment

    def get(self, comment_id: int) -> ArticleComment:
        """Return a comment by identifier."""
        with self.read():
            comment = self.session.get(ArticleComment, comment_id)
        if comment is None:
            raise NotFound("comment", comment_id)
        return comment

    def update_body(self, comment: ArticleComment, body: str) -> ArticleComment:
        """Replace the comment text; ``updated_at`` moves only if it differs."""
        with self.write(comment):
            comment.body = body
        return comment

    def delete(self, comment: ArticleComment) -> None:
        """Remove a single comment."""
        with self.write():
            self.session.delete(comment)

    def for_article(self, article_id: uuid.UUID) -> list[ArticleComment]:
        """Return an article's comments in display order.

        Ordered by ``created_at``; ``comment_id`` only breaks ties between
        equal timestamps, since identifiers can commit out of order.
        """
        with self.read():
            result = self.session.scalars(
                select(ArticleComment)
                .where(ArticleComment.article_id == article_id)
                .order_by(ArticleComment.created_at, ArticleComment.comment_id)
            )
            return list(result)
