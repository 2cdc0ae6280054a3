"""Data access helpers for articles."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import Select, select
from sqlalchemy.sql import func

from realworld_db.errors import NotFound
from realworld_db.models.article import Article, ArticleFavorite
from realworld_db.models.follow import Follow
from realworld_db.models.user import User
from realworld_db.repositories.base import Repository
from realworld_db.schemas.article import ArticleCreate, ArticleUpdate
from realworld_db.utils.slug import slugify

__all__ = ["ArticleRepository"]

logger = logging.getLogger(__name__)


class ArticleRepository(Repository):
    """CRUD and listing operations for articles.

    Listings are returned newest first.
    """

    def create(self, author_id: uuid.UUID, data: ArticleCreate) -> Article:
        """Insert a new article.

        Args:
            author_id: Owning user.
            data: Article fields; the slug is derived from the title when absent.

        Raises:
            ConstraintViolation: ``article_slug_key`` when the slug is taken.
                Disambiguating (for example by suffixing) is up to the caller.
        """
        article = Article(
            user_id=author_id,
            slug=data.slug or slugify(data.title),
            title=data.title,
            description=data.description,
            body=data.body,
            tag_list=list(data.tag_list),
        )
        with self.write():
            self.session.add(article)
        logger.debug("Created article %s (%s)", article.article_id, article.slug)
        return article

    def get(self, article_id: uuid.UUID) -> Article:
        """Return an article by primary key."""
        with self.read():
            article = self.session.get(Article, article_id)
        if article is None:
            raise NotFound("article", article_id)
        return article

    def get_by_slug(self, slug: str) -> Article:
        """Return an article by slug."""
        with self.read():
            article = self.session.scalars(select(Article).where(Article.slug == slug)).first()
        if article is None:
            raise NotFound("article", slug)
        return article

    def update(self, article: Article, update_data: ArticleUpdate) -> Article:
        """Apply a partial update.

        A new title does not regenerate the slug; pass ``slug`` explicitly to
        change the permalink.

        Raises:
            ConstraintViolation: If an explicit new slug is taken.
        """
        update_dict = update_data.model_dump(exclude_unset=True)
        with self.write(article):
            for key, value in update_dict.items():
                setattr(article, key, value)
        return article

    def delete(self, article: Article) -> None:
        """Remove an article along with its favorites and comments."""
        article_id = self.delete_cascading(article)
        logger.info("Deleted article %s and dependent rows", article_id)

    def _newest_first(self, stmt: Select[tuple[Article]]) -> list[Article]:
        with self.read():
            result = self.session.scalars(
                stmt.order_by(Article.created_at.desc(), Article.article_id)
            )
            return list(result)

    def with_tag(self, tag: str) -> list[Article]:
        """Return articles carrying ``tag``.

        PostgreSQL answers this from the GIN index with ``@>``; SQLite expands
        the JSON array with ``json_each``.
        """
        if self.dialect_name == "postgresql":
            condition = Article.tag_list.contains([tag])
        else:
            tags = func.json_each(Article.tag_list).table_valued("value")
            condition = select(tags.c.value).where(tags.c.value == tag).exists()
        return self._newest_first(select(Article).where(condition))

    def by_author(self, username: str) -> list[Article]:
        """Return articles written by ``username`` (case-insensitive)."""
        stmt = select(Article).join(User, User.user_id == Article.user_id).where(
            User.username == username
        )
        return self._newest_first(stmt)

    def favorited_by(self, username: str) -> list[Article]:
        """Return articles favorited by ``username`` (case-insensitive)."""
        stmt = (
            select(Article)
            .join(ArticleFavorite, ArticleFavorite.article_id == Article.article_id)
            .join(User, User.user_id == ArticleFavorite.user_id)
            .where(User.username == username)
        )
        return self._newest_first(stmt)

    def feed(self, user_id: uuid.UUID) -> list[Article]:
        """Return articles by authors that ``user_id`` follows."""
        stmt = (
            select(Article)
            .join(Follow, Follow.followed_user_id == Article.user_id)
            .where(Follow.following_user_id == user_id)
        )
        return self._newest_first(stmt)

    def all_tags(self) -> list[str]:
        """Return every distinct tag in use, sorted.

        Reads the tag list of every article; there is no aggregate to consult.
        """
        with self.read():
            tag_lists = self.session.scalars(select(Article.tag_list))
            return sorted({tag for tags in tag_lists for tag in tags})
