"""article and article_favorite tables

Revision ID: 0004_article
Revises: 0003_follow
Create Date: 2024-01-01 00:00:03.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from realworld_db.db import ddl
from realworld_db.db.types import TagList, UTCDateTime

# revision identifiers, used by Alembic.
revision: str = "0004_article"
down_revision: Union[str, Sequence[str], None] = "0003_follow"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_server_default() -> sa.TextClause | None:
    if op.get_bind().dialect.name == "postgresql":
        return sa.text("uuid_generate_v1mc()")
    return None


def upgrade() -> None:
    """Create article and article_favorite with their triggers and tag index."""
    bind = op.get_bind()

    article = op.create_table(
        "article",
        sa.Column("article_id", sa.Uuid(), nullable=False, server_default=_uuid_server_default()),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("tag_list", TagList, nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", UTCDateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["user_id"], ["user.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("article_id", name="article_pkey"),
        sa.UniqueConstraint("slug", name="article_slug_key"),
    )
    ddl.install_updated_at_trigger(bind, article)
    op.create_index("article_tags_gin", "article", ["tag_list"], postgresql_using="gin")

    favorite = op.create_table(
        "article_favorite",
        sa.Column("article_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", UTCDateTime(), nullable=True),
        sa.ForeignKeyConstraint(["article_id"], ["article.article_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("article_id", "user_id", name="article_favorite_pkey"),
    )
    ddl.install_updated_at_trigger(bind, favorite)


def downgrade() -> None:
    """Drop article_favorite and article."""
    op.drop_table("article_favorite")
    op.drop_index("article_tags_gin", table_name="article")
    op.drop_table("article")
