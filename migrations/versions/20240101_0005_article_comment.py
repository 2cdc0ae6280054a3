"""article_comment table

Revision ID: 0005_article_comment
Revises: 0004_article
Create Date: 2024-01-01 00:00:04.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from realworld_db.db import ddl
from realworld_db.db.types import UTCDateTime

# revision identifiers, used by Alembic.
revision: str = "0005_article_comment"
down_revision: Union[str, Sequence[str], None] = "0004_article"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create article_comment and the (article_id, created_at) index."""
    comment = op.create_table(
        "article_comment",
        # Sequence-backed: gaps and out-of-order commits are expected.
        sa.Column(
            "comment_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            nullable=False,
            autoincrement=True,
        ),
        sa.Column("article_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", UTCDateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["article_id"], ["article.article_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("comment_id", name="article_comment_pkey"),
    )
    ddl.install_updated_at_trigger(op.get_bind(), comment)
    op.create_index(
        "article_comment_article_id_created_at_idx",
        "article_comment",
        ["article_id", "created_at"],
    )


def downgrade() -> None:
    """Drop article_comment."""
    op.drop_index("article_comment_article_id_created_at_idx", table_name="article_comment")
    op.drop_table("article_comment")
