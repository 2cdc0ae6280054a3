"""follow table

Revision ID: 0003_follow
Revises: 0002_user
Create Date: 2024-01-01 00:00:02.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from realworld_db.db import ddl
from realworld_db.db.types import UTCDateTime

# revision identifiers, used by Alembic.
revision: str = "0003_follow"
down_revision: Union[str, Sequence[str], None] = "0002_user"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the follow table."""
    follow = op.create_table(
        "follow",
        sa.Column("following_user_id", sa.Uuid(), nullable=False),
        sa.Column("followed_user_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False, server_default=sa.func.now()),
        # Expected to stay NULL; there is nothing to update on an edge.
        sa.Column("updated_at", UTCDateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ["following_user_id"], ["user.user_id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["followed_user_id"], ["user.user_id"], ondelete="CASCADE"
        ),
        sa.CheckConstraint(
            "followed_user_id != following_user_id", name="user_cannot_follow_self"
        ),
        # Follower first so the key also serves "who am I following".
        sa.PrimaryKeyConstraint("following_user_id", "followed_user_id", name="follow_pkey"),
    )
    ddl.install_updated_at_trigger(op.get_bind(), follow)


def downgrade() -> None:
    """Drop the follow table."""
    op.drop_table("follow")
