"""user table

Revision ID: 0002_user
Revises: 0001_setup
Create Date: 2024-01-01 00:00:01.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from realworld_db.db import ddl
from realworld_db.db.types import CaseInsensitiveText, UTCDateTime

# revision identifiers, used by Alembic.
revision: str = "0002_user"
down_revision: Union[str, Sequence[str], None] = "0001_setup"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_server_default() -> sa.TextClause | None:
    if op.get_bind().dialect.name == "postgresql":
        return sa.text("uuid_generate_v1mc()")
    return None


def upgrade() -> None:
    """Create the user table and its updated_at trigger."""
    user = op.create_table(
        "user",
        sa.Column("user_id", sa.Uuid(), nullable=False, server_default=_uuid_server_default()),
        # Unique through the case-insensitive collation, so "Bob" and "bob" collide.
        sa.Column("username", CaseInsensitiveText(), nullable=False),
        sa.Column("email", CaseInsensitiveText(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", UTCDateTime(), nullable=True),
        sa.PrimaryKeyConstraint("user_id", name="user_pkey"),
        sa.UniqueConstraint("username", name="user_username_key"),
        sa.UniqueConstraint("email", name="user_email_key"),
    )
    ddl.install_updated_at_trigger(op.get_bind(), user)


def downgrade() -> None:
    """Drop the user table."""
    op.drop_table("user")
