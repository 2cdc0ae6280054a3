"""database support objects

Revision ID: 0001_setup
Revises:
Create Date: 2024-01-01 00:00:00.000000

Installs what every table relies on: the uuid-ossp extension, the
``set_updated_at`` trigger function with its ``trigger_updated_at`` helper,
and the ``case_insensitive`` ICU collation. Only PostgreSQL needs these;
on SQLite the revision is a no-op.
"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op

from realworld_db.db import ddl

# revision identifiers, used by Alembic.
revision: str = "0001_setup"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create extension, trigger functions and collation."""
    ddl.install_database_support(op.get_bind())


def downgrade() -> None:
    """Drop the support objects."""
    if op.get_bind().dialect.name != "postgresql":
        return
    op.execute("DROP COLLATION IF EXISTS case_insensitive")
    op.execute("DROP FUNCTION IF EXISTS trigger_updated_at(regclass)")
    op.execute("DROP FUNCTION IF EXISTS set_updated_at()")
