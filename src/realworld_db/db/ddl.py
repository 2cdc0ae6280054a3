"""Database-side support objects: collation, update triggers, connection pragmas.

Everything here is emitted automatically by ``Base.metadata.create_all`` and
reused by the Alembic revisions so both paths produce the same schema.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any

from sqlalchemy import Connection, Table, event
from sqlalchemy.engine import Engine

from realworld_db.db.session import Base

logger = logging.getLogger(__name__)

UPDATED_AT_COLUMN = "updated_at"

# gives us uuid_generate_v1mc()
PG_UUID_EXTENSION = 'CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'

PG_SET_UPDATED_AT_FUNCTION = """
CREATE OR REPLACE FUNCTION set_updated_at()
    RETURNS TRIGGER AS
$$
BEGIN
    NEW.updated_at = NOW();
    RETURN NEW;
END;
$$ LANGUAGE plpgsql
"""

PG_TRIGGER_UPDATED_AT_FUNCTION = """
CREATE OR REPLACE FUNCTION trigger_updated_at(tablename regclass)
    RETURNS VOID AS
$$
BEGIN
    EXECUTE format('CREATE TRIGGER set_updated_at
        BEFORE UPDATE
        ON %s
        FOR EACH ROW
        WHEN (OLD is distinct from NEW)
    EXECUTE FUNCTION set_updated_at();', tablename);
END;
$$ LANGUAGE plpgsql
"""

# Level 2 strength compares base letters and accents but ignores case.
PG_CASE_INSENSITIVE_COLLATION = (
    "CREATE COLLATION IF NOT EXISTS case_insensitive "
    "(provider = icu, locale = 'und-u-ks-level2', deterministic = false)"
)

# Matches SQLAlchemy's SQLite DATETIME storage format (microsecond precision).
_SQLITE_NOW = "strftime('%Y-%m-%d %H:%M:%f000', 'now')"


def _execute(connection: Connection, statement: str) -> None:
    # Sent without a parameter collection so "%" in PL/pgSQL bodies is left alone.
    connection.exec_driver_sql(statement, execution_options={"no_parameters": True})


def install_database_support(connection: Connection) -> None:
    """Create the extension, collation and trigger functions tables rely on."""
    if connection.dialect.name != "postgresql":
        return
    for statement in (
        PG_UUID_EXTENSION,
        PG_SET_UPDATED_AT_FUNCTION,
        PG_TRIGGER_UPDATED_AT_FUNCTION,
        PG_CASE_INSENSITIVE_COLLATION,
    ):
        _execute(connection, statement)


def sqlite_updated_at_trigger(table: Table, preparer: Any) -> str:
    """Return an ``AFTER UPDATE`` trigger refreshing ``updated_at`` on real changes.

    The trigger stays quiet when the statement already wrote ``updated_at``
    itself, and compares text byte-wise so a case-only edit of a
    ``NOCASE`` column still counts as a change.
    """
    quoted_table = preparer.format_table(table)
    changed = " OR ".join(
        f"OLD.{preparer.quote(column.name)} IS NOT NEW.{preparer.quote(column.name)} COLLATE BINARY"
        for column in table.columns
        if column.name != UPDATED_AT_COLUMN
    )
    trigger_name = preparer.quote(f"{table.name}_set_updated_at")
    return (
        f"CREATE TRIGGER IF NOT EXISTS {trigger_name}\n"
        f"AFTER UPDATE ON {quoted_table}\n"
        f"FOR EACH ROW\n"
        f"WHEN NEW.updated_at IS OLD.updated_at AND ({changed})\n"
        f"BEGIN\n"
        f"    UPDATE {quoted_table} SET updated_at = {_SQLITE_NOW} WHERE rowid = NEW.rowid;\n"
        f"END"
    )


def install_updated_at_trigger(connection: Connection, table: Table) -> None:
    """Attach the touch-on-change trigger to ``table`` for the connected dialect."""
    if UPDATED_AT_COLUMN not in table.columns:
        return
    dialect = connection.dialect
    if dialect.name == "postgresql":
        quoted = dialect.identifier_preparer.format_table(table).replace("'", "''")
        _execute(connection, f"SELECT trigger_updated_at('{quoted}')")
    elif dialect.name == "sqlite":
        _execute(connection, sqlite_updated_at_trigger(table, dialect.identifier_preparer))
    else:
        logger.warning(
            "No updated_at trigger for dialect %s; only ORM writes will refresh %s.updated_at",
            dialect.name,
            table.name,
        )
        return
    logger.debug("Installed updated_at trigger on %s", table.name)


@event.listens_for(Base.metadata, "before_create")
def _before_create(target: Any, connection: Connection, **kw: Any) -> None:
    install_database_support(connection)


@event.listens_for(Base.metadata, "after_create")
def _after_create(target: Any, connection: Connection, tables: Any = (), **kw: Any) -> None:
    for table in tables:
        install_updated_at_trigger(connection, table)


@event.listens_for(Engine, "connect")
def _sqlite_on_connect(dbapi_connection: Any, connection_record: Any) -> None:
    """Enforce foreign keys and let SQLAlchemy own transaction boundaries on SQLite.

    Cascading deletes depend on ``foreign_keys``; disabling pysqlite's implicit
    transaction handling is required for SAVEPOINT to behave.
    """
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


@event.listens_for(Engine, "begin")
def _sqlite_on_begin(conn: Connection) -> None:
    if conn.dialect.name == "sqlite":
        conn.exec_driver_sql("BEGIN")
