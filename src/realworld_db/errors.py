"""Error taxonomy surfaced by the data layer.

Database exceptions are translated into three outcomes the calling layer can
act on: the row is missing, a constraint rejected the write, or the database
could not be reached. Nothing here retries.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from sqlalchemy import MetaData
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Base exception for data layer failures."""


class NotFound(StoreError):
    """Raised when a lookup by id, slug, username or email yields nothing."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class ConstraintKind(str, Enum):
    """Family of the violated constraint."""

    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    NOT_NULL = "not_null"
    UNKNOWN = "unknown"


class ConstraintViolation(StoreError):
    """Raised when the database rejects a write that would break an invariant.

    Attributes:
        constraint: Name of the violated constraint when the backend reports it
            (``user_username_key``, ``user_cannot_follow_self``, ...).
        kind: The constraint family.
    """

    def __init__(
        self,
        message: str,
        *,
        constraint: str | None = None,
        kind: ConstraintKind = ConstraintKind.UNKNOWN,
    ) -> None:
        super().__init__(message)
        self.constraint = constraint
        self.kind = kind


class ConnectivityFailure(StoreError):
    """Raised when the database is unreachable or the connection dropped."""


# PostgreSQL SQLSTATE codes for integrity violations.
_SQLSTATE_KINDS = {
    "23505": ConstraintKind.UNIQUE,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23514": ConstraintKind.CHECK,
    "23502": ConstraintKind.NOT_NULL,
}

# Connection exception (08) and operator intervention shutdowns (57P0x).
_SQLSTATE_UNREACHABLE = ("08", "57P")

_SQLITE_UNREACHABLE = frozenset({"SQLITE_CANTOPEN", "SQLITE_NOTADB"})

_SQLITE_PATTERNS = (
    (re.compile(r"UNIQUE constraint failed: (?P<columns>.+)"), ConstraintKind.UNIQUE),
    (re.compile(r"CHECK constraint failed: (?P<name>\w+)"), ConstraintKind.CHECK),
    (re.compile(r"NOT NULL constraint failed: (?P<columns>.+)"), ConstraintKind.NOT_NULL),
    (re.compile(r"FOREIGN KEY constraint failed"), ConstraintKind.FOREIGN_KEY),
)


def _sqlite_unique_name(columns: str, metadata: MetaData | None) -> str | None:
    """Map ``"table.col, table.col"`` to the declared constraint name."""
    qualified = [part.strip() for part in columns.split(",")]
    table_name = qualified[0].rsplit(".", 1)[0]
    column_names = {part.rsplit(".", 1)[-1] for part in qualified}
    if metadata is None or table_name not in metadata.tables:
        return None
    table = metadata.tables[table_name]
    if {column.name for column in table.primary_key.columns} == column_names:
        name = table.primary_key.name
        return str(name) if isinstance(name, str) else None
    for constraint in table.constraints:
        names = {column.name for column in getattr(constraint, "columns", ())}
        if names == column_names and isinstance(constraint.name, str):
            return str(constraint.name)
    return None


def describe_integrity_error(
    exc: IntegrityError, metadata: MetaData | None = None
) -> ConstraintViolation:
    """Build a :class:`ConstraintViolation` naming the constraint behind ``exc``."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        diag = getattr(orig, "diag", None)
        name = getattr(diag, "constraint_name", None)
        kind = _SQLSTATE_KINDS.get(sqlstate, ConstraintKind.UNKNOWN)
        return ConstraintViolation(str(orig).strip(), constraint=name, kind=kind)

    message = str(orig)
    for pattern, kind in _SQLITE_PATTERNS:
        match = pattern.search(message)
        if match is None:
            continue
        groups = match.groupdict()
        name = groups.get("name")
        if kind is ConstraintKind.UNIQUE:
            name = _sqlite_unique_name(groups["columns"], metadata)
        return ConstraintViolation(message, constraint=name, kind=kind)
    return ConstraintViolation(message)


def is_connectivity_error(exc: Exception) -> bool:
    """Return True if ``exc`` means the database could not be reached.

    Other operational errors, such as serialization failures or SQLite's
    "database is locked", are conflicts for the caller to resolve.
    """
    if isinstance(exc, (DisconnectionError, PoolTimeoutError)):
        return True
    if not isinstance(exc, DBAPIError):
        return False
    if exc.connection_invalidated or isinstance(exc, InterfaceError):
        return True
    if not isinstance(exc, OperationalError):
        return False
    orig = exc.orig
    if getattr(orig, "sqlite_errorname", None) in _SQLITE_UNREACHABLE:
        return True
    if not hasattr(orig, "sqlstate"):
        return False
    # psycopg leaves sqlstate unset when the failure happened client side,
    # for example while connecting.
    sqlstate = orig.sqlstate
    return sqlstate is None or sqlstate.startswith(_SQLSTATE_UNREACHABLE)


@contextmanager
def translate_errors(metadata: MetaData | None = None) -> Iterator[None]:
    """Re-raise SQLAlchemy errors as :class:`StoreError` subclasses.

    Args:
        metadata: Used to resolve constraint names from SQLite messages,
            which only list the offending columns.
    """
    try:
        yield
    except IntegrityError as exc:
        violation = describe_integrity_error(exc, metadata)
        logger.info(
            "Write rejected by %s constraint %s",
            violation.kind.value,
            violation.constraint or "<unnamed>",
        )
        raise violation from exc
    except Exception as exc:
        if not is_connectivity_error(exc):
            raise
        logger.warning("Database unreachable: %s", exc)
        raise ConnectivityFailure(str(exc)) from exc
