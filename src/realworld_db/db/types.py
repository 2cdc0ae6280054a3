"""Portable column types and identifier generation.

PostgreSQL is the production backend; SQLite is supported for local
development and tests. Each type below picks the closest native
equivalent per dialect.
"""
from __future__ import annotations

import secrets
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator, TypeEngine

# ICU collation created by the setup migration (see realworld_db.db.ddl).
CASE_INSENSITIVE_COLLATION = "case_insensitive"

_MULTICAST_BIT = 0x010000000000


def generate_id() -> uuid.UUID:
    """Return a version 1 UUID with a random multicast node.

    Mirrors PostgreSQL's ``uuid_generate_v1mc()``: the timestamp prefix keeps
    new keys close together in B-tree indexes, while the random node makes
    values hard to predict and avoids leaking the host MAC address.
    """
    node = secrets.randbits(48) | _MULTICAST_BIT
    return uuid.uuid1(node=node)


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware timestamp that always round-trips as UTC.

    SQLite has no timezone support, so values are normalised to UTC before
    binding and naive values read back are tagged as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class CaseInsensitiveText(TypeDecorator[str]):
    """Text compared case-insensitively by the database.

    Equality, uniqueness and ordering ignore case while the stored value keeps
    its original spelling. The collation does not support ``LIKE``; pattern
    searches need an expression collated with the default collation instead.
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == "postgresql":
            return postgresql.TEXT(collation=CASE_INSENSITIVE_COLLATION)
        if dialect.name == "sqlite":
            # NOCASE only folds ASCII letters.
            return sqlite.TEXT(collation="NOCASE")
        return dialect.type_descriptor(Text())


# Stored inline as text[] on PostgreSQL, JSON array elsewhere.
TagList = postgresql.ARRAY(Text).with_variant(JSON(), "sqlite")
