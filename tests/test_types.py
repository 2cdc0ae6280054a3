"""Tests for identifier generation and the portable column types."""

import uuid
from datetime import UTC, datetime, timedelta, timezone

from sqlalchemy.dialects import sqlite

from realworld_db.db.types import UTCDateTime, generate_id


def test_generate_id_is_time_based_with_multicast_node() -> None:
    ids = [generate_id() for _ in range(100)]

    assert len(set(ids)) == 100
    for value in ids:
        assert isinstance(value, uuid.UUID)
        assert value.version == 1
        # Multicast bit set: the node is random, never a real MAC address.
        assert value.node & 0x010000000000


def test_generate_id_timestamps_increase() -> None:
    first, second = generate_id(), generate_id()
    assert second.time >= first.time


def test_utc_datetime_normalises_to_utc() -> None:
    column_type = UTCDateTime()
    dialect = sqlite.dialect()
    plus_two = timezone(timedelta(hours=2))

    bound = column_type.process_bind_param(datetime(2024, 1, 1, 14, 0, tzinfo=plus_two), dialect)
    assert bound == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    assert bound.tzinfo is UTC

    loaded = column_type.process_result_value(datetime(2024, 1, 1, 12, 0), dialect)
    assert loaded == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    assert loaded.tzinfo is UTC

    assert column_type.process_bind_param(None, dialect) is None
