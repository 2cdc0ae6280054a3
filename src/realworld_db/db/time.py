# src/realworld_db/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime
from typing import Any


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def created_at_default(context: Any) -> datetime:
    """Column default that copies the row's ``created_at`` so both start equal."""
    created_at = context.get_current_parameters().get("created_at")
    return created_at if created_at is not None else utcnow()
