"""ORM write-path hooks.

The database triggers from :mod:`realworld_db.db.ddl` cover every statement
that reaches the database; this hook stamps ``updated_at`` on the ORM side
too, so the value is present on the instance right after a flush.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import Connection, event, inspect
from sqlalchemy.orm import Mapper, attributes, object_session

from realworld_db.db.session import Base
from realworld_db.db.time import utcnow

UPDATED_AT = "updated_at"


def has_observable_changes(target: Any) -> bool:
    """Return True if any column attribute other than ``updated_at`` has a net change.

    Assigning a value equal to the loaded one does not count as a change.
    """
    mapper = inspect(target).mapper
    for prop in mapper.column_attrs:
        if prop.key == UPDATED_AT:
            continue
        if attributes.get_history(
            target, prop.key, passive=attributes.PASSIVE_NO_INITIALIZE
        ).has_changes():
            return True
    return False


def touch_updated_at(target: Any) -> bool:
    """Set ``target.updated_at`` to now when the pending write changes something.

    Returns:
        True if the timestamp was refreshed.
    """
    history = attributes.get_history(target, UPDATED_AT, passive=attributes.PASSIVE_NO_INITIALIZE)
    if history.has_changes():
        # An explicit value from the caller wins.
        return False
    if not has_observable_changes(target):
        return False
    target.updated_at = utcnow()
    return True


@event.listens_for(Base, "before_update", propagate=True)
def _before_update(mapper: Mapper[Any], connection: Connection, target: Any) -> None:
    if UPDATED_AT not in mapper.columns:
        return
    if object_session(target) is None:
        return
    touch_updated_at(target)
