"""Shared plumbing for repositories."""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import ObjectDeletedError, StaleDataError

from realworld_db.db.session import Base
from realworld_db.errors import NotFound, translate_errors

__all__ = ["Repository"]


def _missing(target: Any) -> NotFound:
    state = inspect(target)
    identity = state.identity or ()
    key = identity[0] if len(identity) == 1 else identity
    return NotFound(state.mapper.local_table.name, key)


class Repository:
    """Base for repositories bound to a synchronous SQLAlchemy session.

    Repositories flush but never commit; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @contextmanager
    def write(self, target: Any = None) -> Iterator[None]:
        """Run a write inside a savepoint and translate database errors.

        A rejected write rolls back to the savepoint only, so the caller's
        transaction stays usable.

        Args:
            target: Instance being modified. If its row has been deleted in
                the meantime, :class:`NotFound` is raised for it.
        """
        try:
            with translate_errors(Base.metadata):
                with self.session.begin_nested():
                    yield
                    self.session.flush()
        except (StaleDataError, ObjectDeletedError) as exc:
            if target is None:
                raise
            raise _missing(target) from exc

    def delete_cascading(self, instance: Any) -> Any:
        """Delete ``instance`` and forget rows the database cascaded away.

        ``ON DELETE CASCADE`` runs inside the database, so dependent objects
        still sitting in the identity map are expired; a later lookup reloads
        them and finds nothing. Returns the deleted row's primary key.
        """
        with self.write(instance):
            key = inspect(instance).identity
            self.session.delete(instance)
        self.session.expire_all()
        return key[0] if key and len(key) == 1 else key

    @contextmanager
    def read(self) -> Iterator[None]:
        """Translate connectivity errors raised by queries."""
        with translate_errors(Base.metadata):
            yield

    @property
    def dialect_name(self) -> str:
        return self.session.get_bind().dialect.name
