"""Session store contract and the in-memory implementation."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from .record import Record, SessionId


@runtime_checkable
class SessionStore(Protocol):
    """Protocol for server-side session storage.

    Implementations raise SessionStoreError subclasses on failure.
    """

    async def save(self, record: Record) -> None:
        """Create or fully replace the record stored under ``record.id``."""
        ...

    async def load(self, session_id: SessionId) -> Record | None:
        """Load a record by ID. Returns None if there is no such record."""
        ...

    async def delete(self, session_id: SessionId) -> None:
        """Delete a record. Deleting a missing ID is not an error."""
        ...


class InMemorySessionStore:
    """In-memory session store for development/testing.

    Not suitable for production — sessions are lost on restart and not
    shared across processes. With no external sweeper, records past their
    expiry_date are dropped on load.
    """

    def __init__(self) -> None:
        self._store: dict[str, Record] = {}

    async def save(self, record: Record) -> None:
        self._store[str(record.id)] = copy.deepcopy(record)

    async def load(self, session_id: SessionId) -> Record | None:
        key = str(session_id)
        record = self._store.get(key)
        if record is None:
            return None
        if _is_expired(record.expiry_date):
            del self._store[key]
            return None
        return copy.deepcopy(record)

    async def delete(self, session_id: SessionId) -> None:
        self._store.pop(str(session_id), None)


def _is_expired(expiry_date: datetime) -> bool:
    if expiry_date.tzinfo is None:
        return expiry_date <= datetime.now()
    return expiry_date <= datetime.now(timezone.utc)
