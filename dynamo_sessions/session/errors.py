"""Errors raised by session stores."""

from __future__ import annotations


class SessionStoreError(Exception):
    """Base class for every session store failure."""


class BackendError(SessionStoreError):
    """The storage backend failed. ``description`` is never empty."""

    def __init__(self, description: str) -> None:
        self.description = description or "unknown backend error"
        super().__init__(self.description)


class EncodeError(SessionStoreError):
    """The session payload could not be serialized for storage."""
