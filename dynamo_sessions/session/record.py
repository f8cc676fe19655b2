"""Session record types shared by the middleware and its stores."""

from __future__ import annotations

import base64
import binascii
import re
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Any

_ID_BYTES = 16
_ID_TEXT = re.compile(r"[A-Za-z0-9_-]{22}")


@dataclass(frozen=True)
class SessionId:
    """128-bit session identifier.

    The text form is the unpadded URL-safe base64 encoding of the 16
    little-endian bytes of ``value``. ``SessionId()`` is the empty id.
    """

    value: int = 0

    @classmethod
    def generate(cls) -> SessionId:
        return cls(int.from_bytes(secrets.token_bytes(_ID_BYTES), "little", signed=True))

    @classmethod
    def parse(cls, text: str) -> SessionId:
        """Parse the text form produced by ``str()``. Raises ValueError."""
        if not isinstance(text, str) or not _ID_TEXT.fullmatch(text):
            raise ValueError(f"Invalid session id {text!r}: expected 22 URL-safe base64 characters")
        padded = text + "=" * (-len(text) % 4)
        try:
            raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid session id {text!r}: {e}") from e
        if len(raw) != _ID_BYTES:
            raise ValueError(f"Invalid session id {text!r}: expected {_ID_BYTES} bytes, got {len(raw)}")
        return cls(int.from_bytes(raw, "little", signed=True))

    def __str__(self) -> str:
        raw = self.value.to_bytes(_ID_BYTES, "little", signed=True)
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


@dataclass
class Record:
    """A session as the middleware sees it.

    ``data`` is opaque to stores: any JSON-compatible mapping.
    ``expiry_date`` is the instant after which the session is stale.
    """

    id: SessionId
    data: dict[str, Any]
    expiry_date: datetime
