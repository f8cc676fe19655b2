"""Conversion between session records and DynamoDB items.

Item layout::

    {
        "session_id": "<id text>",           # partition key
        "record": {
            "id": "<id text>",
            "data": "<JSON-encoded payload>",
            "expiry_date": "<ISO-8601 instant>",
        },
        "expireAt": 1767225600,              # epoch seconds, optional
    }

``record`` reproduces the middleware's record exactly. ``expireAt`` exists
for DynamoDB's TTL sweeper; enable TTL on that attribute for automatic
cleanup. The payload is stored as a JSON string because DynamoDB numbers
reject Python floats.

``expiry_date`` comes back with a fixed UTC offset, not the original
tzinfo. The instant and offset are preserved, but PEP 495 makes aware
datetimes in a DST fold or gap compare unequal across different tzinfos,
so compare such values with ``timestamp()`` and ``utcoffset()``.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any

from .errors import EncodeError
from .record import Record, SessionId

logger = logging.getLogger(__name__)

KEY_ATTRIBUTE = "session_id"
EXPIRE_AT_ATTRIBUTE = "expireAt"


def encode(record: Record) -> dict[str, Any]:
    """Build the DynamoDB item for a record.

    Raises EncodeError if ``record.data`` is not JSON-serializable.
    """
    try:
        data = json.dumps(record.data)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Session data is not JSON-serializable: {e}") from e

    session_id = str(record.id)
    item: dict[str, Any] = {
        KEY_ATTRIBUTE: session_id,
        "record": {
            "id": session_id,
            "data": data,
            "expiry_date": record.expiry_date.isoformat(),
        },
    }
    expire_at = to_epoch_seconds(record.expiry_date)
    if expire_at is not None:
        item[EXPIRE_AT_ATTRIBUTE] = expire_at
    return item


def decode(item: dict[str, Any]) -> Record:
    """Rebuild a record from a DynamoDB item.

    An unparsable stored id decodes to the empty SessionId instead of
    failing. A missing ``record`` or an unreadable ``data``/``expiry_date``
    raises KeyError, TypeError or ValueError.
    """
    stored = item["record"]
    raw_id = stored["id"]
    try:
        session_id = SessionId.parse(raw_id)
    except (TypeError, ValueError):
        logger.warning("Stored session id %r is not a valid id", raw_id)
        session_id = SessionId()
    return Record(
        id=session_id,
        data=json.loads(stored["data"]),
        expiry_date=datetime.fromisoformat(stored["expiry_date"]),
    )


def to_epoch_seconds(instant: datetime) -> int | None:
    """Whole Unix seconds for ``instant``, or None if that is not well defined.

    A wall-clock time that a DST transition repeats or skips maps to two
    different instants depending on ``fold``; those get no value.
    """
    try:
        first = instant.replace(fold=0).timestamp()
        second = instant.replace(fold=1).timestamp()
    except (OverflowError, OSError, ValueError):
        return None
    if first != second:
        return None
    return math.floor(first)
