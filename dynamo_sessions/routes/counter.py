"""GET / — Per-session visit counter."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..dependencies import get_session

router = APIRouter()

COUNTER_KEY = "counter"


@router.get("/", response_class=PlainTextResponse)
async def counter(session: dict[str, Any] = Depends(get_session)):
    count = int(session.get(COUNTER_KEY, 0))
    session[COUNTER_KEY] = count + 1
    return f"Current count: {count}"
