"""FastAPI dependency injection: session access."""

from __future__ import annotations

from typing import Any

from fastapi import Request


def get_session(request: Request) -> dict[str, Any]:
    """Get the session dict from request state."""
    return request.state.session


def destroy_session(request: Request) -> None:
    """Mark the session for destruction."""
    request.state.session_destroyed = True
    request.state.session.clear()
