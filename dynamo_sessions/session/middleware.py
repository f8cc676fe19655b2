"""ASGI server-side session middleware.

Stores a signed session ID in a cookie and delegates record storage to a
SessionStore. Expiry is on inactivity: every save pushes expiry_date to
now + max_age.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable

from itsdangerous import BadSignature, URLSafeTimedSerializer
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .backend import InMemorySessionStore, SessionStore
from .errors import SessionStoreError
from .record import Record, SessionId

logger = logging.getLogger(__name__)

COOKIE_NAME = "session"
MAX_AGE = 24 * 3600  # 1 day
STATE_STORE_KEY = "session_store"


class SessionMiddleware:
    """ASGI middleware for server-side sessions.

    Reads a signed session ID from a cookie, loads the record from the
    store, and attaches its data to request.state.session. On response,
    saves any modifications back.

    If ``store`` is omitted the middleware looks for one published under
    ``session_store`` in the lifespan state, then falls back to an
    InMemorySessionStore.
    """

    def __init__(
        self,
        app: ASGIApp,
        secret: str,
        store: SessionStore | None = None,
        cookie_name: str = COOKIE_NAME,
        max_age: int = MAX_AGE,
        https_only: bool = False,
        same_site: str = "lax",
    ) -> None:
        self.app = app
        self.signer = URLSafeTimedSerializer(secret)
        self.store = store
        self._fallback_store: SessionStore | None = None
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.https_only = https_only
        self.same_site = same_site

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        scope["state"] = scope.get("state", {})
        store = self._resolve_store(scope["state"])
        conn = HTTPConnection(scope)
        session_id = self._load_session_id(conn)
        initial_data: dict[str, Any] = {}
        is_new = True

        if session_id is not None:
            record = await self._call_store("load", store.load(session_id))
            if record is not None and self._is_usable(record, session_id):
                initial_data = record.data
                is_new = False
            else:
                session_id = None  # Expired or missing — will create new

        if session_id is None:
            session_id = SessionId.generate()

        scope["state"]["session"] = copy.deepcopy(initial_data)
        scope["state"]["session_id"] = session_id
        scope["state"]["session_destroyed"] = False

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                session_data: dict[str, Any] = scope["state"]["session"]
                destroyed: bool = scope["state"].get("session_destroyed", False)

                headers = MutableHeaders(scope=message)

                if destroyed:
                    if not is_new:
                        await self._call_store("delete", store.delete(session_id))
                    headers.append(
                        "set-cookie",
                        self._make_cookie(session_id, delete=True),
                    )
                elif session_data != initial_data or (is_new and session_data):
                    record = Record(
                        id=session_id,
                        data=session_data,
                        expiry_date=datetime.now(timezone.utc) + timedelta(seconds=self.max_age),
                    )
                    await self._call_store("save", store.save(record))
                    headers.append(
                        "set-cookie",
                        self._make_cookie(session_id),
                    )

            await send(message)

        await self.app(scope, receive, send_wrapper)

    def _resolve_store(self, state: dict[str, Any]) -> SessionStore:
        if self.store is not None:
            return self.store
        published = state.get(STATE_STORE_KEY)
        if published is not None:
            return published
        if self._fallback_store is None:
            logger.warning("No session store configured; using in-memory store")
            self._fallback_store = InMemorySessionStore()
        return self._fallback_store

    @staticmethod
    async def _call_store(operation: str, call: Awaitable[Any]) -> Any:
        try:
            return await call
        except SessionStoreError as e:
            logger.error("Session store %s failed: %s", operation, e)
            raise

    @staticmethod
    def _is_usable(record: Record, requested: SessionId) -> bool:
        if record.id != requested:
            logger.warning("Session store returned record %s for %s", record.id, requested)
            return False
        expiry = record.expiry_date
        now = datetime.now(timezone.utc) if expiry.tzinfo else datetime.now()
        return expiry > now

    def _load_session_id(self, conn: HTTPConnection) -> SessionId | None:
        raw = conn.cookies.get(self.cookie_name)
        if not raw:
            return None
        try:
            return SessionId.parse(self.signer.loads(raw, max_age=self.max_age))
        except (BadSignature, ValueError):
            return None

    def _make_cookie(self, session_id: SessionId, *, delete: bool = False) -> str:
        if delete:
            value = ""
            max_age = 0
        else:
            value = self.signer.dumps(str(session_id))
            max_age = self.max_age

        parts = [
            f"{self.cookie_name}={value}",
            f"Max-Age={max_age}",
            "Path=/",
            "HttpOnly",
            f"SameSite={self.same_site}",
        ]
        if self.https_only:
            parts.append("Secure")
        return "; ".join(parts)
