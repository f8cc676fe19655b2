"""Example FastAPI app backed by server-side sessions.

Counts visits per session. Run with ``SESSION_STORE=dynamodb`` to keep
sessions in DynamoDB instead of process memory.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import aioboto3
from fastapi import FastAPI

from .config import get_settings
from .routes import counter, health, logout
from .session import DynamoDBSessionStore, InMemorySessionStore, SessionMiddleware, SessionStore
from .session.middleware import STATE_STORE_KEY

logger = logging.getLogger(__name__)


@asynccontextmanager
async def dynamodb_lifespan(app: FastAPI):
    """Open one DynamoDB resource for the process and publish the store."""
    s = get_settings()
    session = aioboto3.Session()
    async with session.resource(
        "dynamodb",
        endpoint_url=s.dynamodb_endpoint or None,
        region_name=s.aws_region,
    ) as dynamodb:
        logger.info("Sessions: DynamoDB table %s", s.dynamodb_table)
        yield {STATE_STORE_KEY: DynamoDBSessionStore(dynamodb, s.dynamodb_table)}


def create_app(*, session_store: SessionStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        session_store: Custom session store. When omitted, the
            ``session_store`` setting picks "memory" or "dynamodb".
    """
    s = get_settings()
    app_lifespan = None

    if session_store is not None:
        kind = "custom"
    elif s.session_store == "memory":
        kind = "memory"
        session_store = InMemorySessionStore()
    elif s.session_store == "dynamodb":
        kind = "dynamodb"
        app_lifespan = dynamodb_lifespan
    else:
        raise ValueError(f"Unknown session store {s.session_store!r}")

    app = FastAPI(title="Session Counter", lifespan=app_lifespan)
    app.state.session_store_kind = kind

    # Server-side sessions
    app.add_middleware(
        SessionMiddleware,
        secret=s.session_secret,
        store=session_store,
        max_age=s.session_max_age,
        https_only=s.session_https_only,
    )

    # Routes
    app.include_router(counter.router)
    app.include_router(logout.router)
    app.include_router(health.router)

    return app
