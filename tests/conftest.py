"""Shared fixtures for the session store test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dynamo_sessions.config import Settings, override_settings
from dynamo_sessions.main import create_app
from dynamo_sessions.session import InMemorySessionStore


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        session_secret="test-secret-key-for-sessions",
        session_store="memory",
        session_max_age=3600,
    )


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def app(test_settings, session_store):
    override_settings(test_settings)
    return create_app(session_store=session_store)


@pytest.fixture
def client(app) -> TestClient:
    """TestClient with cookie persistence."""
    return TestClient(app, cookies={})
