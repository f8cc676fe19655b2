"""Shared fixtures for integration tests against DynamoDB Local.

All integration tests are skipped unless DYNAMODB_ENDPOINT is set, so the
suite runs in CI without a database. Start one with:

    docker run -p 8000:8000 amazon/dynamodb-local

Required env vars:
    DYNAMODB_ENDPOINT       — e.g., http://localhost:8000

Optional env vars:
    AWS_REGION              — defaults to us-west-2
"""

from __future__ import annotations

import os
import uuid

import pytest


def _get_env(name: str, default: str = "") -> str:
    return os.environ.get(name, default)


pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def dynamodb_env():
    """Return DynamoDB Local connection settings or skip."""
    endpoint = _get_env("DYNAMODB_ENDPOINT")
    if not endpoint:
        pytest.skip("Integration tests require DYNAMODB_ENDPOINT")
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "local")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "local")
    return {
        "endpoint_url": endpoint,
        "region_name": _get_env("AWS_REGION", "us-west-2"),
    }


@pytest.fixture
def table_name() -> str:
    return f"sessions-{uuid.uuid4().hex[:8]}"
