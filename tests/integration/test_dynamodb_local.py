"""Integration test: DynamoDBSessionStore against DynamoDB Local."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import aioboto3
import pytest

from dynamo_sessions.session import DynamoDBSessionStore, DynamoDBStoreError, Record, SessionId

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def _create_table(dynamodb, name):
    table = await dynamodb.create_table(
        TableName=name,
        KeySchema=[{"AttributeName": "session_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "session_id", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    await table.wait_until_exists()
    return table


async def test_store_lifecycle(dynamodb_env, table_name):
    expiry = datetime.now(timezone.utc) + timedelta(minutes=10)
    sid = SessionId.generate()

    async with aioboto3.Session().resource("dynamodb", **dynamodb_env) as dynamodb:
        table = await _create_table(dynamodb, table_name)
        try:
            store = DynamoDBSessionStore(dynamodb, table_name)

            assert await store.load(sid) is None

            await store.save(Record(sid, {"counter": 0, "ratio": 0.5}, expiry))
            assert await store.load(sid) == Record(sid, {"counter": 0, "ratio": 0.5}, expiry)

            await store.save(Record(sid, {"other": True}, expiry))
            assert (await store.load(sid)).data == {"other": True}

            await store.delete(sid)
            await store.delete(sid)
            assert await store.load(sid) is None
        finally:
            await table.delete()


async def test_missing_table_is_backend_error(dynamodb_env, table_name):
    async with aioboto3.Session().resource("dynamodb", **dynamodb_env) as dynamodb:
        store = DynamoDBSessionStore(dynamodb, table_name)
        with pytest.raises(DynamoDBStoreError) as exc_info:
            await store.load(SessionId.generate())

    assert "ResourceNotFoundException" in exc_info.value.description
