"""DynamoDB session store for production deployments."""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from . import codec
from .errors import BackendError
from .record import Record, SessionId

logger = logging.getLogger(__name__)


class DynamoDBStoreError(BackendError):
    """A DynamoDB call failed or returned an unreadable item.

    ``cause`` is the original exception.
    """

    def __init__(self, cause: Exception) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause


class DynamoDBSessionStore:
    """Session store using an AWS DynamoDB table.

    Table schema:
        Partition key: session_id (S)
        Attributes: record (M), expireAt (N)

    Enable TTL on the `expireAt` attribute for automatic cleanup. Expired
    items are still returned by load until DynamoDB removes them.

    ``dynamodb`` is an aioboto3 DynamoDB service resource that the caller
    has already entered and keeps open for the store's lifetime::

        async with aioboto3.Session().resource("dynamodb") as dynamodb:
            store = DynamoDBSessionStore(dynamodb, "sessions")
    """

    def __init__(self, dynamodb: Any, table_name: str) -> None:
        self._dynamodb = dynamodb
        self._table_name = table_name

    @property
    def table_name(self) -> str:
        return self._table_name

    async def _table(self) -> Any:
        return await self._dynamodb.Table(self._table_name)

    async def save(self, record: Record) -> None:
        item = codec.encode(record)
        try:
            table = await self._table()
            await table.put_item(Item=item)
        except (BotoCoreError, ClientError) as e:
            raise DynamoDBStoreError(e) from e
        logger.debug("Saved session %s to %s", item[codec.KEY_ATTRIBUTE], self._table_name)

    async def load(self, session_id: SessionId) -> Record | None:
        try:
            table = await self._table()
            response = await table.get_item(
                Key={codec.KEY_ATTRIBUTE: str(session_id)},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as e:
            raise DynamoDBStoreError(e) from e

        item = response.get("Item")
        if item is None:
            return None

        try:
            return codec.decode(item)
        except (KeyError, TypeError, ValueError) as e:
            raise DynamoDBStoreError(
                ValueError(f"Malformed session item {session_id}: {e!r}")
            ) from e

    async def delete(self, session_id: SessionId) -> None:
        try:
            table = await self._table()
            await table.delete_item(Key={codec.KEY_ATTRIBUTE: str(session_id)})
        except (BotoCoreError, ClientError) as e:
            raise DynamoDBStoreError(e) from e
        logger.debug("Deleted session %s from %s", session_id, self._table_name)
