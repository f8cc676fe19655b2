from .backend import InMemorySessionStore, SessionStore
from .dynamodb import DynamoDBSessionStore, DynamoDBStoreError
from .errors import BackendError, EncodeError, SessionStoreError
from .middleware import SessionMiddleware
from .record import Record, SessionId

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "DynamoDBSessionStore",
    "DynamoDBStoreError",
    "SessionStoreError",
    "BackendError",
    "EncodeError",
    "SessionMiddleware",
    "Record",
    "SessionId",
]
