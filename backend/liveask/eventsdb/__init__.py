"""Versioned, single-record-per-key event storage."""

from ..db.dynamodb.errors import (
    ConcurrencyError,
    EventsDbError,
    MalformedError,
    NotFoundError,
    SerializationError,
    TransportError,
)
from .base import EventsDB, WriteGuard
from .dynamo import DynamoEventsDB
from .entry import CURRENT_FORMAT, EventEntry
from .keys import EVENT_KEY_PREFIX, event_key
from .memory import InMemoryEventsDB
from .options import StoreOptions

__all__ = [
    "CURRENT_FORMAT",
    "ConcurrencyError",
    "DynamoEventsDB",
    "EVENT_KEY_PREFIX",
    "EventEntry",
    "EventsDB",
    "EventsDbError",
    "InMemoryEventsDB",
    "MalformedError",
    "NotFoundError",
    "SerializationError",
    "StoreOptions",
    "TransportError",
    "WriteGuard",
    "event_key",
]
