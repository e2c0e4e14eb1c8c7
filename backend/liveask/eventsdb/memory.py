from __future__ import annotations

import copy
import threading

from ..db.dynamodb.errors import ConcurrencyError, EventsDbError, NotFoundError
from ..observability.logging import get_logger
from .attributes import AttributeMap, get_opt_n
from .base import EventsDB, WriteGuard
from .entry import EventEntry
from .keys import KEY_ATTRIBUTE, event_key

log = get_logger("eventsdb.memory")


class InMemoryEventsDB(EventsDB):
    """In-process `EventsDB` for tests and local runs.

    Items are kept in their encoded attribute form so reads go through the
    same codec as the DynamoDB store. The lock stands in for the backing
    store's atomic conditional put.
    """

    def __init__(self, *, table_name: str = "memory"):
        self.table_name = table_name
        self._items: dict[str, AttributeMap] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> EventEntry:
        store_key = event_key(key)
        ddb_key = {KEY_ATTRIBUTE: {"S": store_key}}
        with self._lock:
            item = copy.deepcopy(self._items.get(store_key))
        if item is None:
            raise NotFoundError(
                message="Item Not Found",
                operation="GetItem",
                table_name=self.table_name,
                key=ddb_key,
            )

        try:
            return EventEntry.from_attributes(item)
        except EventsDbError as e:
            e.operation = "GetItem"
            e.table_name = self.table_name
            e.key = ddb_key
            raise

    def put(self, entry: EventEntry) -> None:
        item = entry.to_attributes()
        guard = WriteGuard.for_entry(entry)
        store_key = item[KEY_ATTRIBUTE]["S"]

        with self._lock:
            current = self._items.get(store_key)
            stored_version = get_opt_n(current, "v") if current is not None else None
            if not guard.holds(stored_version):
                log.info("eventsdb_conflict", key=store_key, version=entry.version)
                raise ConcurrencyError(
                    message="Concurrency Error",
                    operation="PutItem",
                    table_name=self.table_name,
                    key={KEY_ATTRIBUTE: {"S": store_key}},
                )
            self._items[store_key] = item

        log.debug("eventsdb_put", key=store_key, version=entry.version)

    def raw_item(self, key: str) -> AttributeMap | None:
        """Stored attribute map for the public token `key` (a copy)."""
        with self._lock:
            return copy.deepcopy(self._items.get(event_key(key)))

    def put_raw_item(self, item: AttributeMap) -> None:
        """Store an attribute map as-is, bypassing the version guard."""
        with self._lock:
            self._items[item[KEY_ATTRIBUTE]["S"]] = copy.deepcopy(item)
