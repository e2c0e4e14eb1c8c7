from __future__ import annotations

from typing import Any

from ..db.dynamodb.calls import ddb_call
from ..db.dynamodb.errors import ConcurrencyError, EventsDbError, NotFoundError
from ..db.dynamodb.provisioning import ensure_table
from ..observability.logging import get_logger
from .base import EventsDB, WriteGuard
from .entry import EventEntry
from .keys import KEY_ATTRIBUTE, event_key
from .options import StoreOptions

log = get_logger("eventsdb.dynamo")


class DynamoEventsDB(EventsDB):
    """`EventsDB` backed by a DynamoDB table with a single string hash key.

    Holds nothing but the table name and the client; safe to share between
    request handlers.
    """

    def __init__(self, *, client: Any, table_name: str):
        self.table_name = str(table_name)
        self._client = client

    @classmethod
    def create(cls, client: Any, options: StoreOptions | None = None) -> "DynamoEventsDB":
        opts = options or StoreOptions()
        if opts.check_table_exists:
            ensure_table(
                client,
                table_name=opts.table_name,
                key_name=KEY_ATTRIBUTE,
                read_capacity=opts.read_capacity,
                write_capacity=opts.write_capacity,
            )
        return cls(client=client, table_name=opts.table_name)

    def get(self, key: str) -> EventEntry:
        ddb_key = {KEY_ATTRIBUTE: {"S": event_key(key)}}

        def _op():
            resp = self._client.get_item(
                TableName=self.table_name,
                Key=ddb_key,
                ConsistentRead=True,
            )
            return resp.get("Item")

        item = ddb_call("GetItem", _op, table_name=self.table_name, key=ddb_key)
        if not item:
            raise NotFoundError(
                message="Item Not Found",
                operation="GetItem",
                table_name=self.table_name,
                key=ddb_key,
            )

        try:
            entry = EventEntry.from_attributes(item)
        except EventsDbError as e:
            e.operation = "GetItem"
            e.table_name = self.table_name
            e.key = ddb_key
            raise

        log.debug("eventsdb_get", key=ddb_key[KEY_ATTRIBUTE]["S"], version=entry.version)
        return entry

    def put(self, entry: EventEntry) -> None:
        item = entry.to_attributes()
        guard = WriteGuard.for_entry(entry)
        ddb_key = {KEY_ATTRIBUTE: item[KEY_ATTRIBUTE]}

        def _op():
            return self._client.put_item(
                TableName=self.table_name,
                Item=item,
                **guard.condition(),
            )

        try:
            ddb_call("PutItem", _op, table_name=self.table_name, key=ddb_key)
        except ConcurrencyError:
            log.info("eventsdb_conflict", key=entry.key, version=entry.version)
            raise

        log.debug("eventsdb_put", key=entry.key, version=entry.version)
