from __future__ import annotations

from typing import Any

from ..db.dynamodb.client import dynamodb_client
from ..observability.logging import configure_logging, get_logger
from ..settings import Settings, get_settings
from .dynamo import DynamoEventsDB

log = get_logger("eventsdb.factory")


def events_db_from_settings(settings: Settings | None = None, *, client: Any | None = None) -> DynamoEventsDB:
    """Build the DynamoDB events store for this process.

    The table bootstrap only runs when EVENTS_CHECK_TABLE_EXISTS is set.
    """
    s = settings or get_settings()
    configure_logging(level=s.log_level)
    c = client or dynamodb_client(s.aws_region, s.dynamodb_endpoint_url)
    options = s.store_options()

    log.info(
        "eventsdb_configured",
        table_name=options.table_name,
        check_table_exists=options.check_table_exists,
    )
    return DynamoEventsDB.create(c, options)
