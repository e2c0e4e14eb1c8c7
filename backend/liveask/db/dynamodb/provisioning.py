from __future__ import annotations

from typing import Any

from ...observability.logging import get_logger
from .calls import ddb_call
from .errors import TransportError

log = get_logger("ddb.provisioning")


def list_table_names(client: Any) -> list[str]:
    names: list[str] = []
    start: str | None = None
    while True:
        kwargs: dict[str, Any] = {}
        if start:
            kwargs["ExclusiveStartTableName"] = start

        resp = ddb_call("ListTables", lambda: client.list_tables(**kwargs))
        names.extend(resp.get("TableNames") or [])

        start = resp.get("LastEvaluatedTableName")
        if not start:
            return names


def create_table(
    client: Any,
    *,
    table_name: str,
    key_name: str,
    read_capacity: int = 5,
    write_capacity: int = 5,
) -> None:
    def _op():
        return client.create_table(
            TableName=table_name,
            AttributeDefinitions=[{"AttributeName": key_name, "AttributeType": "S"}],
            KeySchema=[{"AttributeName": key_name, "KeyType": "HASH"}],
            ProvisionedThroughput={
                "ReadCapacityUnits": int(read_capacity),
                "WriteCapacityUnits": int(write_capacity),
            },
        )

    ddb_call("CreateTable", _op, table_name=table_name)


def ensure_table(
    client: Any,
    *,
    table_name: str,
    key_name: str = "key",
    read_capacity: int = 5,
    write_capacity: int = 5,
) -> bool:
    """
    Create `table_name` with a single string hash key if it does not exist yet.

    Returns True when the table was created. Creation is not awaited: the table
    may still be in CREATING state when this returns.
    """
    names = list_table_names(client)
    log.debug("ddb_tables_listed", tables=",".join(names))

    if table_name in names:
        return False

    log.info("ddb_table_missing_creating", table_name=table_name, key_name=key_name)
    try:
        create_table(
            client,
            table_name=table_name,
            key_name=key_name,
            read_capacity=read_capacity,
            write_capacity=write_capacity,
        )
    except TransportError as e:
        # Another instance created it between ListTables and CreateTable.
        if e.code != "ResourceInUseException":
            raise
        log.info("ddb_table_created_concurrently", table_name=table_name)
        return False
    return True
