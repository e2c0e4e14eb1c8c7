from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TABLE_NAME = "liveask"


@dataclass(frozen=True, slots=True)
class StoreOptions:
    """Construction-time configuration for an events store."""

    table_name: str = DEFAULT_TABLE_NAME
    # Run the ListTables/CreateTable bootstrap when the store is created.
    check_table_exists: bool = False
    read_capacity: int = 5
    write_capacity: int = 5
