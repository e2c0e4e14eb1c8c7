"""
Events store interface.

All stores implement this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .entry import EventEntry
from .keys import KEY_ATTRIBUTE


@dataclass(frozen=True, slots=True)
class WriteGuard:
    """Condition a put must satisfy for `entry.version` to be accepted."""

    # None: the key must not exist yet (first write).
    previous_version: int | None

    @classmethod
    def for_entry(cls, entry: EventEntry) -> "WriteGuard":
        if entry.version < 0:
            raise ValueError(f"version must be non-negative, got {entry.version}")
        if entry.version == 0:
            return cls(previous_version=None)
        return cls(previous_version=entry.version - 1)

    def condition(self) -> dict[str, object]:
        """PutItem condition kwargs for the low-level DynamoDB client."""
        if self.previous_version is None:
            return {
                "ConditionExpression": "attribute_not_exists(#k)",
                "ExpressionAttributeNames": {"#k": KEY_ATTRIBUTE},
            }
        return {
            "ConditionExpression": "#v = :ver",
            "ExpressionAttributeNames": {"#v": "v"},
            "ExpressionAttributeValues": {":ver": {"N": str(self.previous_version)}},
        }

    def holds(self, stored_version: int | None) -> bool:
        """Evaluate the guard against the currently stored version (None if absent)."""
        if self.previous_version is None:
            return stored_version is None
        return stored_version == self.previous_version


class EventsDB(ABC):
    """Versioned single-record-per-key event store."""

    @abstractmethod
    def get(self, key: str) -> EventEntry:
        """Latest snapshot stored for the public token `key`.

        Raises `NotFoundError`, `MalformedError`, `SerializationError` or
        `TransportError`.
        """

    @abstractmethod
    def put(self, entry: EventEntry) -> None:
        """Store `entry`, accepted only if the stored version is `entry.version - 1`.

        Version 0 is accepted only if nothing is stored under the key yet. A
        failed guard raises `ConcurrencyError`; the caller re-reads and retries.
        """
