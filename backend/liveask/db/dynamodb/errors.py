from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class EventsDbError(Exception):
    """Base error for events store operations.

    Callers branch on the subclass: retry on `ConcurrencyError`, report "not
    found" on `NotFoundError`, treat everything else as a failure.
    """

    message: str
    operation: str | None = None
    table_name: str | None = None
    key: dict[str, Any] | None = None
    aws_request_id: str | None = None
    retryable: bool = False
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class NotFoundError(EventsDbError):
    pass


@dataclass(slots=True)
class ConcurrencyError(EventsDbError):
    """The version guard of a conditional put did not hold."""


@dataclass(slots=True)
class MalformedError(EventsDbError):
    """Stored attributes exist but do not have the expected shape."""

    field: str | None = None


@dataclass(slots=True)
class TransportError(EventsDbError):
    code: str | None = None


@dataclass(slots=True)
class SerializationError(EventsDbError):
    pass


def malformed(field: str, detail: str = "") -> MalformedError:
    msg = f"malformed event: `{field}`"
    if detail:
        msg = f"{msg} ({detail})"
    return MalformedError(message=msg, field=field)
