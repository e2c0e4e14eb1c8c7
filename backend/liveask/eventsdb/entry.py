from __future__ import annotations

import time
from dataclasses import dataclass

from pydantic import ValidationError

from ..db.dynamodb.errors import SerializationError, malformed
from ..domain.event import ApiEventInfo
from .attributes import AttributeMap, get_m, get_n, get_opt_n, get_opt_s, m, n, s
from .conversion import attributes_to_event, event_to_attributes
from .keys import KEY_ATTRIBUTE, event_key

# Layout of the item written by `to_attributes`. Items without a `format`
# attribute predate it and carry the event as JSON text under `value`.
CURRENT_FORMAT = 1


def timestamp_now() -> int:
    return int(time.time())


@dataclass(slots=True)
class EventEntry:
    """An event payload together with its optimistic-concurrency version."""

    event: ApiEventInfo
    version: int = 0
    ttl: int | None = None

    @classmethod
    def new(cls, event: ApiEventInfo, ttl: int | None = None) -> "EventEntry":
        return cls(event=event, version=0, ttl=ttl)

    @property
    def key(self) -> str:
        return event_key(self.event.tokens.public_token)

    def bump(self) -> None:
        self.version += 1
        self.event.last_edit_unix = timestamp_now()

    def to_attributes(self) -> AttributeMap:
        version = n(self.version, "v")
        if self.version < 0:
            raise ValueError(f"version must be non-negative, got {self.version}")
        # Encoded before the key is derived from the public token.
        event = m(event_to_attributes(self.event))

        item: AttributeMap = {
            KEY_ATTRIBUTE: s(self.key, KEY_ATTRIBUTE),
            "format": n(CURRENT_FORMAT, "format"),
            "v": version,
            "event": event,
        }
        if self.ttl is not None:
            item["ttl"] = n(self.ttl, "ttl")
        return item

    @classmethod
    def from_attributes(cls, item: AttributeMap) -> "EventEntry":
        version = get_n(item, "v")
        if version < 0:
            raise malformed("v", f"negative version {version}")

        ttl = get_opt_n(item, "ttl")

        fmt = get_opt_n(item, "format")
        if fmt == CURRENT_FORMAT:
            event = attributes_to_event(get_m(item, "event"))
        elif fmt is None and "value" in item:
            event = _event_from_json(get_opt_s(item, "value") or "")
        else:
            raise malformed("format", f"unsupported format {fmt}")

        return cls(event=event, version=version, ttl=ttl)


def _event_from_json(raw: str) -> ApiEventInfo:
    try:
        return ApiEventInfo.model_validate_json(raw)
    except ValidationError as e:
        raise SerializationError(message=f"Serde Error: {e}", cause=e) from e
