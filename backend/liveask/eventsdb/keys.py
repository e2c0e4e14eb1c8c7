from __future__ import annotations

# Namespace for event items so they never collide with other keys in a shared table.
EVENT_KEY_PREFIX = "event/"

KEY_ATTRIBUTE = "key"


def event_key(public_token: str) -> str:
    return f"{EVENT_KEY_PREFIX}{public_token}"
