"""
Helpers for DynamoDB's low-level attribute value shape.

An attribute value is a single-entry dict tagged with its type
(`{"S": "x"}`, `{"N": "1"}`, `{"BOOL": True}`, `{"M": {...}}`, `{"L": [...]}`).
Absent optionals are simply not present in the enclosing map; a stored
`{"NULL": True}` reads back as absent too.

Readers take the enclosing map, the field name and the dotted path of the map
so that failures name the offending field, e.g. `event.questions[1].likes`.
Writers take the field path too and raise `SerializationError` for values of
the wrong type instead of coercing them.
"""

from __future__ import annotations

import re
from typing import Any

from boto3.dynamodb.types import TypeSerializer

from ..db.dynamodb.errors import SerializationError, malformed

AttributeValue = dict[str, Any]
AttributeMap = dict[str, AttributeValue]

_serializer = TypeSerializer()

# Canonical decimal text as written by `n`.
_INT_TEXT = re.compile(r"-?[0-9]+")


def field_path(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


# --- writers ---


def _unserializable(field: str, value: Any, expected: str) -> SerializationError:
    return SerializationError(
        message=f"cannot encode `{field}`: expected {expected}, got {type(value).__name__}",
    )


def _serialize(value: Any, field: str) -> AttributeValue:
    try:
        return _serializer.serialize(value)
    except (TypeError, ValueError, ArithmeticError) as e:
        err = SerializationError(message=f"cannot encode `{field}`: {e}", cause=e)
        raise err from e


def s(value: str, field: str) -> AttributeValue:
    if not isinstance(value, str):
        raise _unserializable(field, value, "str")
    return _serialize(value, field)


def n(value: int, field: str) -> AttributeValue:
    # bool is an int subclass; floats would lose their fraction on the way back.
    if isinstance(value, bool) or not isinstance(value, int):
        raise _unserializable(field, value, "int")
    return _serialize(int(value), field)


def boolean(value: bool, field: str) -> AttributeValue:
    if not isinstance(value, bool):
        raise _unserializable(field, value, "bool")
    return _serialize(value, field)


def m(value: AttributeMap) -> AttributeValue:
    return {"M": value}


def lst(values: list[AttributeValue]) -> AttributeValue:
    return {"L": values}


# --- readers ---


def _is_null(av: Any) -> bool:
    return isinstance(av, dict) and av.get("NULL") is True


def _lookup(item: AttributeMap, name: str, path: str, *, required: bool) -> AttributeValue | None:
    field = field_path(path, name)
    av = item.get(name)
    if av is None or _is_null(av):
        if required:
            raise malformed(field, "missing")
        return None
    if not isinstance(av, dict):
        raise malformed(field, "not an attribute value")
    return av


def _unwrap(av: AttributeValue, tag: str, expected: type, field: str) -> Any:
    if tag not in av:
        found = ",".join(sorted(av)) or "nothing"
        raise malformed(field, f"expected {tag}, found {found}")
    value = av[tag]
    if not isinstance(value, expected):
        raise malformed(field, f"{tag} holds {type(value).__name__}")
    return value


def parse_int(text: str, field: str) -> int:
    if not isinstance(text, str) or not _INT_TEXT.fullmatch(text):
        raise malformed(field, f"not an integer: {text!r}")
    return int(text)


def get_s(item: AttributeMap, name: str, path: str = "") -> str:
    av = _lookup(item, name, path, required=True)
    return _unwrap(av, "S", str, field_path(path, name))


def get_opt_s(item: AttributeMap, name: str, path: str = "") -> str | None:
    av = _lookup(item, name, path, required=False)
    if av is None:
        return None
    return _unwrap(av, "S", str, field_path(path, name))


def get_n(item: AttributeMap, name: str, path: str = "") -> int:
    field = field_path(path, name)
    av = _lookup(item, name, path, required=True)
    return parse_int(_unwrap(av, "N", str, field), field)


def get_opt_n(item: AttributeMap, name: str, path: str = "") -> int | None:
    field = field_path(path, name)
    av = _lookup(item, name, path, required=False)
    if av is None:
        return None
    return parse_int(_unwrap(av, "N", str, field), field)


def get_bool(item: AttributeMap, name: str, path: str = "") -> bool:
    av = _lookup(item, name, path, required=True)
    return _unwrap(av, "BOOL", bool, field_path(path, name))


def get_m(item: AttributeMap, name: str, path: str = "") -> AttributeMap:
    av = _lookup(item, name, path, required=True)
    return _unwrap(av, "M", dict, field_path(path, name))


def get_l(item: AttributeMap, name: str, path: str = "") -> list[AttributeValue]:
    av = _lookup(item, name, path, required=True)
    return _unwrap(av, "L", list, field_path(path, name))
