from __future__ import annotations

import copy
from typing import Any

import pytest
from botocore.exceptions import ClientError

from liveask.domain.event import (
    ApiEventInfo,
    EventData,
    EventState,
    EventTokens,
    QuestionItem,
    States,
)


def _client_error(code: str, operation: str, message: str = "") -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": message or code},
            "ResponseMetadata": {"RequestId": "req-test-1", "HTTPStatusCode": 400},
        },
        operation,
    )


class FakeDynamoClient:
    """Just enough of the low-level DynamoDB client for the events store.

    Understands the two condition expressions the store emits and raises real
    botocore `ClientError`s.
    """

    def __init__(self, *, tables: list[str] | None = None, page_size: int = 100):
        self.tables: list[str] = list(tables or [])
        self.items: dict[str, dict[str, dict[str, Any]]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.page_size = page_size
        self.fail_next: dict[str, Exception] = {}

    def _maybe_fail(self, operation: str) -> None:
        exc = self.fail_next.pop(operation, None)
        if exc is not None:
            raise exc

    def _table(self, name: str, operation: str) -> dict[str, dict[str, Any]]:
        if name not in self.tables:
            raise _client_error("ResourceNotFoundException", operation, "Requested resource not found")
        return self.items.setdefault(name, {})

    def get_item(self, **kwargs):
        self.calls.append(("GetItem", kwargs))
        self._maybe_fail("GetItem")
        table = self._table(kwargs["TableName"], "GetItem")
        key = kwargs["Key"]["key"]["S"]
        item = table.get(key)
        if item is None:
            return {"ResponseMetadata": {}}
        return {"Item": copy.deepcopy(item), "ResponseMetadata": {}}

    def put_item(self, **kwargs):
        self.calls.append(("PutItem", kwargs))
        self._maybe_fail("PutItem")
        table = self._table(kwargs["TableName"], "PutItem")
        item = kwargs["Item"]
        key = item["key"]["S"]
        current = table.get(key)

        cond = kwargs.get("ConditionExpression")
        names = kwargs.get("ExpressionAttributeNames") or {}
        values = kwargs.get("ExpressionAttributeValues") or {}
        if cond == "attribute_not_exists(#k)":
            ok = current is None or names["#k"] not in current
        elif cond == "#v = :ver":
            attr = names["#v"]
            ok = current is not None and current.get(attr) == values[":ver"]
        elif cond is None:
            ok = True
        else:
            raise AssertionError(f"unexpected condition {cond!r}")

        if not ok:
            raise _client_error(
                "ConditionalCheckFailedException", "PutItem", "The conditional request failed"
            )
        table[key] = copy.deepcopy(item)
        return {"ResponseMetadata": {}}

    def list_tables(self, **kwargs):
        self.calls.append(("ListTables", kwargs))
        self._maybe_fail("ListTables")
        names = sorted(self.tables)
        start = kwargs.get("ExclusiveStartTableName")
        if start:
            names = [n for n in names if n > start]
        page = names[: self.page_size]
        out: dict[str, Any] = {"TableNames": page}
        if len(names) > self.page_size:
            out["LastEvaluatedTableName"] = page[-1]
        return out

    def create_table(self, **kwargs):
        self.calls.append(("CreateTable", kwargs))
        self._maybe_fail("CreateTable")
        name = kwargs["TableName"]
        if name in self.tables:
            raise _client_error("ResourceInUseException", "CreateTable", "Table already exists")
        self.tables.append(name)
        return {"TableDescription": {"TableName": name, "TableStatus": "CREATING"}}

    def op_names(self) -> list[str]:
        return [op for op, _ in self.calls]


@pytest.fixture
def client_error():
    return _client_error


@pytest.fixture
def fake_client() -> FakeDynamoClient:
    return FakeDynamoClient(tables=["liveask"])


def make_event(
    *,
    public_token: str = "token1",
    moderator_token: str | None = None,
    long_url: str | None = None,
    mail: str | None = None,
    premium_order: str | None = None,
    questions: list[QuestionItem] | None = None,
) -> ApiEventInfo:
    return ApiEventInfo(
        tokens=EventTokens(public_token=public_token, moderator_token=moderator_token),
        data=EventData(
            name="name",
            description="desc",
            short_url="",
            long_url=long_url,
            mail=mail,
        ),
        create_time_unix=1,
        delete_time_unix=0,
        deleted=False,
        last_edit_unix=2,
        questions=questions
        if questions is not None
        else [
            QuestionItem(
                id=0,
                likes=2,
                text="q",
                hidden=False,
                answered=True,
                create_time_unix=3,
            )
        ],
        state=EventState(state=States.Closed),
        premium_order=premium_order,
    )


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def fake_client_factory():
    return FakeDynamoClient
