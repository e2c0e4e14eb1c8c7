from __future__ import annotations

import pytest
from pydantic import ValidationError

from liveask.db.dynamodb.errors import MalformedError, SerializationError
from liveask.domain.event import QuestionItem, States
from liveask.eventsdb.attributes import boolean, n, s
from liveask.eventsdb.conversion import attributes_to_event, event_to_attributes


def test_round_trip_with_optionals_absent(event_factory):
    event = event_factory(premium_order="order")
    assert attributes_to_event(event_to_attributes(event)) == event


def test_round_trip_with_optionals_present(event_factory):
    event = event_factory(
        moderator_token="token2",
        long_url="foo",
        mail="mail",
        premium_order="order",
    )
    assert attributes_to_event(event_to_attributes(event)) == event


def test_round_trip_without_questions_or_premium(event_factory):
    event = event_factory(questions=[])
    attrs = event_to_attributes(event)
    assert attrs["questions"] == {"L": []}
    assert attributes_to_event(attrs) == event


def test_absent_moderator_token_stays_none(event_factory):
    attrs = event_to_attributes(event_factory(moderator_token=None))
    assert "moderatorToken" not in attrs["tokens"]["M"]

    decoded = attributes_to_event(attrs)
    assert decoded.tokens.moderator_token is None


def test_optional_fields_are_omitted_not_blank(event_factory):
    attrs = event_to_attributes(event_factory())
    assert "premium_order" not in attrs
    assert "longUrl" not in attrs["data"]["M"]
    assert "mail" not in attrs["data"]["M"]


def test_field_names_and_number_text(event_factory):
    attrs = event_to_attributes(event_factory(premium_order="order"))

    assert set(attrs) == {
        "tokens",
        "data",
        "createTimeUnix",
        "deleteTimeUnix",
        "deleted",
        "lastEditUnix",
        "questions",
        "state",
        "premium_order",
    }
    assert attrs["createTimeUnix"] == {"N": "1"}
    assert attrs["deleted"] == {"BOOL": False}
    assert attrs["state"] == {"M": {"state": {"N": str(int(States.Closed))}}}

    q = attrs["questions"]["L"][0]["M"]
    assert q["likes"] == {"N": "2"}
    assert q["answered"] == {"BOOL": True}


def test_null_attribute_reads_as_absent(event_factory):
    attrs = event_to_attributes(event_factory())
    attrs["tokens"]["M"]["moderatorToken"] = {"NULL": True}

    assert attributes_to_event(attrs).tokens.moderator_token is None


def test_unparseable_number_names_field(event_factory):
    attrs = event_to_attributes(
        event_factory(questions=[QuestionItem(id=0, text="a"), QuestionItem(id=1, text="b")])
    )
    attrs["questions"]["L"][1]["M"]["likes"] = {"N": "lots"}

    with pytest.raises(MalformedError) as ei:
        attributes_to_event(attrs)
    assert ei.value.field == "event.questions[1].likes"
    assert "event.questions[1].likes" in str(ei.value)


def test_missing_required_field_names_field(event_factory):
    attrs = event_to_attributes(event_factory())
    del attrs["data"]["M"]["name"]

    with pytest.raises(MalformedError) as ei:
        attributes_to_event(attrs)
    assert ei.value.field == "event.data.name"


def test_wrong_attribute_type_names_field(event_factory):
    attrs = event_to_attributes(event_factory())
    attrs["deleted"] = {"S": "false"}

    with pytest.raises(MalformedError) as ei:
        attributes_to_event(attrs)
    assert ei.value.field == "event.deleted"


def test_question_must_be_a_map(event_factory):
    attrs = event_to_attributes(event_factory())
    attrs["questions"]["L"][0] = {"S": "q"}

    with pytest.raises(MalformedError) as ei:
        attributes_to_event(attrs)
    assert ei.value.field == "event.questions[0]"


def test_unknown_state_is_malformed(event_factory):
    attrs = event_to_attributes(event_factory())
    attrs["state"]["M"]["state"] = {"N": "7"}

    with pytest.raises(MalformedError) as ei:
        attributes_to_event(attrs)
    assert ei.value.field == "event.state.state"


def test_event_info_projection_collapses_premium(event_factory):
    assert event_factory(premium_order="order").to_event_info().premium is True

    info = event_factory().to_event_info()
    assert info.premium is False
    assert info.tokens.public_token == "token1"
    assert info.questions[0].likes == 2


def test_assignment_is_validated(event_factory):
    event = event_factory()

    with pytest.raises(ValidationError):
        event.last_edit_unix = 1_700_000_000.9
    with pytest.raises(ValidationError):
        event.data.name = None
    with pytest.raises(ValidationError):
        event.create_time_unix = "yesterday"


@pytest.mark.parametrize(
    "update, field",
    [
        ({"last_edit_unix": 1_700_000_000.9}, "event.lastEditUnix"),
        ({"create_time_unix": "yesterday"}, "event.createTimeUnix"),
        ({"deleted": 1}, "event.deleted"),
        ({"premium_order": 42}, "event.premium_order"),
    ],
)
def test_wrong_typed_values_are_not_coerced(event_factory, update, field):
    # model_copy(update=...) skips validation, so bad values can still reach the encoder.
    event = event_factory().model_copy(update=update)

    with pytest.raises(SerializationError) as ei:
        event_to_attributes(event)
    assert field in str(ei.value)


def test_none_in_nested_required_field_is_not_stored_as_text(event_factory):
    event = event_factory()
    event.data = event.data.model_copy(update={"name": None})

    with pytest.raises(SerializationError) as ei:
        event_to_attributes(event)
    assert "event.data.name" in str(ei.value)


def test_bad_question_value_names_its_index(event_factory):
    event = event_factory(questions=[QuestionItem(id=0, text="a"), QuestionItem(id=1, text="b")])
    event.questions[1] = event.questions[1].model_copy(update={"likes": 2.5})

    with pytest.raises(SerializationError) as ei:
        event_to_attributes(event)
    assert "event.questions[1].likes" in str(ei.value)


def test_writers_reject_other_types():
    with pytest.raises(SerializationError):
        n(True, "x")
    with pytest.raises(SerializationError):
        s(5, "x")
    with pytest.raises(SerializationError):
        boolean("true", "x")
    assert n(-3, "x") == {"N": "-3"}
    assert s("", "x") == {"S": ""}
