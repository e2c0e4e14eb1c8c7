from __future__ import annotations

from ..db.dynamodb.errors import malformed
from ..domain.event import (
    ApiEventInfo,
    EventData,
    EventState,
    EventTokens,
    QuestionItem,
    States,
)
from .attributes import (
    AttributeMap,
    AttributeValue,
    boolean,
    field_path,
    get_bool,
    get_l,
    get_m,
    get_n,
    get_opt_s,
    get_s,
    lst,
    m,
    n,
    s,
)


# --- domain -> attributes ---


def _tokens_to_attributes(tokens: EventTokens, path: str) -> AttributeMap:
    out: AttributeMap = {"publicToken": s(tokens.public_token, field_path(path, "publicToken"))}
    if tokens.moderator_token is not None:
        out["moderatorToken"] = s(tokens.moderator_token, field_path(path, "moderatorToken"))
    return out


def _data_to_attributes(data: EventData, path: str) -> AttributeMap:
    out: AttributeMap = {
        "name": s(data.name, field_path(path, "name")),
        "description": s(data.description, field_path(path, "description")),
        "shortUrl": s(data.short_url, field_path(path, "shortUrl")),
    }
    if data.long_url is not None:
        out["longUrl"] = s(data.long_url, field_path(path, "longUrl"))
    if data.mail is not None:
        out["mail"] = s(data.mail, field_path(path, "mail"))
    return out


def _question_to_attributes(q: QuestionItem, path: str) -> AttributeValue:
    return m(
        {
            "id": n(q.id, field_path(path, "id")),
            "likes": n(q.likes, field_path(path, "likes")),
            "text": s(q.text, field_path(path, "text")),
            "hidden": boolean(q.hidden, field_path(path, "hidden")),
            "answered": boolean(q.answered, field_path(path, "answered")),
            "createTimeUnix": n(q.create_time_unix, field_path(path, "createTimeUnix")),
        }
    )


def event_to_attributes(event: ApiEventInfo, path: str = "event") -> AttributeMap:
    questions_path = field_path(path, "questions")
    state_path = field_path(path, "state")

    out: AttributeMap = {
        "tokens": m(_tokens_to_attributes(event.tokens, field_path(path, "tokens"))),
        "data": m(_data_to_attributes(event.data, field_path(path, "data"))),
        "createTimeUnix": n(event.create_time_unix, field_path(path, "createTimeUnix")),
        "deleteTimeUnix": n(event.delete_time_unix, field_path(path, "deleteTimeUnix")),
        "deleted": boolean(event.deleted, field_path(path, "deleted")),
        "lastEditUnix": n(event.last_edit_unix, field_path(path, "lastEditUnix")),
        "questions": lst(
            [
                _question_to_attributes(q, f"{questions_path}[{i}]")
                for i, q in enumerate(event.questions)
            ]
        ),
        "state": m({"state": n(int(event.state.state), field_path(state_path, "state"))}),
    }
    if event.premium_order is not None:
        out["premium_order"] = s(event.premium_order, field_path(path, "premium_order"))
    return out


# --- attributes -> domain ---


def _tokens_from_attributes(item: AttributeMap, path: str) -> EventTokens:
    return EventTokens(
        public_token=get_s(item, "publicToken", path),
        moderator_token=get_opt_s(item, "moderatorToken", path),
    )


def _data_from_attributes(item: AttributeMap, path: str) -> EventData:
    return EventData(
        name=get_s(item, "name", path),
        description=get_s(item, "description", path),
        short_url=get_s(item, "shortUrl", path),
        long_url=get_opt_s(item, "longUrl", path),
        mail=get_opt_s(item, "mail", path),
    )


def _question_from_attributes(av: AttributeValue, path: str) -> QuestionItem:
    if not isinstance(av, dict) or not isinstance(av.get("M"), dict):
        raise malformed(path, "expected M")
    item = av["M"]
    return QuestionItem(
        id=get_n(item, "id", path),
        likes=get_n(item, "likes", path),
        text=get_s(item, "text", path),
        hidden=get_bool(item, "hidden", path),
        answered=get_bool(item, "answered", path),
        create_time_unix=get_n(item, "createTimeUnix", path),
    )


def _state_from_attributes(item: AttributeMap, path: str) -> EventState:
    raw = get_n(item, "state", path)
    try:
        state = States(raw)
    except ValueError as e:
        raise malformed(field_path(path, "state"), f"unknown state {raw}") from e
    return EventState(state=state)


def attributes_to_event(item: AttributeMap, path: str = "event") -> ApiEventInfo:
    questions_path = field_path(path, "questions")
    questions = [
        _question_from_attributes(av, f"{questions_path}[{i}]")
        for i, av in enumerate(get_l(item, "questions", path))
    ]

    return ApiEventInfo(
        tokens=_tokens_from_attributes(get_m(item, "tokens", path), field_path(path, "tokens")),
        data=_data_from_attributes(get_m(item, "data", path), field_path(path, "data")),
        create_time_unix=get_n(item, "createTimeUnix", path),
        delete_time_unix=get_n(item, "deleteTimeUnix", path),
        deleted=get_bool(item, "deleted", path),
        last_edit_unix=get_n(item, "lastEditUnix", path),
        questions=questions,
        state=_state_from_attributes(get_m(item, "state", path), field_path(path, "state")),
        premium_order=get_opt_s(item, "premium_order", path),
    )
