"""
Event payload models shared between the store and the request handlers.

Field names on the wire (JSON and DynamoDB attribute maps) are the camelCase
aliases; Python code uses the snake_case attribute names.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_assignment=True)


class States(IntEnum):
    Open = 0
    VotingOnly = 1
    Closed = 2


class EventTokens(_WireModel):
    public_token: str = Field(alias="publicToken")
    moderator_token: str | None = Field(default=None, alias="moderatorToken")


class EventData(_WireModel):
    name: str
    description: str
    short_url: str = Field(default="", alias="shortUrl")
    long_url: str | None = Field(default=None, alias="longUrl")
    mail: str | None = None


class QuestionItem(_WireModel):
    id: int
    likes: int = 0
    text: str
    hidden: bool = False
    answered: bool = False
    create_time_unix: int = Field(default=0, alias="createTimeUnix")


class EventState(_WireModel):
    state: States = States.Open


class EventInfo(_WireModel):
    """What clients get to see: the premium order id collapses into a flag."""

    tokens: EventTokens
    data: EventData
    create_time_unix: int = Field(default=0, alias="createTimeUnix")
    delete_time_unix: int = Field(default=0, alias="deleteTimeUnix")
    deleted: bool = False
    last_edit_unix: int = Field(default=0, alias="lastEditUnix")
    questions: list[QuestionItem] = Field(default_factory=list)
    state: EventState = Field(default_factory=EventState)
    premium: bool = False


class ApiEventInfo(_WireModel):
    """The stored event payload."""

    tokens: EventTokens
    data: EventData
    create_time_unix: int = Field(default=0, alias="createTimeUnix")
    delete_time_unix: int = Field(default=0, alias="deleteTimeUnix")
    deleted: bool = False
    last_edit_unix: int = Field(default=0, alias="lastEditUnix")
    questions: list[QuestionItem] = Field(default_factory=list)
    state: EventState = Field(default_factory=EventState)
    premium_order: str | None = None

    def to_event_info(self) -> EventInfo:
        return EventInfo(
            tokens=self.tokens.model_copy(deep=True),
            data=self.data.model_copy(deep=True),
            create_time_unix=self.create_time_unix,
            delete_time_unix=self.delete_time_unix,
            deleted=self.deleted,
            last_edit_unix=self.last_edit_unix,
            questions=[q.model_copy() for q in self.questions],
            state=self.state.model_copy(),
            premium=self.premium_order is not None,
        )
