"""Identity and record types shared by every layer.

Members, scopes, and roles are supplied by the hosting platform; a
:class:`User` is the row stored in the registry. Platform ids are
snowflakes, so a member's account-creation time can be recovered from
the id alone when the platform does not send it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

# Milliseconds between the Unix epoch and the first second of 2015.
SNOWFLAKE_EPOCH_MS = 1420070400000


def snowflake_timestamp(snowflake: int) -> datetime:
    """Decode the creation time embedded in a snowflake id.

    Examples:
        >>> snowflake_timestamp(175928847299117063).isoformat()
        '2016-04-30T11:18:25.796000+00:00'
    """
    ms = (snowflake >> 22) + SNOWFLAKE_EPOCH_MS
    return datetime.fromtimestamp(ms / 1000, tz=UTC)


class Member(BaseModel):
    """A platform user as seen by the invoking surface."""

    model_config = {"frozen": True}

    id: int = Field(ge=0)
    name: str
    created_at: datetime | None = None

    @model_validator(mode="after")
    def fill_created_at(self) -> Member:
        if self.created_at is None:
            object.__setattr__(self, "created_at", snowflake_timestamp(self.id))
        return self


class Scope(BaseModel):
    """A guild: the bounded context where roles are evaluated."""

    model_config = {"frozen": True}

    id: int


class Role(BaseModel):
    """A named permission group inside one scope."""

    model_config = {"frozen": True}

    id: int
    name: str


class User(BaseModel):
    """One row of the ``users`` relation."""

    model_config = {"frozen": True}

    id: int
    name: str

    def __repr__(self) -> str:
        return f"User(id={self.id}, name={self.name!r})"

    __str__ = __repr__


class ParamKind(StrEnum):
    """Value types a command parameter can carry."""

    USER = "user"
    TEXT = "text"


class ParamDefault(StrEnum):
    """Enumerated fallbacks for omitted optional parameters."""

    NONE = "none"
    CALLER = "caller"
