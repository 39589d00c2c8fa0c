"""Message model — one conversation turn, used both outbound and inbound."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, field_validator


class Role(str, Enum):
    system = "system"
    user = "user"
    assistant = "assistant"


class Message(BaseModel):
    """A single turn tagged with a role.

    Providers are free to answer with roles outside :class:`Role`; those are
    kept as plain strings instead of being rejected.
    """

    model_config = ConfigDict(frozen=True)

    role: Union[Role, str]
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _known_role(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, Role):
            try:
                return Role(value)
            except ValueError:
                return value
        return value

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role=Role.system, content=content)

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role=Role.user, content=content)

    @classmethod
    def assistant(cls, content: str) -> Message:
        return cls(role=Role.assistant, content=content)
