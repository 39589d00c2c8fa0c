"""Chat completion wire models — request payload and tolerant response."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wat.errors import NoChoices
from wat.models.messages import Message


class ResponseFormatType(str, Enum):
    json_object = "json_object"


class ResponseFormat(BaseModel):
    """Asks the provider to answer with a JSON object, optionally schema-bound."""
    type: ResponseFormatType = ResponseFormatType.json_object
    schema_: Any = Field(None, alias="schema")

    model_config = ConfigDict(populate_by_name=True)


class CompletionsRequest(BaseModel):
    messages: list[Message] = Field(min_length=1)
    model: str
    max_tokens: int
    presence_penalty: float
    temperature: float
    top_p: float
    response_format: ResponseFormat | None = None

    def to_wire(self) -> dict[str, Any]:
        """Render the JSON body; unset ``response_format``/``schema`` are left out.

        Non-finite floats (NaN, inf) are not valid JSON and are rendered as ``null``.
        """
        data = self.model_dump(mode="json", exclude={"response_format"})
        fmt = self.response_format
        if fmt is not None:
            data["response_format"] = {"type": fmt.type.value}
            if fmt.schema_ is not None:
                data["response_format"]["schema"] = fmt.schema_
        return data


class Choice(BaseModel):
    """One candidate answer. Unknown fields are kept in ``model_extra``."""

    model_config = ConfigDict(extra="allow")

    message: Message
    finish_reason: str


class CompletionsResponse(BaseModel):
    """Decoded chat completion response.

    Only ``choices`` is required. Anything else the provider sends (``id``,
    ``usage``, ...) is kept in ``model_extra`` so schema additions on the
    provider side never break decoding.
    """

    model_config = ConfigDict(extra="allow")

    choices: list[Choice]

    def first_choice(self) -> Choice:
        """Return ``choices[0]``.

        Raises:
            NoChoices: If the provider returned an empty ``choices`` list.
        """
        if not self.choices:
            raise NoChoices("Completion response contains no choices")
        return self.choices[0]

    @property
    def content(self) -> str:
        """Content of the first choice's message."""
        return self.first_choice().message.content
