"""Chat completion client — builder, transport and error translation."""

from __future__ import annotations

from wat.errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    NoChoices,
    NoMessages,
    SchemaSerializationError,
    TextGenError,
    TransportError,
)
from wat.llm._client import CompletionsRequestBuilder, TextGenClient
from wat.llm._config import Settings

__all__ = [
    "TextGenClient", "CompletionsRequestBuilder", "get_text_gen_client",
    "TextGenError", "ConfigurationError", "SchemaSerializationError", "NoMessages",
    "TransportError", "ApiError", "DecodeError", "NoChoices",
]


def get_text_gen_client(settings: Settings) -> TextGenClient:
    """Create a client bound to the resolved endpoint and API key."""
    return TextGenClient(settings.base_url, settings.api_key)
