"""Error taxonomy for the chat completion client.

Every failure is raised to the immediate caller; nothing here is retried or
defaulted. The CLI is the only place that turns these into exit codes.
"""

from __future__ import annotations


class TextGenError(Exception):
    """Base class for all client errors."""


class ConfigurationError(TextGenError):
    """Missing, unreadable or unusable configuration (e.g. the API key)."""


class SchemaSerializationError(TextGenError, ValueError):
    """A JSON schema passed to ``json_schema()`` cannot be serialized."""


class NoMessages(TextGenError):
    """``send()`` was called without any messages."""


class TransportError(TextGenError):
    """The endpoint could not be reached (DNS, connect, TLS, timeout...)."""


class ApiError(TextGenError):
    """The provider answered with a 4xx/5xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Error making chat completion request: HTTP {status_code}, body: {body}"
        )


class DecodeError(TextGenError):
    """The response body is not a chat completion response."""

    def __init__(self, message: str, body: str = "") -> None:
        self.body = body
        super().__init__(message)


class NoChoices(DecodeError):
    """The response decoded fine but carries no choices."""
