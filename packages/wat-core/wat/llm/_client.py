"""Chat completion client and its fluent request builder."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from wat.errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    NoMessages,
    SchemaSerializationError,
    TransportError,
)
from wat.models.completions import CompletionsRequest, CompletionsResponse, ResponseFormat
from wat.models.messages import Message

logger = logging.getLogger(__name__)

# Placeholder used when the caller never picks a model
DEFAULT_COMPLETION_MODEL = "hermes-2-pro-mistral-7b"
DEFAULT_MAX_TOKENS = 512
DEFAULT_PRESENCE_PENALTY = 0.0
DEFAULT_TEMPERATURE = 1.0
DEFAULT_TOP_P = 0.9
MAX_REDIRECTS = 10


def _bearer_header(api_key: str) -> str:
    value = f"Bearer {api_key}"
    # visible ASCII, space and tab only
    if any(ch != "\t" and not " " <= ch <= "~" for ch in value):
        raise ConfigurationError("API key contains characters not allowed in an HTTP header")
    return value


class TextGenClient:
    """Long-lived handle on a chat completion endpoint.

    Holds the endpoint URL and an ``httpx.Client`` whose default headers carry
    the bearer token. Redirects are followed, up to ``MAX_REDIRECTS`` hops.
    The pool is shared by every builder minted from this client and is safe
    to use from several threads at once.

    Args:
        base_url: Full URL that completion requests are POSTed to.
        api_key: Credential sent as ``Authorization: Bearer <api_key>``.
        timeout: Request deadline in seconds; ``None`` waits indefinitely.
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``.

    Raises:
        ConfigurationError: If *api_key* cannot be placed in a header.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": _bearer_header(api_key)}
        self.base_url = base_url
        self._http = httpx.Client(
            headers=headers,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
        )

    def chat_completions(self) -> CompletionsRequestBuilder:
        """Return a fresh builder bound to this client."""
        return CompletionsRequestBuilder(self._http, self.base_url)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TextGenClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class CompletionsRequestBuilder:
    """Accumulates parameters for a single chat completion call.

    Every setter overwrites its field and returns the builder, so calls chain.
    Nothing is range-checked here; the provider decides what is valid. The
    only local precondition is a non-empty message list, checked by
    :meth:`send`. A builder is meant to be sent once.
    """

    def __init__(self, http: httpx.Client, url: str) -> None:
        self._http = http
        self._url = url
        self._messages: list[Message] = []
        self._model = DEFAULT_COMPLETION_MODEL
        self._max_tokens = DEFAULT_MAX_TOKENS
        self._presence_penalty = DEFAULT_PRESENCE_PENALTY
        self._temperature = DEFAULT_TEMPERATURE
        self._top_p = DEFAULT_TOP_P
        self._response_format: ResponseFormat | None = None

    def messages(self, messages: Sequence[Message]) -> CompletionsRequestBuilder:
        self._messages = list(messages)
        return self

    def model(self, model: str) -> CompletionsRequestBuilder:
        self._model = model
        return self

    def max_tokens(self, max_tokens: int) -> CompletionsRequestBuilder:
        self._max_tokens = max_tokens
        return self

    def presence_penalty(self, presence_penalty: float) -> CompletionsRequestBuilder:
        self._presence_penalty = presence_penalty
        return self

    def temperature(self, temperature: float) -> CompletionsRequestBuilder:
        self._temperature = temperature
        return self

    def top_p(self, top_p: float) -> CompletionsRequestBuilder:
        self._top_p = top_p
        return self

    def json_mode(self) -> CompletionsRequestBuilder:
        """Constrain the answer to a JSON object, without a schema."""
        self._response_format = ResponseFormat()
        return self

    def json_schema(self, schema: Any) -> CompletionsRequestBuilder:
        """Constrain the answer to a JSON object matching *schema*.

        *schema* may be any JSON-serializable value or a pydantic model class.

        Raises:
            SchemaSerializationError: If *schema* cannot be turned into JSON.
        """
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            schema_value = schema.model_json_schema()
        else:
            try:
                schema_value = to_jsonable_python(schema)
            except (PydanticSerializationError, ValueError) as exc:
                raise SchemaSerializationError(f"Cannot serialize JSON schema: {exc}") from exc
        self._response_format = ResponseFormat(schema=schema_value)
        return self

    def build_request(self) -> CompletionsRequest:
        """Validate the accumulated parameters and return the request model.

        Raises:
            NoMessages: If no messages were set, or an empty list was.
        """
        if not self._messages:
            raise NoMessages("No messages to send")
        return CompletionsRequest(
            messages=self._messages,
            model=self._model,
            max_tokens=self._max_tokens,
            presence_penalty=self._presence_penalty,
            temperature=self._temperature,
            top_p=self._top_p,
            response_format=self._response_format,
        )

    def send(self) -> CompletionsResponse:
        """POST the request and decode the response.

        Raises:
            NoMessages: If no messages were set.
            TransportError: If the endpoint could not be reached.
            ApiError: On a 4xx/5xx status; carries the status and raw body.
            DecodeError: If a successful body is not a completion response.
        """
        payload = self.build_request().to_wire()
        logger.debug(
            "chat_completions_request url=%s model=%s messages=%d",
            self._url, payload["model"], len(payload["messages"]),
        )

        try:
            resp = self._http.post(self._url, json=payload)
        except httpx.RequestError as exc:
            raise TransportError(f"Chat completion request to {self._url} failed: {exc}") from exc

        if resp.is_error:
            raise ApiError(resp.status_code, resp.text)

        try:
            data = CompletionsResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            raise DecodeError(
                f"Invalid chat completion response: {exc}", body=resp.text
            ) from exc

        logger.debug("chat_completions_response %r", data)
        return data
