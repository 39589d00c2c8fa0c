"""Shared test fixtures — simulated HTTP endpoint and isolated config dir."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from wat.llm._client import TextGenClient

BASE_URL = "https://llm.test/v1/chat/completions"


def completion_body(content: str = "hi", **extra: Any) -> dict[str, Any]:
    return {
        "choices": [
            {"message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        **extra,
    }


class MockEndpoint:
    """A scripted chat completion endpoint backed by ``httpx.MockTransport``.

    Set ``status`` and ``body`` (dict or raw str) before sending, or
    ``error`` to raise a transport exception. Every request is kept in
    ``requests``.
    """

    def __init__(self) -> None:
        self.status = 200
        self.body: Any = completion_body()
        self.error: Callable[[httpx.Request], Exception] | None = None
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status, text=self.body)
        return httpx.Response(self.status, json=self.body)

    @property
    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self, api_key: str = "sk-test") -> TextGenClient:
        return TextGenClient(BASE_URL, api_key, transport=httpx.MockTransport(self))


@pytest.fixture
def endpoint():
    """Return a fresh MockEndpoint."""
    return MockEndpoint()


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear the API key env var."""
    monkeypatch.setenv("WAT_CONFIG_DIR", str(tmp_path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return tmp_path
