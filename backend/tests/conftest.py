from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from deepseek_proxy.core.config import Settings
from deepseek_proxy.integrations.deepseek_client import DeepSeekClient
from deepseek_proxy.main import create_app


UPSTREAM_BASE_URL = "https://api.deepseek.test"


def success_body(reply: str = "你好！") -> dict[str, Any]:
    return {
        "id": "cmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "deepseek-chat",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": reply},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


class UpstreamStub:
    """Scripted DeepSeek endpoint that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = success_body()
        self.raw: bytes | None = None
        self.exc: Exception | None = None

    def reply(self, status_code: int, body: Any = None, *, raw: bytes | None = None) -> None:
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.raw = raw

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def deepseek_client(upstream: UpstreamStub) -> DeepSeekClient:
    return DeepSeekClient(base_url=UPSTREAM_BASE_URL, transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        deepseek_api_key="sk-test-key",
        deepseek_base_url=UPSTREAM_BASE_URL,
        allowed_origins_raw=None,
    )


@pytest.fixture
def make_client(deepseek_client: DeepSeekClient):
    """Build a TestClient for an app wired to the stubbed upstream."""

    def _make(settings: Settings) -> TestClient:
        return TestClient(create_app(settings, deepseek_client=deepseek_client))

    return _make


@pytest.fixture
def api_client(make_client, settings: Settings) -> TestClient:
    return make_client(settings)
