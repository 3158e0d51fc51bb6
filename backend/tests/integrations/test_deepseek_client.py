import asyncio

import httpx
import pytest

from deepseek_proxy.core.errors import UpstreamError
from deepseek_proxy.integrations.deepseek_client import (
    INSUFFICIENT_BALANCE_MESSAGE,
    DeepSeekClient,
    classify_error,
)


def test_balance_wins_over_status_specific_mapping():
    err = classify_error(401, {"error": {"message": "insufficient BALANCE on account"}})
    assert err.error_type == "INSUFFICIENT_BALANCE"
    assert err.message == INSUFFICIENT_BALANCE_MESSAGE
    assert err.status_code == 401


def test_generic_fallback_message():
    err = classify_error(503, {})
    assert err.error_type == "DEEPSEEK_API_ERROR"
    assert err.message == "DeepSeek API error: 503"
    assert err.original_error == {}


def test_error_field_of_unexpected_shape():
    err = classify_error(500, {"error": "boom"})
    assert err.error_type == "DEEPSEEK_API_ERROR"
    assert err.message == "DeepSeek API error: 500"


def test_non_object_error_body_is_replaced():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(500, json=["unexpected"])

    client = DeepSeekClient(base_url="https://api.deepseek.test/", api_key="k", transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamError) as exc:
        asyncio.run(client.chat_completions({"model": "deepseek-chat", "messages": []}))
    assert exc.value.original_error == {}
    assert str(seen[0].url) == "https://api.deepseek.test/chat/completions"
    assert seen[0].headers["Authorization"] == "Bearer k"


def test_per_call_key_overrides_client_key():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"choices": []})

    client = DeepSeekClient(base_url="https://api.deepseek.test", api_key="default", transport=httpx.MockTransport(handler))
    data = asyncio.run(client.chat_completions({"messages": []}, api_key="override"))
    assert data == {"choices": []}
    assert seen == ["Bearer override"]


def test_transport_errors_propagate_untyped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out")

    client = DeepSeekClient(base_url="https://api.deepseek.test", transport=httpx.MockTransport(handler))
    with pytest.raises(httpx.ReadTimeout):
        asyncio.run(client.chat_completions({"messages": []}))


def test_default_timeout_suits_long_completions():
    client = DeepSeekClient(base_url="https://api.deepseek.test")
    assert client.client.timeout == httpx.Timeout(90.0)
    asyncio.run(client.aclose())


def test_unset_timeout_disables_it():
    client = DeepSeekClient(base_url="https://api.deepseek.test", timeout_s=None)
    assert client.client.timeout == httpx.Timeout(None)
    asyncio.run(client.aclose())


def test_slow_upstream_within_timeout_succeeds():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.2)
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    async def run():
        client = DeepSeekClient(
            base_url="https://api.deepseek.test",
            timeout_s=5.0,
            transport=httpx.MockTransport(handler),
        )
        try:
            return await client.chat_completions({"model": "deepseek-chat"}, api_key="sk")
        finally:
            await client.aclose()

    assert asyncio.run(run())["choices"][0]["message"]["content"] == "ok"
