from __future__ import annotations

import httpx
import pytest

from dashboard_api.clients.chat_completion_client import ChatCompletionClient, is_configured_llm_key
from dashboard_api.errors import ApiError


def build_client(handler) -> ChatCompletionClient:
    transport = httpx.MockTransport(handler)
    return ChatCompletionClient(
        api_key="sk-test",
        base_url="https://llm.example.com/v1/",
        client_factory=lambda: httpx.AsyncClient(transport=transport, timeout=5.0),
    )


@pytest.mark.parametrize(
    ("key", "configured"),
    [(None, False), ("", False), ("your_openai_api_key_here", False), ("sk-real", True)],
)
def test_is_configured_llm_key(key: str | None, configured: bool) -> None:
    assert is_configured_llm_key(key) is configured


@pytest.mark.asyncio
async def test_complete_returns_first_choice() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/v1/chat/completions"
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "Go via I-5."}}]})

    assert await build_client(handler).complete("prompt") == "Go via I-5."


@pytest.mark.asyncio
async def test_complete_returns_none_without_choices() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    assert await build_client(handler).complete("prompt") is None


@pytest.mark.asyncio
async def test_complete_maps_http_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": "rate limited"})

    with pytest.raises(ApiError) as exc_info:
        await build_client(handler).complete("prompt")

    assert exc_info.value.code == "UPSTREAM_HTTP_ERROR"


@pytest.mark.asyncio
async def test_complete_maps_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ApiError) as exc_info:
        await build_client(handler).complete("prompt")

    assert exc_info.value.status_code == 504
