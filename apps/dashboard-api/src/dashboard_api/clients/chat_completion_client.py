from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from dashboard_api.errors import ApiError

PLACEHOLDER_KEYS = frozenset({"your_openai_api_key_here"})


def is_configured_llm_key(api_key: str | None) -> bool:
    return bool(api_key) and api_key not in PLACEHOLDER_KEYS


class ChatCompletionClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 150,
        temperature: float = 0.7,
        timeout_seconds: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def complete(self, prompt: str) -> str | None:
        """Single-turn completion; ``None`` when the model returned no text."""
        body: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
            async with factory() as client:
                response = await client.post(f"{self._base_url}/chat/completions", json=body, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ApiError("UPSTREAM_TIMEOUT", "Advisor model timed out", 504) from exc
        except httpx.HTTPStatusError as exc:
            raise ApiError("UPSTREAM_HTTP_ERROR", "Advisor model returned error", 502) from exc
        except httpx.HTTPError as exc:
            raise ApiError("UPSTREAM_FAILURE", "Advisor model request failed", 502) from exc

        payload = response.json()
        choices = payload.get("choices") or []
        if not choices:
            return None
        content = (choices[0].get("message") or {}).get("content")
        if not isinstance(content, str) or not content.strip():
            return None
        return content.strip()
