from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import httpx

from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.core.models import TrafficReading, WeatherReading
from conditions_feed.core.retry import BackoffPolicy, call_with_backoff


def is_retryable_http_error(exc: Exception) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


class BaseConditionsProvider(ABC):
    provider_name: str

    def __init__(self, metrics: InMemoryFeedMetricsCollector | None = None) -> None:
        self._metrics = metrics

    def record_fetch(self, result: str) -> None:
        if self._metrics:
            self._metrics.increment_fetch(self.provider_name, result)


class WeatherProvider(BaseConditionsProvider):
    @abstractmethod
    async def fetch_weather(self) -> WeatherReading:
        raise NotImplementedError


class TrafficProvider(BaseConditionsProvider):
    @abstractmethod
    async def fetch_traffic(self) -> TrafficReading:
        raise NotImplementedError


class HttpJsonFetcher:
    """GET a JSON document with retries on transport errors and 5xx responses."""

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        retries: int = 3,
        base_delay_seconds: float = 0.2,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        on_retry: Callable[[int, float], None] | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._policy = BackoffPolicy(attempts=retries, base_delay_seconds=base_delay_seconds)
        self._client_factory = client_factory
        self._on_retry = on_retry

    async def get_json(self, url: str, params: dict[str, Any]) -> Any:
        return await call_with_backoff(
            lambda: self._get_once(url, params),
            self._policy,
            should_retry=is_retryable_http_error,
            on_retry=self._on_retry,
        )

    async def get_status(self, url: str, params: dict[str, Any]) -> int:
        async with self._new_client() as client:
            response = await client.get(url, params=params)
        return response.status_code

    async def _get_once(self, url: str, params: dict[str, Any]) -> Any:
        async with self._new_client() as client:
            response = await client.get(url, params=params)
            response.raise_for_status()
        return response.json()

    def _new_client(self) -> httpx.AsyncClient:
        if self._client_factory is not None:
            return self._client_factory()
        return httpx.AsyncClient(timeout=self._timeout_seconds)
