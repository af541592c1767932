from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from conditions_feed.core.exceptions import FeedError, ProviderPayloadError
from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.core.models import FALLBACK_WEATHER, WeatherReading
from conditions_feed.providers.base import HttpJsonFetcher, WeatherProvider
from conditions_feed.weather_codes import weather_impact_factor

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.open-meteo.com"


class OpenMeteoWeatherProvider(WeatherProvider):
    provider_name = "open_meteo"

    def __init__(
        self,
        latitude: float,
        longitude: float,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 5.0,
        retries: int = 3,
        base_delay_seconds: float = 0.2,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        metrics: InMemoryFeedMetricsCollector | None = None,
    ) -> None:
        super().__init__(metrics)
        self._latitude = latitude
        self._longitude = longitude
        self._base_url = base_url.rstrip("/")
        self._fetcher = HttpJsonFetcher(
            timeout_seconds=timeout_seconds,
            retries=retries,
            base_delay_seconds=base_delay_seconds,
            client_factory=client_factory,
            on_retry=self._on_retry,
        )

    async def fetch_weather(self) -> WeatherReading:
        params = {
            "latitude": self._latitude,
            "longitude": self._longitude,
            "current": "temperature_2m,weathercode",
        }
        try:
            payload = await self._fetcher.get_json(f"{self._base_url}/v1/forecast", params)
            reading = self._parse(payload)
        except FeedError as exc:
            logger.warning(
                "weather_fetch_failed",
                extra={"provider": self.provider_name, "error": str(exc)},
            )
            self.record_fetch("fallback")
            return FALLBACK_WEATHER
        self.record_fetch("live")
        return reading

    def _parse(self, payload: Any) -> WeatherReading:
        try:
            current = payload["current"]
            code = int(current["weathercode"])
            temperature = float(current["temperature_2m"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderPayloadError(f"unexpected open-meteo payload: {exc}") from exc
        return WeatherReading(
            temperature_c=temperature,
            weather_code=code,
            impact_factor=weather_impact_factor(code),
            source="live",
        )

    def _on_retry(self, _: int, __: float) -> None:
        if self._metrics:
            self._metrics.increment_retry(self.provider_name)
