from __future__ import annotations

import logging

from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.core.models import MOCK_TRAFFIC, MOCK_WEATHER, TrafficReading, WeatherReading
from conditions_feed.providers.base import TrafficProvider, WeatherProvider

logger = logging.getLogger(__name__)


class MockWeatherProvider(WeatherProvider):
    provider_name = "mock_weather"

    def __init__(
        self,
        reading: WeatherReading = MOCK_WEATHER,
        metrics: InMemoryFeedMetricsCollector | None = None,
    ) -> None:
        super().__init__(metrics)
        self._reading = reading

    async def fetch_weather(self) -> WeatherReading:
        logger.debug("mock_weather_served", extra={"provider": self.provider_name})
        self.record_fetch("mock")
        return self._reading


class MockTrafficProvider(TrafficProvider):
    provider_name = "mock_traffic"

    def __init__(
        self,
        reading: TrafficReading = MOCK_TRAFFIC,
        metrics: InMemoryFeedMetricsCollector | None = None,
    ) -> None:
        super().__init__(metrics)
        self._reading = reading

    async def fetch_traffic(self) -> TrafficReading:
        logger.debug("mock_traffic_served", extra={"provider": self.provider_name})
        self.record_fetch("mock")
        return self._reading
