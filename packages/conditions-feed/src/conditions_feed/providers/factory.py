from __future__ import annotations

from devkit.config import ServiceSettings

from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.providers.base import TrafficProvider, WeatherProvider
from conditions_feed.providers.mock import MockTrafficProvider, MockWeatherProvider
from conditions_feed.providers.open_meteo import OpenMeteoWeatherProvider
from conditions_feed.providers.tomtom import TomTomTrafficProvider


def build_weather_provider(
    settings: ServiceSettings,
    metrics: InMemoryFeedMetricsCollector | None = None,
) -> WeatherProvider:
    if settings.USE_MOCK_DATA:
        return MockWeatherProvider(metrics=metrics)
    return OpenMeteoWeatherProvider(
        latitude=settings.DASHBOARD_LAT,
        longitude=settings.DASHBOARD_LNG,
        base_url=settings.WEATHER_API_BASE_URL,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        metrics=metrics,
    )


def build_traffic_provider(
    settings: ServiceSettings,
    metrics: InMemoryFeedMetricsCollector | None = None,
) -> TrafficProvider:
    if settings.USE_MOCK_DATA:
        return MockTrafficProvider(metrics=metrics)
    return TomTomTrafficProvider(
        latitude=settings.DASHBOARD_LAT,
        longitude=settings.DASHBOARD_LNG,
        api_key=settings.TOMTOM_API_KEY,
        base_url=settings.TRAFFIC_API_BASE_URL,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        metrics=metrics,
    )


def build_key_probe(settings: ServiceSettings) -> TomTomTrafficProvider:
    """A TomTom client used only to validate candidate API keys."""
    return TomTomTrafficProvider(
        latitude=settings.DASHBOARD_LAT,
        longitude=settings.DASHBOARD_LNG,
        api_key=None,
        base_url=settings.TRAFFIC_API_BASE_URL,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        retries=1,
    )
