"""Weather and traffic provider adapters."""

from conditions_feed.providers.factory import build_traffic_provider, build_weather_provider
from conditions_feed.providers.mock import MockTrafficProvider, MockWeatherProvider
from conditions_feed.providers.open_meteo import OpenMeteoWeatherProvider
from conditions_feed.providers.tomtom import TomTomTrafficProvider

__all__ = [
    "MockTrafficProvider",
    "MockWeatherProvider",
    "OpenMeteoWeatherProvider",
    "TomTomTrafficProvider",
    "build_traffic_provider",
    "build_weather_provider",
]
