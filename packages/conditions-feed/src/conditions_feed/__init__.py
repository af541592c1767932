"""Live weather and traffic conditions feed."""

from conditions_feed.core.models import ConditionsReport, TrafficReading, WeatherReading
from conditions_feed.monitor import ConditionsMonitor
from conditions_feed.weather_codes import describe_weather, weather_impact_factor

__all__ = [
    "ConditionsMonitor",
    "ConditionsReport",
    "TrafficReading",
    "WeatherReading",
    "describe_weather",
    "weather_impact_factor",
]
