from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from route_engine.models import EnvironmentalSnapshot

ReadingSource = Literal["live", "mock", "fallback"]

DEFAULT_WEATHER_IMPACT = 0.3
DEFAULT_TRAFFIC_CONGESTION = 0.25


def clamp_ratio(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class WeatherReading:
    temperature_c: float
    weather_code: int
    impact_factor: float
    source: ReadingSource


@dataclass(frozen=True)
class TrafficReading:
    current_speed_kmh: float
    free_flow_speed_kmh: float
    congestion_level: float
    source: ReadingSource


@dataclass(frozen=True)
class ConditionsReport:
    weather: WeatherReading
    traffic: TrafficReading
    fetched_at: datetime

    @property
    def snapshot(self) -> EnvironmentalSnapshot:
        return EnvironmentalSnapshot(
            weather_impact=clamp_ratio(self.weather.impact_factor),
            traffic_congestion=clamp_ratio(self.traffic.congestion_level),
        )


FALLBACK_WEATHER = WeatherReading(
    temperature_c=15.0,
    weather_code=0,
    impact_factor=DEFAULT_WEATHER_IMPACT,
    source="fallback",
)
FALLBACK_TRAFFIC = TrafficReading(
    current_speed_kmh=45.0,
    free_flow_speed_kmh=60.0,
    congestion_level=DEFAULT_TRAFFIC_CONGESTION,
    source="fallback",
)
MOCK_WEATHER = WeatherReading(temperature_c=15.0, weather_code=61, impact_factor=0.8, source="mock")
MOCK_TRAFFIC = TrafficReading(
    current_speed_kmh=45.0,
    free_flow_speed_kmh=60.0,
    congestion_level=DEFAULT_TRAFFIC_CONGESTION,
    source="mock",
)
DEFAULT_SNAPSHOT = EnvironmentalSnapshot(
    weather_impact=DEFAULT_WEATHER_IMPACT,
    traffic_congestion=DEFAULT_TRAFFIC_CONGESTION,
)
