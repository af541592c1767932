from __future__ import annotations

from conditions_feed.core.models import ConditionsReport
from conditions_feed.monitor import ConditionsMonitor
from conditions_feed.weather_codes import describe_weather
from devkit.timezone import now_local_iso

from dashboard_api.schemas.conditions import ConditionsView, TrafficView, WeatherView


def conditions_view(report: ConditionsReport) -> ConditionsView:
    snapshot = report.snapshot
    return ConditionsView(
        weather=WeatherView(
            temperature_c=report.weather.temperature_c,
            weather_code=report.weather.weather_code,
            description=describe_weather(report.weather.weather_code),
            impact_factor=report.weather.impact_factor,
            source=report.weather.source,
        ),
        traffic=TrafficView(
            current_speed_kmh=report.traffic.current_speed_kmh,
            free_flow_speed_kmh=report.traffic.free_flow_speed_kmh,
            congestion_level=report.traffic.congestion_level,
            source=report.traffic.source,
        ),
        weather_impact=snapshot.weather_impact,
        traffic_congestion=snapshot.traffic_congestion,
        fetched_at=report.fetched_at,
        local_time=now_local_iso(),
    )


class ConditionsService:
    def __init__(self, monitor: ConditionsMonitor) -> None:
        self._monitor = monitor

    async def current(self) -> ConditionsView:
        return conditions_view(await self._monitor.current())

    async def refresh(self) -> ConditionsView:
        return conditions_view(await self._monitor.refresh())
