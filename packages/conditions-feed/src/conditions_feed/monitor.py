from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from time import perf_counter

from route_engine.models import EnvironmentalSnapshot

from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.core.models import DEFAULT_SNAPSHOT, ConditionsReport
from conditions_feed.providers.base import TrafficProvider, WeatherProvider

logger = logging.getLogger(__name__)

RefreshListener = Callable[[ConditionsReport], Awaitable[None]]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConditionsMonitor:
    """Holds the latest weather/traffic report and refreshes it on a fixed period."""

    def __init__(
        self,
        weather_provider: WeatherProvider,
        traffic_provider: TrafficProvider,
        refresh_seconds: float = 300.0,
        metrics: InMemoryFeedMetricsCollector | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if refresh_seconds <= 0:
            raise ValueError("refresh_seconds must be > 0")
        self._weather_provider = weather_provider
        self._traffic_provider = traffic_provider
        self._refresh_seconds = refresh_seconds
        self._metrics = metrics
        self._clock = clock
        self._latest: ConditionsReport | None = None
        self._lock = asyncio.Lock()
        self._listeners: list[RefreshListener] = []

    @property
    def latest(self) -> ConditionsReport | None:
        return self._latest

    @property
    def traffic_provider(self) -> TrafficProvider:
        return self._traffic_provider

    def snapshot(self) -> EnvironmentalSnapshot:
        if self._latest is None:
            return DEFAULT_SNAPSHOT
        return self._latest.snapshot

    def add_listener(self, listener: RefreshListener) -> None:
        self._listeners.append(listener)

    async def current(self) -> ConditionsReport:
        if self._latest is not None:
            return self._latest
        return await self.refresh()

    async def refresh(self) -> ConditionsReport:
        async with self._lock:
            started = perf_counter()
            weather, traffic = await asyncio.gather(
                self._weather_provider.fetch_weather(),
                self._traffic_provider.fetch_traffic(),
            )
            report = ConditionsReport(weather=weather, traffic=traffic, fetched_at=self._clock())
            self._latest = report
            duration_ms = (perf_counter() - started) * 1000.0
        if self._metrics:
            self._metrics.observe_refresh(duration_ms, weather.source, traffic.source)
            snapshot = report.snapshot
            self._metrics.set_snapshot(snapshot.weather_impact, snapshot.traffic_congestion)
        logger.info(
            "conditions_refreshed",
            extra={
                "weather_impact": weather.impact_factor,
                "weather_source": weather.source,
                "traffic_congestion": traffic.congestion_level,
                "traffic_source": traffic.source,
                "duration_ms": round(duration_ms, 2),
            },
        )
        for listener in self._listeners:
            try:
                await listener(report)
            except Exception:
                logger.exception(
                    "conditions_listener_failed",
                    extra={"listener": getattr(listener, "__qualname__", repr(listener))},
                )
        return report

    async def run(self, stop_event: asyncio.Event) -> None:
        logger.info("conditions_monitor_started", extra={"refresh_seconds": self._refresh_seconds})
        while not stop_event.is_set():
            try:
                await self.refresh()
            except Exception:
                logger.exception("conditions_refresh_failed")
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._refresh_seconds)
            except asyncio.TimeoutError:
                continue
        logger.info("conditions_monitor_stopped")
