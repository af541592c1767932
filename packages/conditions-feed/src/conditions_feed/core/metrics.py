from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass


@dataclass(frozen=True)
class RefreshDuration:
    duration_ms: float
    weather_source: str
    traffic_source: str


class InMemoryFeedMetricsCollector:
    def __init__(self) -> None:
        self.fetch_total: dict[tuple[str, str], int] = defaultdict(int)
        self.provider_retry_total: dict[str, int] = defaultdict(int)
        self.refresh_durations: list[RefreshDuration] = []
        self.weather_impact: float | None = None
        self.traffic_congestion: float | None = None

    def increment_fetch(self, provider: str, result: str) -> None:
        self.fetch_total[(provider, result)] += 1

    def increment_retry(self, provider: str) -> None:
        self.provider_retry_total[provider] += 1

    def observe_refresh(
        self,
        duration_ms: float,
        weather_source: str,
        traffic_source: str,
    ) -> None:
        self.refresh_durations.append(
            RefreshDuration(duration_ms=duration_ms, weather_source=weather_source, traffic_source=traffic_source)
        )

    def set_snapshot(self, weather_impact: float, traffic_congestion: float) -> None:
        self.weather_impact = weather_impact
        self.traffic_congestion = traffic_congestion

    @property
    def refresh_count(self) -> int:
        return len(self.refresh_durations)
