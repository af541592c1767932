from __future__ import annotations

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from conditions_feed.core.metrics import InMemoryFeedMetricsCollector


class FeedPrometheusExporter:
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._fetch_total = Gauge(
            "conditions_fetch_total",
            "Conditions provider fetches grouped by provider and result",
            labelnames=("provider", "result"),
            registry=self._registry,
        )
        self._retry_total = Gauge(
            "conditions_provider_retries_total",
            "Conditions provider retries grouped by provider",
            labelnames=("provider",),
            registry=self._registry,
        )
        self._refresh_total = Gauge(
            "conditions_refresh_total",
            "Completed conditions refresh cycles",
            registry=self._registry,
        )
        self._refresh_duration = Gauge(
            "conditions_refresh_duration_ms",
            "Duration of the latest conditions refresh in milliseconds",
            registry=self._registry,
        )
        self._impact = Gauge(
            "conditions_impact_ratio",
            "Latest normalized impact factor by condition",
            labelnames=("condition",),
            registry=self._registry,
        )

    def render(self, metrics: InMemoryFeedMetricsCollector) -> str:
        for (provider, result), count in metrics.fetch_total.items():
            self._fetch_total.labels(provider=provider, result=result).set(count)
        for provider, count in metrics.provider_retry_total.items():
            self._retry_total.labels(provider=provider).set(count)
        self._refresh_total.set(metrics.refresh_count)
        if metrics.refresh_durations:
            self._refresh_duration.set(metrics.refresh_durations[-1].duration_ms)
        if metrics.weather_impact is not None:
            self._impact.labels(condition="weather").set(metrics.weather_impact)
        if metrics.traffic_congestion is not None:
            self._impact.labels(condition="traffic").set(metrics.traffic_congestion)
        return generate_latest(self._registry).decode("utf-8")
