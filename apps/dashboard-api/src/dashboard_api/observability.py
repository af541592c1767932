from __future__ import annotations

from collections import deque
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

_trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")

LATENCY_BUCKETS_MS = (5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10000)


def set_trace_id(trace_id: str) -> None:
    _trace_id_ctx.set(trace_id)


def get_trace_id() -> str:
    return _trace_id_ctx.get()


@dataclass(frozen=True)
class RequestMetric:
    method: str
    route: str
    status_code: int
    duration_ms: float
    trace_id: str


class RequestMetricCollector(Protocol):
    def observe(self, metric: RequestMetric) -> None: ...


class RecentRequestLog:
    """Last ``capacity`` requests, kept for the readiness view and tests."""

    def __init__(self, capacity: int = 500) -> None:
        self._entries: deque[RequestMetric] = deque(maxlen=capacity)

    def observe(self, metric: RequestMetric) -> None:
        self._entries.append(metric)

    def recent(self) -> list[dict]:
        return [asdict(entry) for entry in self._entries]

    def route_summary(self) -> dict[str, dict[str, float]]:
        summary: dict[str, dict[str, float]] = {}
        for entry in self._entries:
            stats = summary.setdefault(
                f"{entry.method} {entry.route}",
                {"count": 0, "errors": 0, "max_ms": 0.0},
            )
            stats["count"] += 1
            if entry.status_code >= 500:
                stats["errors"] += 1
            stats["max_ms"] = max(stats["max_ms"], round(entry.duration_ms, 2))
        return summary


class PrometheusRequestMetrics:
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._requests = Counter(
            "dashboard_http_requests_total",
            "Dashboard HTTP requests by route and status",
            labelnames=("method", "route", "status_code"),
            registry=self._registry,
        )
        self._latency = Histogram(
            "dashboard_http_request_duration_ms",
            "Dashboard HTTP request latency in milliseconds",
            labelnames=("method", "route"),
            buckets=LATENCY_BUCKETS_MS,
            registry=self._registry,
        )

    def observe(self, metric: RequestMetric) -> None:
        self._requests.labels(metric.method, metric.route, str(metric.status_code)).inc()
        self._latency.labels(metric.method, metric.route).observe(metric.duration_ms)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")
