from __future__ import annotations

from collections.abc import Sequence
from time import perf_counter
from uuid import uuid4

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from dashboard_api.observability import RequestMetric, RequestMetricCollector, set_trace_id

TRACE_HEADER = "x-trace-id"


def route_label(request: Request) -> str:
    # Templated path, so shipment ids never become label values.
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Span per request, trace id echo, and latency fan-out to every collector."""

    def __init__(self, app, collectors: Sequence[RequestMetricCollector]) -> None:
        super().__init__(app)
        self._collectors = tuple(collectors)
        self._tracer = trace.get_tracer("dashboard-api")

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or uuid4().hex
        set_trace_id(trace_id)
        started = perf_counter()
        with self._tracer.start_as_current_span(f"{request.method} dashboard") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("trace.id", trace_id)
            try:
                response = await call_next(request)
            except Exception:
                self._record(span, request, 500, started, trace_id)
                raise
            self._record(span, request, response.status_code, started, trace_id)
        response.headers[TRACE_HEADER] = trace_id
        return response

    def _record(self, span, request: Request, status_code: int, started: float, trace_id: str) -> None:
        metric = RequestMetric(
            method=request.method,
            route=route_label(request),
            status_code=status_code,
            duration_ms=(perf_counter() - started) * 1000.0,
            trace_id=trace_id,
        )
        span.set_attribute("http.route", metric.route)
        span.set_attribute("http.status_code", status_code)
        for collector in self._collectors:
            collector.observe(metric)
