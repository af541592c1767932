from __future__ import annotations

import logging
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

PROBE_PATHS = ("/healthz", "/readyz")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class ProbeAccessLogFilter(logging.Filter):
    """Drops successful uvicorn access lines for liveness/readiness probes."""

    def __init__(self, ignored_paths: tuple[str, ...] = PROBE_PATHS) -> None:
        super().__init__()
        self._ignored_paths = frozenset(_strip_path(path) for path in ignored_paths)

    def filter(self, record: logging.LogRecord) -> bool:
        args: Any = record.args
        # uvicorn.access args: (client, method, path, http_version, status)
        if not isinstance(args, tuple) or len(args) < 5:
            return True
        path, status = args[2], args[4]
        if not isinstance(path, str):
            return True
        try:
            ok = int(status) == 200
        except (TypeError, ValueError):
            return True
        return not (ok and _strip_path(path) in self._ignored_paths)


_tracing_service: str | None = None
_probe_filter: ProbeAccessLogFilter | None = None


def _strip_path(path: str) -> str:
    base = path.partition("?")[0]
    if len(base) > 1:
        base = base.rstrip("/")
    return base


def configure_logging(level: str | int = logging.INFO) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)


def configure_otel(service_name: str) -> None:
    global _tracing_service
    if _tracing_service is not None:
        return
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    trace.set_tracer_provider(provider)
    _tracing_service = service_name


def configure_probe_access_log_filter(ignored_paths: tuple[str, ...] = PROBE_PATHS) -> ProbeAccessLogFilter:
    global _probe_filter
    if _probe_filter is None:
        _probe_filter = ProbeAccessLogFilter(ignored_paths=ignored_paths)
        logging.getLogger("uvicorn.access").addFilter(_probe_filter)
    return _probe_filter
