from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response

from conditions_feed.core.prometheus_exporter import FeedPrometheusExporter
from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter

from dashboard_api.dependencies import get_feed_metrics, get_monitor, get_settings_service
from dashboard_api.errors import ApiError
from dashboard_api.middleware import ObservabilityMiddleware
from dashboard_api.observability import PrometheusRequestMetrics, RecentRequestLog
from dashboard_api.page import DASHBOARD_HTML
from dashboard_api.response import error_response, success_response
from dashboard_api.routers.advisor import router as advisor_router
from dashboard_api.routers.audit import router as audit_router
from dashboard_api.routers.conditions import router as conditions_router
from dashboard_api.routers.dispatch import router as dispatch_router
from dashboard_api.routers.registry import router as registry_router
from dashboard_api.routers.settings import router as settings_router

logger = logging.getLogger(__name__)


def _resolve(app: FastAPI, dependency):
    return app.dependency_overrides.get(dependency, dependency)()


@asynccontextmanager
async def lifespan(app: FastAPI):
    monitor = _resolve(app, get_monitor)
    await _resolve(app, get_settings_service).restore_traffic_key()
    stop_event = asyncio.Event()
    refresher = asyncio.create_task(monitor.run(stop_event))
    app.state.ready = True
    try:
        yield
    finally:
        app.state.ready = False
        stop_event.set()
        await refresher
        logger.info("dashboard_api_stopped")


def create_app() -> FastAPI:
    app = FastAPI(title="Emergency Medical Logistics Dashboard", version="0.1.0", lifespan=lifespan)
    configure_logging()
    configure_otel(service_name="dashboard-api")
    configure_probe_access_log_filter()
    app.state.ready = False
    app.state.request_log = RecentRequestLog()
    app.state.prom_metrics = PrometheusRequestMetrics()
    app.state.feed_exporter = FeedPrometheusExporter()
    app.add_middleware(ObservabilityMiddleware, collectors=[app.state.request_log, app.state.prom_metrics])
    app.include_router(conditions_router)
    app.include_router(dispatch_router)
    app.include_router(advisor_router)
    app.include_router(audit_router)
    app.include_router(registry_router)
    app.include_router(settings_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> dict:
        monitor = _resolve(app, get_monitor)
        return success_response(
            {
                "status": "ready",
                "conditions_loaded": monitor.latest is not None,
                "refresher_running": app.state.ready,
                "routes": app.state.request_log.route_summary(),
            },
            meta={},
        )

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = app.state.prom_metrics.render() + app.state.feed_exporter.render(_resolve(app, get_feed_metrics))
        return Response(content=payload, media_type="text/plain; version=0.0.4")

    @app.get("/", response_class=HTMLResponse)
    async def dashboard_page() -> str:
        return DASHBOARD_HTML

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc.code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response("VALIDATION_ERROR", message),
        )

    return app


app = create_app()
