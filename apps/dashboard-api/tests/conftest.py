from __future__ import annotations

import os

# Module-level singletons in dashboard_api.dependencies read these on import.
os.environ["USE_MOCK_DATA"] = "true"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("REDIS_URL", None)

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from conditions_feed.core.metrics import InMemoryFeedMetricsCollector  # noqa: E402
from conditions_feed.core.models import TrafficReading, WeatherReading  # noqa: E402
from conditions_feed.monitor import ConditionsMonitor  # noqa: E402
from conditions_feed.providers.mock import MockTrafficProvider, MockWeatherProvider  # noqa: E402
from conditions_feed.providers.tomtom import TomTomTrafficProvider  # noqa: E402
from fleet_registry.registry import FleetRegistry  # noqa: E402

from dashboard_api.app import create_app  # noqa: E402
from dashboard_api.cache import AdvisorCache, InMemoryCacheStore  # noqa: E402
from dashboard_api.circuit_breaker import CircuitBreaker  # noqa: E402
from dashboard_api.dependencies import (  # noqa: E402
    get_advisor_service,
    get_audit_service,
    get_conditions_service,
    get_dispatch_service,
    get_feed_metrics,
    get_monitor,
    get_rate_limiter,
    get_registry_service,
    get_settings_service,
)
from dashboard_api.preferences import InMemoryPreferenceStore  # noqa: E402
from dashboard_api.rate_limit import InMemoryRateLimitStore, SlidingWindowRateLimiter  # noqa: E402
from dashboard_api.services.advisor_service import AdvisorService  # noqa: E402
from dashboard_api.services.audit_service import AuditService  # noqa: E402
from dashboard_api.services.conditions_service import ConditionsService  # noqa: E402
from dashboard_api.services.dispatch_service import DispatchService  # noqa: E402
from dashboard_api.services.registry_service import RegistryService  # noqa: E402
from dashboard_api.services.settings_service import SettingsService  # noqa: E402

CLEAR_WEATHER = WeatherReading(temperature_c=15.0, weather_code=0, impact_factor=0.3, source="mock")
LIGHT_TRAFFIC = TrafficReading(current_speed_kmh=45.0, free_flow_speed_kmh=60.0, congestion_level=0.25, source="mock")


def key_probe(valid_keys: set[str] = frozenset({"valid-key"})) -> TomTomTrafficProvider:
    def handler(request: httpx.Request) -> httpx.Response:
        status = 200 if request.url.params.get("key") in valid_keys else 403
        return httpx.Response(status, json={})

    transport = httpx.MockTransport(handler)
    return TomTomTrafficProvider(
        latitude=47.6062,
        longitude=-122.3321,
        api_key=None,
        base_url="https://traffic.example.com",
        retries=1,
        client_factory=lambda: httpx.AsyncClient(transport=transport, timeout=5.0),
    )


@pytest.fixture
def feed_metrics() -> InMemoryFeedMetricsCollector:
    return InMemoryFeedMetricsCollector()


@pytest.fixture
def monitor(feed_metrics: InMemoryFeedMetricsCollector) -> ConditionsMonitor:
    return ConditionsMonitor(
        weather_provider=MockWeatherProvider(reading=CLEAR_WEATHER, metrics=feed_metrics),
        traffic_provider=MockTrafficProvider(reading=LIGHT_TRAFFIC, metrics=feed_metrics),
        metrics=feed_metrics,
    )


@pytest.fixture
def advisor_service() -> AdvisorService:
    return AdvisorService(
        cache=AdvisorCache(InMemoryCacheStore(), ttl_seconds=60),
        circuit_breaker=CircuitBreaker("test_llm"),
    )


@pytest.fixture
def settings_service(monitor: ConditionsMonitor) -> SettingsService:
    return SettingsService(
        preferences=InMemoryPreferenceStore(),
        traffic_provider=monitor.traffic_provider,
        key_probe=key_probe(),
        circuit_breaker=CircuitBreaker("test_probe"),
    )


@pytest.fixture
def app(monitor, feed_metrics, advisor_service, settings_service):
    registry = FleetRegistry()
    application = create_app()
    application.dependency_overrides[get_monitor] = lambda: monitor
    application.dependency_overrides[get_feed_metrics] = lambda: feed_metrics
    application.dependency_overrides[get_conditions_service] = lambda: ConditionsService(monitor)
    application.dependency_overrides[get_dispatch_service] = lambda: DispatchService(monitor, registry)
    application.dependency_overrides[get_audit_service] = lambda: AuditService(monitor, hour_provider=lambda: 12)
    application.dependency_overrides[get_registry_service] = lambda: RegistryService(registry)
    application.dependency_overrides[get_advisor_service] = lambda: advisor_service
    application.dependency_overrides[get_settings_service] = lambda: settings_service
    application.dependency_overrides[get_rate_limiter] = lambda: SlidingWindowRateLimiter(
        InMemoryRateLimitStore(),
        limit_per_minute=1000,
    )
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
