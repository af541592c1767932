from __future__ import annotations

import logging

from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.monitor import ConditionsMonitor
from conditions_feed.providers.factory import build_key_probe, build_traffic_provider, build_weather_provider
from devkit.config import load_settings
from fleet_registry.registry import FleetRegistry

from dashboard_api.cache import AdvisorCache, InMemoryCacheStore, RedisCacheStore
from dashboard_api.circuit_breaker import CircuitBreaker
from dashboard_api.clients.chat_completion_client import ChatCompletionClient, is_configured_llm_key
from dashboard_api.preferences import InMemoryPreferenceStore, RedisPreferenceStore
from dashboard_api.rate_limit import InMemoryRateLimitStore, RedisRateLimitStore, SlidingWindowRateLimiter
from dashboard_api.services.advisor_service import AdvisorService
from dashboard_api.services.audit_service import AuditService
from dashboard_api.services.conditions_service import ConditionsService
from dashboard_api.services.dispatch_service import DispatchService
from dashboard_api.services.registry_service import RegistryService
from dashboard_api.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

settings = load_settings("dashboard-api")

_feed_metrics = InMemoryFeedMetricsCollector()
_monitor = ConditionsMonitor(
    weather_provider=build_weather_provider(settings, _feed_metrics),
    traffic_provider=build_traffic_provider(settings, _feed_metrics),
    refresh_seconds=settings.CONDITIONS_REFRESH_SECONDS,
    metrics=_feed_metrics,
)
_registry = FleetRegistry()

if settings.REDIS_URL:
    try:
        import redis.asyncio as redis

        redis_client = redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
        _rate_limit_store = RedisRateLimitStore(redis_client)
        _cache_store = RedisCacheStore(redis_client)
        _preference_store = RedisPreferenceStore(redis_client)
    except Exception:
        logger.exception("redis_unavailable_using_memory")
        _rate_limit_store = InMemoryRateLimitStore()
        _cache_store = InMemoryCacheStore()
        _preference_store = InMemoryPreferenceStore()
else:
    _rate_limit_store = InMemoryRateLimitStore()
    _cache_store = InMemoryCacheStore()
    _preference_store = InMemoryPreferenceStore()

_rate_limiter = SlidingWindowRateLimiter(_rate_limit_store, limit_per_minute=120, window_seconds=60)
_advisor_cache = AdvisorCache(store=_cache_store, ttl_seconds=settings.API_CACHE_TTL_SECONDS)
_monitor.add_listener(_advisor_cache.on_refresh)

_llm_client = (
    ChatCompletionClient(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
    )
    if is_configured_llm_key(settings.OPENAI_API_KEY)
    else None
)
_advisor_service = AdvisorService(
    cache=_advisor_cache,
    circuit_breaker=CircuitBreaker("advisor_llm", failure_threshold=3, recovery_timeout_seconds=30),
    client=_llm_client,
)
_settings_service = SettingsService(
    preferences=_preference_store,
    traffic_provider=_monitor.traffic_provider,
    key_probe=build_key_probe(settings),
    circuit_breaker=CircuitBreaker("traffic_key_probe", failure_threshold=3, recovery_timeout_seconds=30),
    environment_key=settings.TOMTOM_API_KEY,
    probe_timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
)
_conditions_service = ConditionsService(_monitor)
_dispatch_service = DispatchService(_monitor, _registry)
_audit_service = AuditService(_monitor)
_registry_service = RegistryService(_registry)


def get_monitor() -> ConditionsMonitor:
    return _monitor


def get_feed_metrics() -> InMemoryFeedMetricsCollector:
    return _feed_metrics


def get_rate_limiter() -> SlidingWindowRateLimiter:
    return _rate_limiter


def get_advisor_cache() -> AdvisorCache:
    return _advisor_cache


def get_conditions_service() -> ConditionsService:
    return _conditions_service


def get_dispatch_service() -> DispatchService:
    return _dispatch_service


def get_advisor_service() -> AdvisorService:
    return _advisor_service


def get_audit_service() -> AuditService:
    return _audit_service


def get_registry_service() -> RegistryService:
    return _registry_service


def get_settings_service() -> SettingsService:
    return _settings_service
