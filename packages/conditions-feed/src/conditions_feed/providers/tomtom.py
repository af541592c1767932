from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from conditions_feed.core.exceptions import FeedError, ProviderPayloadError, ProviderRequestError
from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.core.models import FALLBACK_TRAFFIC, TrafficReading, clamp_ratio
from conditions_feed.providers.base import HttpJsonFetcher, TrafficProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.tomtom.com"
FLOW_SEGMENT_PATH = "/traffic/services/4/flowSegmentData/absolute/10/json"
PLACEHOLDER_KEYS = frozenset({"your_tomtom_api_key_here", "demo_mode"})
DEFAULT_CURRENT_SPEED = 50.0
DEFAULT_FREE_FLOW_SPEED = 60.0


def is_configured_key(api_key: str | None) -> bool:
    return bool(api_key) and api_key not in PLACEHOLDER_KEYS


def congestion_from_speeds(current_speed: float, free_flow_speed: float) -> float:
    return clamp_ratio(1 - (current_speed / free_flow_speed))


class TomTomTrafficProvider(TrafficProvider):
    provider_name = "tomtom"

    def __init__(
        self,
        latitude: float,
        longitude: float,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 5.0,
        retries: int = 3,
        base_delay_seconds: float = 0.2,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        metrics: InMemoryFeedMetricsCollector | None = None,
    ) -> None:
        super().__init__(metrics)
        self._latitude = latitude
        self._longitude = longitude
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._fetcher = HttpJsonFetcher(
            timeout_seconds=timeout_seconds,
            retries=retries,
            base_delay_seconds=base_delay_seconds,
            client_factory=client_factory,
            on_retry=self._on_retry,
        )

    @property
    def has_api_key(self) -> bool:
        return is_configured_key(self._api_key)

    def update_api_key(self, api_key: str | None) -> None:
        self._api_key = api_key

    async def fetch_traffic(self) -> TrafficReading:
        if not self.has_api_key:
            logger.warning("traffic_key_not_configured", extra={"provider": self.provider_name})
            self.record_fetch("unconfigured")
            return FALLBACK_TRAFFIC
        try:
            payload = await self._fetcher.get_json(self._flow_url(), self._params(self._api_key))
            reading = self._parse(payload)
        except FeedError as exc:
            logger.warning(
                "traffic_fetch_failed",
                extra={"provider": self.provider_name, "error": str(exc)},
            )
            self.record_fetch("fallback")
            return FALLBACK_TRAFFIC
        self.record_fetch("live")
        return reading

    async def verify_key(self, api_key: str) -> bool:
        """Probe the flow endpoint once with ``api_key``; True only for a 2xx reply.

        An unreachable provider raises ``ProviderRequestError`` rather than
        reporting the key as invalid.
        """
        try:
            status = await self._fetcher.get_status(self._flow_url(), self._params(api_key))
        except httpx.HTTPError as exc:
            logger.warning("traffic_key_probe_failed", extra={"provider": self.provider_name, "error": str(exc)})
            raise ProviderRequestError(str(exc)) from exc
        return 200 <= status < 300

    def _flow_url(self) -> str:
        return f"{self._base_url}{FLOW_SEGMENT_PATH}"

    def _params(self, api_key: str | None) -> dict[str, Any]:
        return {"point": f"{self._latitude},{self._longitude}", "key": api_key}

    def _parse(self, payload: Any) -> TrafficReading:
        segment = payload.get("flowSegmentData") if isinstance(payload, dict) else None
        if segment is not None and not isinstance(segment, dict):
            raise ProviderPayloadError("unexpected tomtom payload: flowSegmentData is not an object")
        segment = segment or {}
        try:
            current_speed = float(segment.get("currentSpeed") or DEFAULT_CURRENT_SPEED)
            free_flow_speed = float(segment.get("freeFlowSpeed") or DEFAULT_FREE_FLOW_SPEED)
        except (TypeError, ValueError) as exc:
            raise ProviderPayloadError(f"unexpected tomtom payload: {exc}") from exc
        return TrafficReading(
            current_speed_kmh=current_speed,
            free_flow_speed_kmh=free_flow_speed,
            congestion_level=congestion_from_speeds(current_speed, free_flow_speed),
            source="live",
        )

    def _on_retry(self, _: int, __: float) -> None:
        if self._metrics:
            self._metrics.increment_retry(self.provider_name)
