from __future__ import annotations

import asyncio
import logging
import time

from conditions_feed.core.exceptions import FeedError
from conditions_feed.providers.base import TrafficProvider
from conditions_feed.providers.tomtom import TomTomTrafficProvider, is_configured_key

from dashboard_api.circuit_breaker import CircuitBreaker, CircuitOpenError
from dashboard_api.errors import ApiError
from dashboard_api.preferences import TRAFFIC_KEY, PreferenceStore, onboarding_key
from dashboard_api.schemas.settings import OnboardingState, TrafficKeyStatus, TrafficKeyTestResult

logger = logging.getLogger(__name__)


def mask_key(api_key: str) -> str:
    visible = api_key[-4:] if len(api_key) > 8 else ""
    return "*" * max(len(api_key) - len(visible), 4) + visible


class SettingsService:
    """Traffic key override and onboarding flags, persisted in a preference store."""

    def __init__(
        self,
        preferences: PreferenceStore,
        traffic_provider: TrafficProvider,
        key_probe: TomTomTrafficProvider,
        circuit_breaker: CircuitBreaker,
        environment_key: str | None = None,
        probe_timeout_seconds: float = 5.0,
    ) -> None:
        self._preferences = preferences
        self._traffic_provider = traffic_provider
        self._key_probe = key_probe
        self._circuit_breaker = circuit_breaker
        self._environment_key = environment_key
        self._probe_timeout_seconds = probe_timeout_seconds

    async def traffic_key_status(self) -> TrafficKeyStatus:
        override = await self._preferences.get(TRAFFIC_KEY)
        if override:
            return TrafficKeyStatus(configured=True, masked_key=mask_key(override), source="override")
        if is_configured_key(self._environment_key):
            return TrafficKeyStatus(
                configured=True,
                masked_key=mask_key(self._environment_key),
                source="environment",
            )
        return TrafficKeyStatus(configured=False, masked_key=None, source="none")

    async def set_traffic_key(self, api_key: str) -> TrafficKeyStatus:
        api_key = api_key.strip()
        if not api_key:
            raise ApiError("VALIDATION_ERROR", "api_key must not be blank", 422)
        await self._preferences.set(TRAFFIC_KEY, api_key)
        self._apply_key(api_key)
        logger.info("traffic_key_updated", extra={"source": "override"})
        return await self.traffic_key_status()

    async def clear_traffic_key(self) -> TrafficKeyStatus:
        removed = await self._preferences.delete(TRAFFIC_KEY)
        self._apply_key(self._environment_key)
        logger.info("traffic_key_cleared", extra={"removed": removed})
        return await self.traffic_key_status()

    async def restore_traffic_key(self) -> None:
        override = await self._preferences.get(TRAFFIC_KEY)
        if override:
            self._apply_key(override)

    async def test_traffic_key(self, api_key: str | None = None) -> TrafficKeyTestResult:
        candidate = (api_key or "").strip() or await self._effective_key()
        if not candidate:
            raise ApiError("VALIDATION_ERROR", "No traffic API key to test", 422)
        try:
            valid = await asyncio.wait_for(
                self._circuit_breaker.call(lambda: self._key_probe.verify_key(candidate), now_seconds=time.time()),
                timeout=self._probe_timeout_seconds,
            )
        except CircuitOpenError as exc:
            raise ApiError("UPSTREAM_UNAVAILABLE", "Please retry later", 503) from exc
        except TimeoutError as exc:
            raise ApiError("UPSTREAM_TIMEOUT", "Traffic provider timeout", 504) from exc
        except FeedError as exc:
            raise ApiError("UPSTREAM_FAILURE", "Traffic provider unreachable", 502) from exc
        logger.info("traffic_key_tested", extra={"valid": valid})
        return TrafficKeyTestResult(valid=valid)

    async def onboarding_state(self, client_id: str) -> OnboardingState:
        flag = await self._preferences.get(onboarding_key(client_id))
        return OnboardingState(client_id=client_id, tour_complete=flag == "true")

    async def dismiss_onboarding(self, client_id: str) -> OnboardingState:
        await self._preferences.set(onboarding_key(client_id), "true")
        return OnboardingState(client_id=client_id, tour_complete=True)

    async def _effective_key(self) -> str | None:
        override = await self._preferences.get(TRAFFIC_KEY)
        if override:
            return override
        if is_configured_key(self._environment_key):
            return self._environment_key
        return None

    def _apply_key(self, api_key: str | None) -> None:
        # Mock providers have no key to swap.
        if isinstance(self._traffic_provider, TomTomTrafficProvider):
            self._traffic_provider.update_api_key(api_key)
