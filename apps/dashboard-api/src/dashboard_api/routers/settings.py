from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from dashboard_api.dependencies import get_rate_limiter, get_settings_service
from dashboard_api.guards import call_with_guards
from dashboard_api.rate_limit import SlidingWindowRateLimiter
from dashboard_api.schemas.settings import TrafficKeyTestRequest, TrafficKeyUpdate
from dashboard_api.services.settings_service import SettingsService

router = APIRouter(prefix="/v1/settings", tags=["settings"])

ClientId = Annotated[str, Path(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")]


@router.get("/traffic-key")
async def get_traffic_key(
    request: Request,
    service: SettingsService = Depends(get_settings_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, service.traffic_key_status)


@router.put("/traffic-key")
async def put_traffic_key(
    request: Request,
    body: TrafficKeyUpdate,
    service: SettingsService = Depends(get_settings_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, lambda: service.set_traffic_key(body.api_key))


@router.delete("/traffic-key")
async def delete_traffic_key(
    request: Request,
    service: SettingsService = Depends(get_settings_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, service.clear_traffic_key)


@router.post("/traffic-key/test")
async def probe_traffic_key(
    request: Request,
    body: TrafficKeyTestRequest | None = None,
    service: SettingsService = Depends(get_settings_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    candidate = body.api_key if body else None
    return await call_with_guards(request, rate_limiter, lambda: service.test_traffic_key(candidate))


@router.get("/onboarding/{client_id}")
async def get_onboarding(
    request: Request,
    client_id: ClientId,
    service: SettingsService = Depends(get_settings_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, lambda: service.onboarding_state(client_id))


@router.post("/onboarding/{client_id}/dismiss")
async def dismiss_onboarding(
    request: Request,
    client_id: ClientId,
    service: SettingsService = Depends(get_settings_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, lambda: service.dismiss_onboarding(client_id))
