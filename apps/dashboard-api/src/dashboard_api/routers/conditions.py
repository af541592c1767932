from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from dashboard_api.dependencies import get_conditions_service, get_rate_limiter
from dashboard_api.guards import call_with_guards
from dashboard_api.rate_limit import SlidingWindowRateLimiter
from dashboard_api.services.conditions_service import ConditionsService

router = APIRouter(prefix="/v1/conditions", tags=["conditions"])


@router.get("")
async def current_conditions(
    request: Request,
    service: ConditionsService = Depends(get_conditions_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, service.current)


@router.post("/refresh")
async def refresh_conditions(
    request: Request,
    service: ConditionsService = Depends(get_conditions_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, service.refresh)
