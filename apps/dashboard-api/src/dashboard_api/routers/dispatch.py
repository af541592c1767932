from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from dashboard_api.dependencies import get_dispatch_service, get_rate_limiter
from dashboard_api.guards import call_with_guards
from dashboard_api.rate_limit import SlidingWindowRateLimiter
from dashboard_api.services.dispatch_service import DispatchService

router = APIRouter(prefix="/v1", tags=["dispatch"])


@router.get("/dispatch")
async def dispatch(
    request: Request,
    shipment_id: str | None = Query(default=None, max_length=32),
    service: DispatchService = Depends(get_dispatch_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, lambda: service.dispatch(shipment_id))


@router.get("/route-strategy")
async def route_strategy(
    request: Request,
    weather_impact: float = Query(..., ge=0, le=1),
    traffic_congestion: float = Query(..., ge=0, le=1),
    severity: float = Query(..., ge=0, le=10),
    service: DispatchService = Depends(get_dispatch_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(
        request,
        rate_limiter,
        lambda: service.route_strategy(weather_impact, traffic_congestion, severity),
    )


@router.get("/life-cost")
async def life_cost(
    request: Request,
    est_arrival_minutes: float = Query(..., ge=0),
    weather_impact: float = Query(..., ge=0, le=1),
    traffic_congestion: float = Query(..., ge=0, le=1),
    severity: float = Query(..., ge=0, le=10),
    service: DispatchService = Depends(get_dispatch_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(
        request,
        rate_limiter,
        lambda: service.life_cost(est_arrival_minutes, weather_impact, traffic_congestion, severity),
    )
