from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from dashboard_api.dependencies import get_audit_service, get_rate_limiter
from dashboard_api.guards import call_with_guards
from dashboard_api.rate_limit import SlidingWindowRateLimiter
from dashboard_api.services.audit_service import AuditService

router = APIRouter(prefix="/v1/audit", tags=["audit"])


@router.get("")
async def audit(
    request: Request,
    severity: float | None = Query(default=None, ge=0, le=10),
    weather_impact: float | None = Query(default=None, ge=0, le=1),
    traffic_congestion: float | None = Query(default=None, ge=0, le=1),
    hour: int | None = Query(default=None, ge=0, le=23),
    service: AuditService = Depends(get_audit_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(
        request,
        rate_limiter,
        lambda: service.audit(
            severity=severity,
            weather_impact=weather_impact,
            traffic_congestion=traffic_congestion,
            hour=hour,
        ),
    )
