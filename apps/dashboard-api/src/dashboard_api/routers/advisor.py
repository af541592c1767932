from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from conditions_feed.monitor import ConditionsMonitor

from dashboard_api.dependencies import get_advisor_service, get_monitor, get_rate_limiter, get_registry_service
from dashboard_api.guards import call_with_guards
from dashboard_api.rate_limit import SlidingWindowRateLimiter
from dashboard_api.services.advisor_service import AdvisorService
from dashboard_api.services.registry_service import RegistryService

router = APIRouter(prefix="/v1/advisor", tags=["advisor"])


@router.get("")
async def advise(
    request: Request,
    shipment_id: str | None = Query(default=None, max_length=32),
    service: AdvisorService = Depends(get_advisor_service),
    registry: RegistryService = Depends(get_registry_service),
    monitor: ConditionsMonitor = Depends(get_monitor),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    async def action():
        shipment = registry.resolve_shipment(shipment_id)
        return await service.explain(shipment, await monitor.current())

    return await call_with_guards(
        request,
        rate_limiter,
        action,
        meta={"llm_enabled": service.llm_enabled},
    )
