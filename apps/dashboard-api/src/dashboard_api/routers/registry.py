from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query, Request

from dashboard_api.dependencies import get_rate_limiter, get_registry_service
from dashboard_api.guards import call_with_guards
from dashboard_api.rate_limit import SlidingWindowRateLimiter
from dashboard_api.services.registry_service import RegistryService

router = APIRouter(prefix="/v1/registry", tags=["registry"])


@router.get("/hospitals")
async def list_hospitals(
    request: Request,
    service: RegistryService = Depends(get_registry_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, service.list_hospitals)


@router.get("/shipments")
async def list_shipments(
    request: Request,
    status: Literal["in-transit", "pending", "delivered"] | None = None,
    service: RegistryService = Depends(get_registry_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, lambda: service.list_shipments(status))


@router.get("/shipments/{shipment_id}")
async def get_shipment(
    request: Request,
    shipment_id: str,
    service: RegistryService = Depends(get_registry_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, lambda: service.get_shipment(shipment_id))


@router.get("/search")
async def search(
    request: Request,
    q: str = Query(default="", max_length=100),
    service: RegistryService = Depends(get_registry_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> dict:
    return await call_with_guards(request, rate_limiter, lambda: service.search(q))
