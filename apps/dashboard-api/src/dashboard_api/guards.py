from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

from fastapi import Request
from pydantic import BaseModel

from dashboard_api.errors import ApiError
from dashboard_api.rate_limit import SlidingWindowRateLimiter
from dashboard_api.response import success_response

DEFAULT_TIMEOUT_SECONDS = 10.0


def resolve_client_key(request: Request) -> str:
    forwarded = request.headers.get("x-client-id")
    if forwarded:
        return forwarded
    if request.client:
        return request.client.host
    return "anonymous"


def _dump(data: object) -> object:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


async def call_with_guards(
    request: Request,
    rate_limiter: SlidingWindowRateLimiter,
    action: Callable[[], Awaitable[object]],
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    meta: dict[str, object] | None = None,
) -> dict:
    allowed = await rate_limiter.allow(resolve_client_key(request), now_seconds=time.time())
    if not allowed:
        raise ApiError("RATE_LIMIT_EXCEEDED", "Too many requests", 429)
    try:
        data = await asyncio.wait_for(action(), timeout=timeout_seconds)
    except ApiError:
        raise
    except TimeoutError as exc:
        raise ApiError("UPSTREAM_TIMEOUT", "Upstream timeout", 504) from exc
    except ValueError as exc:
        raise ApiError("VALIDATION_ERROR", str(exc), 422) from exc
    except Exception as exc:
        raise ApiError("UPSTREAM_FAILURE", "Dashboard service failed", 502) from exc
    return success_response(_dump(data), meta=meta)
