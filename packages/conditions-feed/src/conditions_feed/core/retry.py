from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from conditions_feed.core.exceptions import ProviderRequestError

T = TypeVar("T")
logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class BackoffPolicy:
    """How many times a provider call is attempted and how long to pause in between."""

    attempts: int = 3
    base_delay_seconds: float = 0.2
    max_delay_seconds: float = 5.0

    def delay_for(self, failed_attempts: int) -> float:
        return min(self.base_delay_seconds * 2 ** (failed_attempts - 1), self.max_delay_seconds)


async def call_with_backoff(
    operation: Callable[[], Awaitable[T]],
    policy: BackoffPolicy,
    should_retry: Callable[[Exception], bool] = lambda _: True,
    on_retry: Callable[[int, float], None] | None = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Await ``operation`` under ``policy``.

    A final failure, whether refused by ``should_retry`` or the last allowed
    attempt, is re-raised as ``ProviderRequestError`` chained to the cause.
    """
    failed = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            failed += 1
            if failed >= policy.attempts or not should_retry(exc):
                raise ProviderRequestError(str(exc)) from exc
            pause = policy.delay_for(failed)
            logger.debug("provider_retry_scheduled", extra={"attempt": failed, "delay_seconds": pause})
            if on_retry is not None:
                on_retry(failed, pause)
            await sleep(pause)
