from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Literal, TypeVar

T = TypeVar("T")
logger = logging.getLogger(__name__)

CircuitState = Literal["closed", "open", "half_open"]


class CircuitOpenError(Exception):
    """Raised when calls are blocked by an open circuit."""


class CircuitBreaker:
    """Guards one upstream dependency.

    ``failure_threshold`` consecutive failures open the circuit. Once
    ``recovery_timeout_seconds`` have passed a single trial call is allowed;
    its outcome closes the circuit again or re-opens it immediately.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 3,
        recovery_timeout_seconds: float = 30,
    ) -> None:
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout_seconds = recovery_timeout_seconds
        self._failures = 0
        self._opened_at: float | None = None

    def state(self, now_seconds: float) -> CircuitState:
        if self._opened_at is None:
            return "closed"
        if now_seconds - self._opened_at < self.recovery_timeout_seconds:
            return "open"
        return "half_open"

    def is_open(self, now_seconds: float) -> bool:
        return self.state(now_seconds) == "open"

    async def call(self, operation: Callable[[], Awaitable[T]], now_seconds: float) -> T:
        state = self.state(now_seconds)
        if state == "open":
            logger.warning("circuit_open", extra={"circuit": self.name, "now_seconds": now_seconds})
            raise CircuitOpenError(f"{self.name} circuit is open")
        if state == "half_open":
            logger.info("circuit_half_open", extra={"circuit": self.name})

        try:
            result = await operation()
        except Exception:
            self._failures += 1
            if state == "half_open" or self._failures >= self.failure_threshold:
                self._trip(now_seconds)
            raise
        self._failures = 0
        self._opened_at = None
        return result

    def _trip(self, now_seconds: float) -> None:
        self._opened_at = now_seconds
        logger.error(
            "circuit_opened",
            extra={"circuit": self.name, "failure_count": self._failures, "opened_at_seconds": now_seconds},
        )
