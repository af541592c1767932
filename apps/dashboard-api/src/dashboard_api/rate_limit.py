from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_left
from collections import defaultdict
from typing import Protocol
from uuid import uuid4


class RateLimitStore(ABC):
    """Per-client request timestamps for a sliding window."""

    @abstractmethod
    async def hits_since(self, client_key: str, since_seconds: float) -> int:
        raise NotImplementedError

    @abstractmethod
    async def record(self, client_key: str, at_seconds: float, ttl_seconds: int) -> None:
        raise NotImplementedError


class RedisLikeSortedSetClient(Protocol):
    async def zadd(self, key: str, mapping: dict[str, float]) -> int: ...

    async def zremrangebyscore(self, key: str, min: float | str, max: float | str) -> int: ...

    async def zcard(self, key: str) -> int: ...

    async def expire(self, key: str, time: int) -> bool: ...


class InMemoryRateLimitStore(RateLimitStore):
    def __init__(self) -> None:
        self._hits: dict[str, list[float]] = defaultdict(list)

    async def hits_since(self, client_key: str, since_seconds: float) -> int:
        hits = self._hits.get(client_key)
        if hits is None:
            return 0
        del hits[: bisect_left(hits, since_seconds)]
        if not hits:
            del self._hits[client_key]
        return len(hits)

    async def record(self, client_key: str, at_seconds: float, ttl_seconds: int) -> None:
        self._hits[client_key].append(at_seconds)

    def tracked_clients(self) -> int:
        return len(self._hits)


class RedisRateLimitStore(RateLimitStore):
    def __init__(self, client: RedisLikeSortedSetClient, namespace: str = "dashboard:rate:") -> None:
        self._client = client
        self._namespace = namespace

    async def hits_since(self, client_key: str, since_seconds: float) -> int:
        key = self._namespace + client_key
        await self._client.zremrangebyscore(key, "-inf", f"({since_seconds}")
        return await self._client.zcard(key)

    async def record(self, client_key: str, at_seconds: float, ttl_seconds: int) -> None:
        key = self._namespace + client_key
        await self._client.zadd(key, {uuid4().hex: at_seconds})
        await self._client.expire(key, ttl_seconds)


class SlidingWindowRateLimiter:
    """Admits at most ``limit_per_minute`` requests per client in any ``window_seconds`` span.

    Rejected requests are not recorded, so a throttled dashboard recovers as
    soon as its oldest admitted poll leaves the window.
    """

    def __init__(self, store: RateLimitStore, limit_per_minute: int = 120, window_seconds: int = 60) -> None:
        self.store = store
        self.limit = limit_per_minute
        self.window_seconds = window_seconds

    async def allow(self, client_key: str, now_seconds: float) -> bool:
        if await self.store.hits_since(client_key, now_seconds - self.window_seconds) >= self.limit:
            return False
        await self.store.record(client_key, now_seconds, ttl_seconds=self.window_seconds + 1)
        return True
