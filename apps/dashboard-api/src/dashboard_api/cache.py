from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from conditions_feed.core.models import ConditionsReport

logger = logging.getLogger(__name__)

ADVISOR_PREFIX = "advisor:"

CachedDocument = dict[str, Any]


class CacheStore(ABC):
    """TTL-bound JSON documents addressed by string key."""

    @abstractmethod
    async def get(self, key: str) -> CachedDocument | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: CachedDocument, ttl_seconds: int) -> None:
        raise NotImplementedError

    @abstractmethod
    async def invalidate_prefix(self, prefix: str) -> int:
        """Drop every live entry under ``prefix`` and return how many were dropped."""
        raise NotImplementedError


class RedisLikeIndexedClient(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def setex(self, key: str, seconds: int, value: str) -> bool: ...

    async def delete(self, *keys: str) -> int: ...

    async def sadd(self, key: str, *members: str) -> int: ...

    async def smembers(self, key: str) -> set[str]: ...

    async def srem(self, key: str, *members: str) -> int: ...


@dataclass(frozen=True)
class _Entry:
    document: CachedDocument
    expires_at: float


class InMemoryCacheStore(CacheStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, _Entry] = {}
        self._clock = clock

    async def get(self, key: str) -> CachedDocument | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._entries.pop(key)
            return None
        return entry.document

    async def set(self, key: str, value: CachedDocument, ttl_seconds: int) -> None:
        self._entries[key] = _Entry(document=value, expires_at=self._clock() + ttl_seconds)

    async def invalidate_prefix(self, prefix: str) -> int:
        now = self._clock()
        matched = [key for key in self._entries if key.startswith(prefix)]
        return sum(1 for key in matched if self._entries.pop(key).expires_at > now)


class RedisCacheStore(CacheStore):
    """Documents under ``namespace`` plus an index set used for prefix invalidation."""

    def __init__(self, client: RedisLikeIndexedClient, namespace: str = "dashboard:cache:") -> None:
        self._client = client
        self._namespace = namespace
        self._index_key = f"{namespace}__index__"

    async def get(self, key: str) -> CachedDocument | None:
        raw = await self._client.get(self._namespace + key)
        return json.loads(raw) if raw else None

    async def set(self, key: str, value: CachedDocument, ttl_seconds: int) -> None:
        full_key = self._namespace + key
        await self._client.setex(full_key, ttl_seconds, json.dumps(value, ensure_ascii=False))
        await self._client.sadd(self._index_key, full_key)

    async def invalidate_prefix(self, prefix: str) -> int:
        wanted = self._namespace + prefix
        matched = [key for key in await self._client.smembers(self._index_key) if key.startswith(wanted)]
        if not matched:
            return 0
        await self._client.srem(self._index_key, *matched)
        # Entries that already expired are not counted by DEL.
        return await self._client.delete(*matched)


class AdvisorCache:
    """Advisor explanations keyed by shipment and the conditions they were written for."""

    def __init__(self, store: CacheStore, ttl_seconds: int = 60) -> None:
        self.store = store
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def key_for(shipment_id: str, weather_impact: float, traffic_congestion: float) -> str:
        return f"{ADVISOR_PREFIX}{shipment_id}:{weather_impact:.2f}:{traffic_congestion:.2f}"

    async def get(self, key: str) -> CachedDocument | None:
        return await self.store.get(key)

    async def set(self, key: str, value: CachedDocument) -> None:
        await self.store.set(key, value, self.ttl_seconds)

    async def invalidate(self) -> int:
        return await self.store.invalidate_prefix(ADVISOR_PREFIX)

    async def on_refresh(self, report: ConditionsReport) -> None:
        removed = await self.invalidate()
        if removed:
            logger.debug(
                "advisor_cache_invalidated",
                extra={"removed": removed, "fetched_at": report.fetched_at.isoformat()},
            )
