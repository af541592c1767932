from __future__ import annotations

from collections import defaultdict

import pytest

from dashboard_api.cache import AdvisorCache, InMemoryCacheStore, RedisCacheStore
from dashboard_api.circuit_breaker import CircuitBreaker, CircuitOpenError
from dashboard_api.preferences import InMemoryPreferenceStore, RedisPreferenceStore, onboarding_key
from dashboard_api.rate_limit import InMemoryRateLimitStore, RedisRateLimitStore, SlidingWindowRateLimiter
from dashboard_api.response import error_response, success_response


def _above(score: float, bound: float | str) -> bool:
    text = str(bound)
    if text.startswith("("):
        return score > float(text[1:])
    return score >= float(text)


def _below(score: float, bound: float | str) -> bool:
    text = str(bound)
    if text.startswith("("):
        return score < float(text[1:])
    return score <= float(text)


class FakeRedis:
    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._sets: dict[str, dict[str, float]] = defaultdict(dict)
        self._members: dict[str, set[str]] = defaultdict(set)

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._values[key] = value
        return True

    async def setex(self, key: str, seconds: int, value: str) -> bool:
        _ = seconds
        self._values[key] = value
        return True

    async def sadd(self, key: str, *members: str) -> int:
        before = len(self._members[key])
        self._members[key].update(members)
        return len(self._members[key]) - before

    async def smembers(self, key: str) -> set[str]:
        return set(self._members[key])

    async def srem(self, key: str, *members: str) -> int:
        removed = self._members[key].intersection(members)
        self._members[key].difference_update(members)
        return len(removed)

    async def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self._values.pop(key, None) is not None)

    async def zadd(self, key: str, mapping: dict[str, float]) -> int:
        self._sets[key].update(mapping)
        return len(mapping)

    async def zremrangebyscore(self, key: str, min: float | str, max: float | str) -> int:
        members = self._sets[key]
        stale = [member for member, score in members.items() if _above(score, min) and _below(score, max)]
        for member in stale:
            members.pop(member)
        return len(stale)

    async def zcard(self, key: str) -> int:
        return len(self._sets[key])

    async def expire(self, key: str, time: int) -> bool:
        _ = (key, time)
        return True


def test_envelopes() -> None:
    assert success_response({"id": 1}) == {"success": True, "data": {"id": 1}, "meta": {}}
    assert error_response("NOT_FOUND", "missing") == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "missing"},
    }


@pytest.mark.asyncio
async def test_circuit_breaker_opens_and_recovers() -> None:
    breaker = CircuitBreaker("llm", failure_threshold=2, recovery_timeout_seconds=10)

    async def fail_call() -> str:
        raise RuntimeError("upstream failure")

    async def success_call() -> str:
        return "ok"

    with pytest.raises(RuntimeError):
        await breaker.call(fail_call, now_seconds=100.0)
    with pytest.raises(RuntimeError):
        await breaker.call(fail_call, now_seconds=101.0)
    assert breaker.is_open(102.0) is True
    with pytest.raises(CircuitOpenError):
        await breaker.call(success_call, now_seconds=102.0)

    assert await breaker.call(success_call, now_seconds=112.0) == "ok"
    assert breaker.is_open(112.0) is False


@pytest.mark.asyncio
async def test_circuit_breaker_failed_trial_call_reopens() -> None:
    breaker = CircuitBreaker("probe", failure_threshold=3, recovery_timeout_seconds=5)

    async def fail_call() -> str:
        raise RuntimeError("still down")

    for now in (0.0, 1.0, 2.0):
        with pytest.raises(RuntimeError):
            await breaker.call(fail_call, now_seconds=now)
    assert breaker.state(6.9) == "open"
    assert breaker.state(7.0) == "half_open"

    with pytest.raises(RuntimeError):
        await breaker.call(fail_call, now_seconds=7.0)
    assert breaker.state(8.0) == "open"


@pytest.mark.asyncio
async def test_circuit_breaker_success_resets_failures() -> None:
    breaker = CircuitBreaker("llm", failure_threshold=2)

    async def fail_call() -> str:
        raise RuntimeError("upstream failure")

    async def success_call() -> str:
        return "ok"

    with pytest.raises(RuntimeError):
        await breaker.call(fail_call, now_seconds=100.0)
    await breaker.call(success_call, now_seconds=101.0)
    with pytest.raises(RuntimeError):
        await breaker.call(fail_call, now_seconds=102.0)
    assert breaker.is_open(103.0) is False


@pytest.mark.asyncio
async def test_rate_limiter_blocks_after_limit_and_recovers() -> None:
    limiter = SlidingWindowRateLimiter(InMemoryRateLimitStore(), limit_per_minute=2, window_seconds=60)

    assert await limiter.allow("client-a", 1000.0) is True
    assert await limiter.allow("client-a", 1001.0) is True
    assert await limiter.allow("client-a", 1002.0) is False
    assert await limiter.allow("client-b", 1002.0) is True
    assert await limiter.allow("client-a", 1061.0) is True


@pytest.mark.asyncio
async def test_redis_rate_limit_store_counts_hits_in_window() -> None:
    redis = FakeRedis()
    store = RedisRateLimitStore(redis)
    for at in (100.0, 120.0, 150.0):
        await store.record("client-a", at, ttl_seconds=61)

    assert await store.hits_since("client-a", since_seconds=120.0) == 2
    assert await redis.zcard("dashboard:rate:client-a") == 2


@pytest.mark.asyncio
async def test_in_memory_cache_expires_entries() -> None:
    now = {"value": 0.0}
    store = InMemoryCacheStore(clock=lambda: now["value"])
    await store.set("advisor:S001:0.30:0.25", {"explanation": "x"}, ttl_seconds=60)

    assert await store.get("advisor:S001:0.30:0.25") == {"explanation": "x"}
    now["value"] = 61.0
    assert await store.get("advisor:S001:0.30:0.25") is None


@pytest.mark.asyncio
async def test_redis_cache_store_round_trip_and_prefix_invalidation() -> None:
    cache = AdvisorCache(RedisCacheStore(FakeRedis()), ttl_seconds=30)
    key = AdvisorCache.key_for("S002", 0.8, 0.25)
    await cache.set(key, {"explanation": "→ corridor"})

    assert key == "advisor:S002:0.80:0.25"
    assert await cache.get(key) == {"explanation": "→ corridor"}
    assert await cache.invalidate() == 1
    assert await cache.get(key) is None


@pytest.mark.asyncio
async def test_in_memory_invalidation_counts_only_live_entries() -> None:
    now = {"value": 0.0}
    store = InMemoryCacheStore(clock=lambda: now["value"])
    await store.set("advisor:S001:0.30:0.25", {"explanation": "old"}, ttl_seconds=10)
    await store.set("advisor:S002:0.30:0.25", {"explanation": "new"}, ttl_seconds=100)
    await store.set("other:S002", {"explanation": "kept"}, ttl_seconds=100)
    now["value"] = 50.0

    assert await store.invalidate_prefix("advisor:") == 1
    assert await store.get("other:S002") == {"explanation": "kept"}


@pytest.mark.asyncio
async def test_preference_stores() -> None:
    for store in (InMemoryPreferenceStore(), RedisPreferenceStore(FakeRedis())):
        assert await store.get(onboarding_key("web-1")) is None
        await store.set(onboarding_key("web-1"), "true")
        assert await store.get(onboarding_key("web-1")) == "true"
        assert await store.delete(onboarding_key("web-1")) is True
        assert await store.delete(onboarding_key("web-1")) is False


@pytest.mark.asyncio
async def test_in_memory_rate_limit_store_forgets_idle_clients() -> None:
    store = InMemoryRateLimitStore()
    limiter = SlidingWindowRateLimiter(store, limit_per_minute=5, window_seconds=60)
    for index in range(3):
        await limiter.allow(f"client-{index}", 1000.0)
    assert store.tracked_clients() == 3

    for index in range(3):
        assert await store.hits_since(f"client-{index}", since_seconds=1100.0) == 0

    assert store.tracked_clients() == 0
