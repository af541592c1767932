from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

TRAFFIC_KEY = "settings:tomtom_api_key"
ONBOARDING_PREFIX = "onboarding:"


class PreferenceStore(ABC):
    """String key-value storage for dashboard preferences."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> bool:
        raise NotImplementedError


class RedisLikeKeyValueClient(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> bool | None: ...

    async def delete(self, *keys: str) -> int: ...


class InMemoryPreferenceStore(PreferenceStore):
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None


class RedisPreferenceStore(PreferenceStore):
    def __init__(self, client: RedisLikeKeyValueClient, namespace: str = "dashboard:prefs:") -> None:
        self._client = client
        self._namespace = namespace

    async def get(self, key: str) -> str | None:
        return await self._client.get(self._namespace + key)

    async def set(self, key: str, value: str) -> None:
        await self._client.set(self._namespace + key, value)

    async def delete(self, key: str) -> bool:
        return await self._client.delete(self._namespace + key) > 0


def onboarding_key(client_id: str) -> str:
    return f"{ONBOARDING_PREFIX}{client_id}"
