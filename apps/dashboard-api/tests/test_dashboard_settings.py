from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from conditions_feed.providers.tomtom import TomTomTrafficProvider

from dashboard_api.circuit_breaker import CircuitBreaker
from dashboard_api.dependencies import get_settings_service
from dashboard_api.errors import ApiError
from dashboard_api.preferences import TRAFFIC_KEY, InMemoryPreferenceStore
from dashboard_api.services.settings_service import SettingsService, mask_key


def probe_with(handler) -> TomTomTrafficProvider:
    transport = httpx.MockTransport(handler)
    return TomTomTrafficProvider(
        latitude=47.6,
        longitude=-122.3,
        api_key=None,
        retries=1,
        client_factory=lambda: httpx.AsyncClient(transport=transport, timeout=5.0),
    )


def accepting_probe() -> TomTomTrafficProvider:
    return probe_with(lambda _: httpx.Response(200, json={}))


def unreachable_probe() -> TomTomTrafficProvider:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return probe_with(handler)


def live_traffic_provider() -> TomTomTrafficProvider:
    return TomTomTrafficProvider(latitude=47.6, longitude=-122.3, api_key=None)


@pytest.mark.parametrize(
    ("key", "masked"),
    [("abcdefghijkl", "********ijkl"), ("short", "*****"), ("ab", "****")],
)
def test_mask_key(key: str, masked: str) -> None:
    assert mask_key(key) == masked


@pytest.mark.asyncio
async def test_traffic_key_override_updates_provider() -> None:
    provider = live_traffic_provider()
    preferences = InMemoryPreferenceStore()
    service = SettingsService(preferences, provider, accepting_probe(), CircuitBreaker("probe"))

    status = await service.set_traffic_key("  tomtom-override-1234 ")

    assert status.source == "override"
    assert status.masked_key.endswith("1234")
    assert await preferences.get(TRAFFIC_KEY) == "tomtom-override-1234"
    assert provider.has_api_key is True


@pytest.mark.asyncio
async def test_clearing_override_reverts_to_environment_key() -> None:
    provider = live_traffic_provider()
    service = SettingsService(
        InMemoryPreferenceStore(),
        provider,
        accepting_probe(),
        CircuitBreaker("probe"),
        environment_key="env-key-5678",
    )
    await service.set_traffic_key("override-key")

    status = await service.clear_traffic_key()

    assert status.source == "environment"
    assert status.masked_key.endswith("5678")
    assert provider.has_api_key is True


@pytest.mark.asyncio
async def test_placeholder_environment_key_is_not_configured() -> None:
    service = SettingsService(
        InMemoryPreferenceStore(),
        live_traffic_provider(),
        accepting_probe(),
        CircuitBreaker("probe"),
        environment_key="your_tomtom_api_key_here",
    )

    status = await service.traffic_key_status()

    assert status.configured is False
    assert status.source == "none"


@pytest.mark.asyncio
async def test_restore_applies_stored_override() -> None:
    preferences = InMemoryPreferenceStore()
    await preferences.set(TRAFFIC_KEY, "persisted-key")
    provider = live_traffic_provider()
    service = SettingsService(preferences, provider, accepting_probe(), CircuitBreaker("probe"))

    await service.restore_traffic_key()

    assert provider.has_api_key is True


@pytest.mark.asyncio
async def test_unreachable_probe_maps_to_502_then_opens_circuit() -> None:
    service = SettingsService(
        InMemoryPreferenceStore(),
        live_traffic_provider(),
        unreachable_probe(),
        CircuitBreaker("probe", failure_threshold=1),
    )

    with pytest.raises(ApiError) as first:
        await service.test_traffic_key("any-key")
    with pytest.raises(ApiError) as second:
        await service.test_traffic_key("any-key")

    assert first.value.status_code == 502
    assert second.value.status_code == 503


def test_traffic_key_round_trip_over_http(client: TestClient) -> None:
    assert client.get("/v1/settings/traffic-key").json()["data"]["configured"] is False

    put = client.put("/v1/settings/traffic-key", json={"api_key": "my-tomtom-key-9876"})
    assert put.status_code == 200
    assert put.json()["data"] == {"configured": True, "masked_key": "**************9876", "source": "override"}

    read = client.get("/v1/settings/traffic-key").json()["data"]
    assert "my-tomtom" not in str(read)

    deleted = client.delete("/v1/settings/traffic-key").json()["data"]
    assert deleted["configured"] is False


def test_put_traffic_key_rejects_empty_body(client: TestClient) -> None:
    response = client.put("/v1/settings/traffic-key", json={"api_key": ""})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_traffic_key_test_endpoint(client: TestClient) -> None:
    valid = client.post("/v1/settings/traffic-key/test", json={"api_key": "valid-key"})
    invalid = client.post("/v1/settings/traffic-key/test", json={"api_key": "wrong-key"})

    assert valid.json()["data"] == {"valid": True}
    assert invalid.json()["data"] == {"valid": False}


def test_traffic_key_test_uses_stored_key(client: TestClient) -> None:
    client.put("/v1/settings/traffic-key", json={"api_key": "valid-key"})

    response = client.post("/v1/settings/traffic-key/test")

    assert response.json()["data"] == {"valid": True}


def test_traffic_key_test_without_any_key(client: TestClient) -> None:
    response = client.post("/v1/settings/traffic-key/test")

    assert response.status_code == 422


def test_onboarding_flow(client: TestClient) -> None:
    before = client.get("/v1/settings/onboarding/web-1").json()["data"]
    dismissed = client.post("/v1/settings/onboarding/web-1/dismiss").json()["data"]
    after = client.get("/v1/settings/onboarding/web-1").json()["data"]
    other = client.get("/v1/settings/onboarding/web-2").json()["data"]

    assert before == {"client_id": "web-1", "tour_complete": False}
    assert dismissed["tour_complete"] is True
    assert after["tour_complete"] is True
    assert other["tour_complete"] is False


def test_onboarding_rejects_bad_client_id(app, client: TestClient) -> None:
    response = client.get("/v1/settings/onboarding/bad%20id")

    assert response.status_code == 422
    assert get_settings_service in app.dependency_overrides
