import pytest
from fastapi.testclient import TestClient


def test_dispatch_defaults_to_most_severe_in_transit(client: TestClient) -> None:
    body = client.get("/v1/dispatch").json()
    data = body["data"]

    assert body["success"] is True
    assert data["shipment"]["id"] == "S002"
    assert data["route_strategy"]["route_name"] == "Highway Express via I-5 Direct Route"
    assert data["route_strategy"]["urgency"] == "critical"
    assert data["fleet"] == {"in_transit": 3, "pending": 2, "delivered": 0, "critical": 2, "hospitals": 5}


def test_dispatch_scores_selected_shipment(client: TestClient) -> None:
    data = client.get("/v1/dispatch?shipment_id=S001").json()["data"]

    assert data["shipment"]["cargo"]["description"] == "O-Negative Blood Units"
    assert data["shipment"]["est_arrival_minutes"] == 12
    assert data["life_cost"]["score"] == pytest.approx(round(12 * 0.3 * 1.25 + 9.2, 2))
    assert data["life_cost"]["is_high_risk"] is False
    assert data["life_cost"]["formula"] == "LC = (12 × 0.3 × (1 + 0.25)) + 9.2"
    assert data["conditions"]["weather"]["source"] == "mock"


def test_dispatch_unknown_shipment_is_404(client: TestClient) -> None:
    response = client.get("/v1/dispatch?shipment_id=S999")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SHIPMENT_NOT_FOUND"


def test_route_strategy_endpoint(client: TestClient) -> None:
    data = client.get("/v1/route-strategy?weather_impact=0.2&traffic_congestion=0.7&severity=9.5").json()["data"]

    assert data["urgency"] == "critical"
    assert "Emergency Lane" in data["route_name"]


def test_life_cost_endpoint(client: TestClient) -> None:
    data = client.get(
        "/v1/life-cost?est_arrival_minutes=15&weather_impact=0.7&traffic_congestion=0.25&severity=8.5"
    ).json()["data"]

    assert data["score"] == pytest.approx(round(15 * 0.7 * 1.25 + 8.5, 2))
    assert data["is_high_risk"] is True


def test_life_cost_requires_inputs(client: TestClient) -> None:
    response = client.get("/v1/life-cost?weather_impact=0.7")

    assert response.status_code == 422
