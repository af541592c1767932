import pytest
from fastapi.testclient import TestClient


def test_audit_with_explicit_inputs(client: TestClient) -> None:
    data = client.get("/v1/audit?severity=8.5&weather_impact=0.3&traffic_congestion=0.25&hour=12").json()["data"]

    assert [item["value"] for item in data["contributions"]] == [3.05, 2.1, -1.25, -1.05, -0.2, 1.2]
    assert data["contributions"][4]["name"] == "Time of Day (Off-Peak)"
    assert data["contributions"][0]["start"] == 0.0
    assert data["summary"]["net_score"] == pytest.approx(3.85)
    assert data["summary"]["verdict"] == "strong positive"
    assert data["recommended_route"] == "Highway Express — I-5 Direct Route"
    assert data["active_path"] == [
        "Medical Severity ≥ 7? yes",
        "Traffic Congestion < 40%? yes",
        "Weather Impact < 50%? yes",
        "Highway Express — I-5 Direct Route",
    ]


def test_audit_tree_marks_active_branches(client: TestClient) -> None:
    tree = client.get("/v1/audit?severity=5&weather_impact=0.8&traffic_congestion=0.9&hour=8").json()["data"][
        "decision_tree"
    ]

    assert tree["type"] == "branch"
    assert tree["live_value"] == "5.0/10"
    assert tree["condition_met"] is False
    assert tree["yes"]["is_active_path"] is False
    low_severity = tree["no"]
    assert low_severity["is_active_path"] is True
    assert low_severity["no"]["yes"]["outcome"] == "Sheltered Alternate via Secondary Arterials"
    assert low_severity["no"]["yes"]["is_active_path"] is True


def test_audit_defaults_to_live_conditions(client: TestClient) -> None:
    data = client.get("/v1/audit").json()["data"]

    assert data["inputs"] == {"severity": 8.5, "weather_impact": 0.3, "traffic_congestion": 0.25, "hour": 12}


def test_audit_rejects_out_of_range_hour(client: TestClient) -> None:
    response = client.get("/v1/audit?hour=24")

    assert response.status_code == 422
