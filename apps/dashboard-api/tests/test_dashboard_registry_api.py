from fastapi.testclient import TestClient


def test_list_hospitals(client: TestClient) -> None:
    data = client.get("/v1/registry/hospitals").json()["data"]

    assert len(data) == 5
    assert data[0]["name"] == "Harborview Medical Center"
    assert data[0]["specialties"] == ["Trauma", "Emergency", "Surgery"]


def test_list_shipments_by_status(client: TestClient) -> None:
    data = client.get("/v1/registry/shipments?status=pending").json()["data"]

    assert [item["id"] for item in data] == ["S004", "S005"]
    assert data[1]["vehicle_type"] == "drone"
    assert data[1]["distance_km"] > 0


def test_list_shipments_rejects_unknown_status(client: TestClient) -> None:
    response = client.get("/v1/registry/shipments?status=lost")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_get_shipment(client: TestClient) -> None:
    data = client.get("/v1/registry/shipments/S003").json()["data"]

    assert data["cargo"]["type"] == "medication"
    assert data["destination"]["id"] == "H005"


def test_get_unknown_shipment_is_404(client: TestClient) -> None:
    response = client.get("/v1/registry/shipments/S404")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SHIPMENT_NOT_FOUND"


def test_search(client: TestClient) -> None:
    data = client.get("/v1/registry/search?q=heart").json()["data"]

    assert data["query"] == "heart"
    assert [item["id"] for item in data["shipments"]] == ["S002"]
    assert data["total"] == 1


def test_blank_search_is_empty(client: TestClient) -> None:
    data = client.get("/v1/registry/search?q=").json()["data"]

    assert data["total"] == 0
