from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from src.courier.data.points_repository import PointStorageError
from src.courier.main import create_app
from src.courier.models.domain import GeoPoint
from src.courier.schemas.routing import OptimizeRequest


STORED = (
    GeoPoint(id="A", lat=0.0, lng=0.0, name="Point A", visited=True, info=""),
    GeoPoint(id="B", lat=0.0, lng=1.0, name="Point B", info=""),
    GeoPoint(id="C", lat=0.0, lng=2.0, name="Point C", info=""),
)


@pytest.fixture
def api_client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    from src.courier.services.routing import service as routing_service

    def fake_list_points(include_visited=True):
        if include_visited:
            return STORED
        return tuple(point for point in STORED if not point.visited)

    monkeypatch.setattr(routing_service, "list_points", fake_list_points)
    return TestClient(create_app())


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_points_endpoint(api_client: TestClient):
    everything = api_client.get("/api/points")
    pending = api_client.get("/api/points", params={"include_visited": "false"})

    assert everything.status_code == 200
    assert [point["id"] for point in everything.json()["points"]] == ["A", "B", "C"]
    assert [point["id"] for point in pending.json()["points"]] == ["B", "C"]


def test_optimize_endpoint_with_points_and_start(api_client: TestClient):
    request = OptimizeRequest.model_validate(
        {
            "points": [
                {"id": "A", "lat": 0.0, "lng": 0.0},
                {"id": "B", "lat": 0.0, "lng": 1.0},
                {"id": "C", "lat": 0.0, "lng": 2.0},
            ],
            "start": {"lat": 0.0, "lng": 3.0},
        }
    )

    response = api_client.post("/api/routes/optimize", json=request.model_dump(mode="json"))

    assert response.status_code == 200
    payload = response.json()
    assert payload["order"] == ["C", "B", "A"]
    assert payload["distance_km"] == 222.4
    assert payload["metadata"]["start"] == "coordinate"
    assert payload["metadata"]["map_overlays"]["route"]["type"] == "FeatureCollection"


def test_optimize_endpoint_uses_stored_unvisited_points(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json={})

    assert response.status_code == 200
    payload = response.json()
    assert payload["order"] == ["B", "C"]
    assert payload["distance_km"] == 111.2
    assert payload["metadata"]["source"] == "storage"


def test_optimize_endpoint_empty_points(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json={"points": []})

    assert response.status_code == 200
    assert response.json()["order"] == []
    assert response.json()["distance_km"] == 0


def test_optimize_endpoint_rejects_malformed_points(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json={"points": "not-a-list"})

    assert response.status_code == 422


def test_confirm_endpoint(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier.services.routing import service as routing_service

    stamp = datetime(2026, 10, 18, 9, 15, tzinfo=timezone.utc)
    monkeypatch.setattr(routing_service, "confirm_point", lambda point_id: stamp if point_id == "B" else None)

    ok = api_client.post("/api/points/B/confirm")
    missing = api_client.post("/api/points/Z/confirm")

    assert ok.status_code == 200
    assert ok.json()["ok"] is True
    assert ok.json()["point_id"] == "B"
    assert missing.status_code == 404


def test_confirm_endpoint_storage_unavailable(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier.services.routing import service as routing_service

    def unavailable(point_id):
        raise PointStorageError("Supabase not configured - points cannot be confirmed")

    monkeypatch.setattr(routing_service, "confirm_point", unavailable)

    response = api_client.post("/api/points/B/confirm")

    assert response.status_code == 503


def test_progress_endpoint(api_client: TestClient):
    response = api_client.get("/api/routes/progress")

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 3
    assert payload["remaining"] == 2
    assert payload["next_point"]["id"] == "B"
    assert payload["distance_km"] == 111.2
    assert payload["completed"] is False


def test_nearest_endpoint_links_to_directions(api_client: TestClient):
    response = api_client.get(
        "/api/routes/nearest",
        params={"lat": 0.0, "lng": 2.2},
        headers={"User-Agent": "Mozilla/5.0 (Linux; Android 14)"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["point"]["id"] == "C"
    assert payload["platform"] == "android"
    assert payload["navigation_url"] == "google.navigation:q=0.0,2.0"


def test_navigate_endpoint(api_client: TestClient):
    ios = api_client.get("/api/points/B/navigate", headers={"User-Agent": "Mozilla/5.0 (iPhone)"})
    forced = api_client.get("/api/points/B/navigate", params={"platform": "web"})
    missing = api_client.get("/api/points/Z/navigate")

    assert ios.json()["url"] == "maps://maps.apple.com/?daddr=0.0,1.0&dirflg=d"
    assert forced.json()["platform"] == "web"
    assert missing.status_code == 404


def test_optimize_endpoint_overflowing_coordinates(api_client: TestClient):
    response = api_client.post(
        "/api/routes/optimize",
        json={"points": [{"id": "A", "lat": 1e308, "lng": 0.0}, {"id": "B", "lat": -1e308, "lng": 0.0}]},
    )

    assert response.status_code == 200
    assert response.json()["order"] == ["A", "B"]
    assert response.json()["distance_km"] is None


def test_stored_row_with_bad_coordinates_is_skipped(monkeypatch: pytest.MonkeyPatch):
    from src.courier.data import points_repository
    from src.courier.services.routing import service as routing_service

    class Table:
        def select(self, *args, **kwargs):
            return self

        def execute(self):
            rows = [
                {"id": "P1", "lat": "nan", "lng": 21.0},
                {"id": "P2", "lat": 52.3, "lng": 21.1},
                {"id": "P3", "lat": 52.4, "lng": 21.2},
            ]
            return SimpleNamespace(data=rows, count=len(rows))

    class Client:
        def table(self, name):
            return Table()

    monkeypatch.setattr(points_repository, "get_supabase_client", lambda: Client())
    monkeypatch.setattr(routing_service, "list_points", points_repository.list_points)
    client = TestClient(create_app())

    listed = client.get("/api/points")
    summary = client.get("/api/routes/progress")
    optimized = client.post("/api/routes/optimize", json={})

    assert listed.status_code == 200
    assert [point["id"] for point in listed.json()["points"]] == ["P2", "P3"]
    assert summary.status_code == 200
    assert summary.json()["total"] == 2
    assert optimized.status_code == 200
    assert optimized.json()["order"] == ["P2", "P3"]


@pytest.mark.parametrize(
    "method, path, params",
    [
        ("get", "/api/points", None),
        ("get", "/api/routes/progress", None),
        ("get", "/api/routes/nearest", {"lat": 0.0, "lng": 0.0}),
        ("get", "/api/points/B/navigate", None),
    ],
)
def test_unexpected_storage_errors_map_to_500(monkeypatch: pytest.MonkeyPatch, method, path, params):
    from src.courier.services.routing import service as routing_service

    def missing_file(include_visited=True):
        raise FileNotFoundError("Points file not found: data/points.csv")

    monkeypatch.setattr(routing_service, "list_points", missing_file)
    client = TestClient(create_app())

    response = getattr(client, method)(path, params=params)

    assert response.status_code == 500
