import pytest
from fastapi.testclient import TestClient

from lead_hunter.data.permits_repository import permit_from_record
from lead_hunter.main import create_app

NOW = "2025-10-01T12:00:00Z"


def _permit_payload(pid: str, status: str, lat: float | None, lon: float | None, city: str = "Boston", **extra) -> dict:
    payload = {
        "id": pid,
        "address": f"{pid} Elm St",
        "city": city,
        "state": "MA",
        "status": status,
        "permit_type": "residential",
        "latitude": lat,
        "longitude": lon,
        "created_at": "2025-09-25T09:00:00Z",
    }
    payload.update(extra)
    return payload


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_post_recommendations(api_client: TestClient):
    body = {
        "permits": [
            _permit_payload("P1", "hot", 42.3601, -71.0589),
            _permit_payload("P2", "hot", 42.3610, -71.0620),
            _permit_payload("P3", "new", 42.3700, -71.1000, city="Cambridge"),
            _permit_payload("P4", "rejected", 42.3800, -71.1100),
            _permit_payload("P5", "hot", None, None),
        ],
        "now": NOW,
    }

    response = api_client.post("/api/permits/recommendations", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    ids = [rec["permitId"] for rec in payload["recommendations"]]
    assert set(ids) == {"P1", "P2", "P3"}
    scores = [rec["score"] for rec in payload["recommendations"]]
    assert scores == sorted(scores, reverse=True)
    assert payload["summary"]["totalAnalyzed"] == 3
    assert len(payload["clusters"]) == 1
    assert payload["clusters"][0]["clusterId"] == "HZ01"
    assert payload["clusters"][0]["members"] == ["P1", "P2"]
    assert payload["recommendations"][0]["clusterId"] == "HZ01"


def test_post_recommendations_empty(api_client: TestClient):
    response = api_client.post("/api/permits/recommendations", json={"permits": [], "now": NOW})

    assert response.status_code == 200
    payload = response.json()
    assert payload["recommendations"] == []
    assert payload["summary"]["totalAnalyzed"] == 0
    assert payload["summary"]["dailyGoal"]


def test_post_recommendations_unknown_county(api_client: TestClient):
    response = api_client.post(
        "/api/permits/recommendations",
        json={"permits": [_permit_payload("P1", "hot", 42.36, -71.06)], "county": "Atlantis"},
    )

    assert response.status_code == 400


def test_get_recommendations_uses_permit_source(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from lead_hunter.services.recommendations import service as recommendation_service

    permits = tuple(
        permit_from_record(record)
        for record in (
            _permit_payload("P1", "hot", 42.36, -71.06),
            _permit_payload("P2", "new", 42.64, -71.31, city="Lowell"),
        )
    )
    requested = {}

    def fake_get_permits(cities=None, source=None):
        requested["cities"] = cities
        return permits

    monkeypatch.setattr(recommendation_service, "get_permits", fake_get_permits)

    response = api_client.get("/api/permits/recommendations", params={"cities": "Lowell", "limit": 5})

    assert response.status_code == 200
    assert requested["cities"] == ("Lowell",)
    assert [rec["permitId"] for rec in response.json()["recommendations"]] == ["P2"]


def test_post_clusters_geojson(api_client: TestClient):
    body = {
        "permits": [
            _permit_payload("P1", "hot", 42.3601, -71.0589),
            _permit_payload("P2", "hot", 42.3610, -71.0620),
        ]
    }

    response = api_client.post("/api/permits/clusters", params={"format": "geojson"}, json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["type"] == "FeatureCollection"
    assert payload["features"][0]["properties"]["clusterId"] == "HZ01"


def test_plan_route_requires_two_stops(api_client: TestClient):
    body = {"permits": [_permit_payload("P1", "new", 42.36, -71.06)]}

    response = api_client.post("/api/routes/plan", json=body)

    assert response.status_code == 400


def test_plan_route_rejects_custom_start_without_address(api_client: TestClient):
    body = {
        "permits": [_permit_payload("P1", "new", 42.36, -71.06), _permit_payload("P2", "new", 42.37, -71.07)],
        "start": {"policy": "custom"},
    }

    response = api_client.post("/api/routes/plan", json=body)

    assert response.status_code == 400


def test_plan_route_round_trip(api_client: TestClient):
    body = {
        "permits": [_permit_payload("P1", "new", 42.36, -71.06), _permit_payload("P2", "hot", 42.37, -71.07)],
        "start": {"policy": "custom", "address": "100 Main St", "latitude": 42.35, "longitude": -71.05},
        "end": {"policy": "start"},
    }

    response = api_client.post("/api/routes/plan", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert [stop["permit"]["id"] for stop in payload["stops"]] == ["P1", "P2"]
    assert payload["start_location"]["label"] == "100 Main St"
    assert payload["end_location"]["label"] == "100 Main St"
    assert payload["dwell_minutes"] == 30
    assert payload["within_budget"] is True
    assert payload["directions_url"].startswith("https://www.google.com/maps/dir/100%20Main%20St/")


def test_plan_route_checklist_csv(api_client: TestClient):
    body = {
        "permits": [_permit_payload("P1", "new", 42.36, -71.06), _permit_payload("P2", "hot", 42.37, -71.07)],
        "start": {"policy": "first"},
        "end": {"policy": "last"},
    }

    response = api_client.post("/api/routes/plan/checklist.csv", json=body)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert lines[0].startswith("sequence,permit_id")
    assert len(lines) == 3


def test_geographical_endpoints(api_client: TestClient):
    counties = api_client.get("/api/geographical/counties", params={"state": "ma"})
    assert counties.status_code == 200
    assert "Middlesex" in counties.json()["counties"]

    cities = api_client.get("/api/geographical/cities", params={"county": "Middlesex"})
    assert cities.status_code == 200
    assert "Lowell" in cities.json()["cities"]

    missing = api_client.get("/api/geographical/cities", params={"county": "Atlantis"})
    assert missing.status_code == 404


def test_root_lists_entry_points(api_client: TestClient):
    payload = api_client.get("/").json()

    assert payload["status"] == "running"
    assert payload["route_planning"] == "/api/routes/plan"


def test_permit_stats(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from lead_hunter.api.routes import permits as permit_routes

    permits = tuple(
        permit_from_record(record)
        for record in (
            _permit_payload("P1", "hot", 42.36, -71.06),
            _permit_payload("P2", "new", None, None, city="Lowell"),
        )
    )
    monkeypatch.setattr(permit_routes, "get_permits", lambda cities=None: permits)

    response = api_client.get("/api/permits/stats")

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 2
    assert payload["unplaced"] == 1
    assert payload["byStatus"]["hot"] == 1


def test_get_clusters_honours_city_filter_on_file_source(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch, tmp_path
):
    from lead_hunter.config import settings
    from lead_hunter.data import permits_repository

    csv_path = tmp_path / "permits.csv"
    csv_path.write_text(
        "id,address,city,state,permit_type,status,latitude,longitude,created_at\n"
        "B1,1 Elm St,Boston,MA,residential,hot,42.3601,-71.0589,2025-09-25T09:00:00Z\n"
        "B2,2 Elm St,Boston,MA,residential,hot,42.3610,-71.0600,2025-09-25T09:00:00Z\n"
        "L1,1 Oak St,Lowell,MA,residential,hot,42.6400,-71.3100,2025-09-25T09:00:00Z\n"
        "L2,2 Oak St,Lowell,MA,residential,hot,42.6410,-71.3110,2025-09-25T09:00:00Z\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(permits_repository, "_load_permits_from_database", lambda cities=None: None)
    monkeypatch.setattr(settings, "permits_file", csv_path)
    permits_repository.load_permits_from_file.cache_clear()

    try:
        response = api_client.get("/api/permits/clusters", params={"cities": "Boston"})
    finally:
        permits_repository.load_permits_from_file.cache_clear()

    assert response.status_code == 200
    clusters = response.json()["clusters"]
    assert len(clusters) == 1
    assert clusters[0]["members"] == ["B1", "B2"]
