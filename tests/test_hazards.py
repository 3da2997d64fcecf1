from fastapi.testclient import TestClient

from guardian.main import app

from conftest import signup


LANDSLIDE = {
    "lat": 18.369,
    "lng": 73.759,
    "type": "landslide",
    "severity": "high",
    "description": "Recent landslide blocking trail",
    "location": "Sinhagad Fort Trail",
}


def test_anonymous_report_starts_pending(client):
    r = client.post("/hazards", json=LANDSLIDE)
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "pending"
    assert body["reportedBy"] is None
    assert body["type"] == "landslide"
    assert body["reportedAt"]


def test_signed_in_report_records_reporter(client):
    user = signup(client, "a@x.com")
    r = client.post("/hazards", json={**LANDSLIDE, "type": "slippery_rock", "severity": "moderate"})
    assert r.status_code == 201
    assert r.json()["reportedBy"] == user["id"]


def test_invalid_reports_are_rejected(client):
    assert client.post("/hazards", json={**LANDSLIDE, "lat": 123.0}).status_code == 400
    assert client.post("/hazards", json={**LANDSLIDE, "type": "volcano"}).status_code == 400
    assert client.post("/hazards", json={**LANDSLIDE, "description": ""}).status_code == 400


def test_list_newest_first_with_filters(client):
    client.post("/hazards", json=LANDSLIDE)
    client.post("/hazards", json={**LANDSLIDE, "type": "fallen_tree", "severity": "moderate"})

    r = client.get("/hazards")
    assert r.status_code == 200
    assert [h["type"] for h in r.json()] == ["fallen_tree", "landslide"]

    assert [h["type"] for h in client.get("/hazards?type=landslide").json()] == ["landslide"]
    assert [h["severity"] for h in client.get("/hazards?severity=moderate").json()] == ["moderate"]
    assert client.get("/hazards?status=verified").json() == []


def test_admin_moderates_status(client, admin_client):
    report = client.post("/hazards", json=LANDSLIDE).json()

    r = admin_client.patch(f"/hazards/{report['id']}/status", json={"status": "verified"})
    assert r.status_code == 200
    assert r.json()["status"] == "verified"
    assert [h["id"] for h in client.get("/hazards?status=verified").json()] == [report["id"]]


def test_moderation_requires_admin(client):
    report = client.post("/hazards", json=LANDSLIDE).json()

    assert client.patch(f"/hazards/{report['id']}/status", json={"status": "resolved"}).status_code == 401

    hiker = TestClient(app)
    signup(hiker, "a@x.com")
    assert hiker.patch(f"/hazards/{report['id']}/status", json={"status": "resolved"}).status_code == 403


def test_moderating_missing_report_is_404(admin_client):
    r = admin_client.patch("/hazards/404/status", json={"status": "rejected"})
    assert r.status_code == 404
    assert r.json() == {"error": "Hazard report not found"}


def test_status_moves_forward_only(client, admin_client):
    report = client.post("/hazards", json=LANDSLIDE).json()
    url = f"/hazards/{report['id']}/status"

    r = admin_client.patch(url, json={"status": "resolved"})
    assert r.status_code == 400
    assert r.json() == {"error": "Cannot move report from pending to resolved"}

    assert admin_client.patch(url, json={"status": "verified"}).status_code == 200
    assert admin_client.patch(url, json={"status": "pending"}).status_code == 400
    assert admin_client.patch(url, json={"status": "resolved"}).json()["status"] == "resolved"

    # Terminal
    assert admin_client.patch(url, json={"status": "verified"}).status_code == 400


def test_rejected_report_stays_rejected(client, admin_client):
    report = client.post("/hazards", json=LANDSLIDE).json()
    url = f"/hazards/{report['id']}/status"

    assert admin_client.patch(url, json={"status": "rejected"}).status_code == 200
    r = admin_client.patch(url, json={"status": "verified"})
    assert r.status_code == 400
    assert r.json()["error"] == "Cannot move report from rejected to verified"


def test_search_matches_location_type_and_reporter(client):
    hiker = TestClient(app)
    signup(hiker, "sahyadri.walker@example.com", displayName="Kalsubai Walker")
    hiker.post("/hazards", json={**LANDSLIDE, "location": "Kalsubai Peak", "type": "wildlife"})
    client.post("/hazards", json=LANDSLIDE)

    by_location = client.get("/hazards?q=sinhagad").json()
    assert [h["location"] for h in by_location] == ["Sinhagad Fort Trail"]

    assert [h["type"] for h in client.get("/hazards?q=wild").json()] == ["wildlife"]
    assert [h["type"] for h in client.get("/hazards?q=Walker").json()] == ["wildlife"]
    assert client.get("/hazards?q=rajgad").json() == []

    # Combines with the other filters
    assert client.get("/hazards?q=sinhagad&type=wildlife").json() == []


def test_stats_counts_by_status_and_active_users(client, admin_client):
    first = client.post("/hazards", json=LANDSLIDE).json()
    second = client.post("/hazards", json=LANDSLIDE).json()
    client.post("/hazards", json=LANDSLIDE)
    admin_client.patch(f"/hazards/{first['id']}/status", json={"status": "verified"})
    admin_client.patch(f"/hazards/{second['id']}/status", json={"status": "rejected"})

    hiker = signup(TestClient(app), "a@x.com")
    signup(TestClient(app), "b@x.com")
    admin_client.patch(f"/users/{hiker['id']}/active", json={"isActive": False})

    r = admin_client.get("/hazards/stats")
    assert r.status_code == 200
    assert r.json() == {
        "total": 3,
        "pending": 1,
        "verified": 1,
        "resolved": 0,
        "rejected": 1,
        "activeUsers": 2,
    }


def test_stats_requires_admin(client):
    assert client.get("/hazards/stats").status_code == 401
    signup(client, "a@x.com")
    assert client.get("/hazards/stats").status_code == 403
