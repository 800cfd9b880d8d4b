"""Route tests for health, catalog reference data and metrics."""


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["cache-control"] == "no-store"


def test_resorts_envelope(client, make_resort):
    make_resort("Zermatt")
    make_resort("Chamonix", "France")

    response = client.get("/api/v1/resorts")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [resort["name"] for resort in body["data"]] == ["Chamonix", "Zermatt"]


def test_day_slots_use_camel_case(client):
    response = client.get("/api/v1/day-slots")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 5
    morning = body["data"][1]
    assert morning == {
        "id": 2,
        "name": "Morning",
        "defaultStartTime": "09:00:00",
        "defaultEndTime": "12:00:00",
        "durationHours": 3.0,
        "bookable": True,
    }


def test_disciplines(client, make_discipline):
    make_discipline("Telemark", 3)
    response = client.get("/api/v1/disciplines")
    assert response.json()["data"] == [{"id": 1, "name": "Telemark", "colorId": 3}]


def test_prometheus_metrics(client):
    client.get("/api/v1/health")

    response = client.get("/api/v1/metrics/prometheus")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "raven_prometheus_scrapes_total" in response.text
    assert "raven_http_requests_total" in response.text
