"""Route tests for the analytics dashboard envelope."""

from unittest.mock import patch

from raven.services.analytics_service import AnalyticsService


def test_overview_envelope(client, make_instructor, make_customer):
    make_instructor()
    make_customer()

    response = client.get("/api/v1/analytics/overview")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["totalUsers"] == 2
    assert body["data"]["slotTypesUsed"] == []


def test_signups_accept_date_window(client):
    response = client.get(
        "/api/v1/analytics/signups", params={"startDate": "2025-01-01", "endDate": "2025-01-31"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["dateRange"] == {"start": "2025-01-01", "end": "2025-01-31"}


def test_instructors_and_completeness(client, make_instructor, make_booking_slot):
    anna = make_instructor()
    make_booking_slot(anna, 2, weekday=1)

    instructors = client.get("/api/v1/analytics/instructors").json()
    assert instructors["data"]["instructors"][0]["slotTypes"] == ["Morning"]

    completeness = client.get("/api/v1/analytics/profile-completeness").json()
    assert completeness["data"]["summary"]["totalInstructors"] == 1
    assert completeness["data"]["percentages"]["avatar"] == 100


def test_instructor_slots(client, make_instructor, make_booking_slot):
    anna = make_instructor()
    make_booking_slot(anna, 4, weekday=6)

    response = client.get(f"/api/v1/analytics/instructors/{anna.id}/slots")

    assert response.status_code == 200
    slot_types = response.json()["data"]["slotTypes"]
    assert slot_types == [
        {
            "id": 4,
            "name": "Afternoon",
            "startTime": "14:00:00",
            "endTime": "17:00:00",
            "daysConfigured": ["Saturday"],
        }
    ]


def test_unknown_instructor_slots_is_404(client):
    response = client.get("/api/v1/analytics/instructors/01ARZ3NDEKTSV4RRFFQ69G5FAV/slots")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Instructor not found"}


def test_failure_is_reported_in_envelope(client):
    with patch.object(AnalyticsService, "get_overview", side_effect=RuntimeError("boom")):
        response = client.get("/api/v1/analytics/overview")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to fetch overview",
        "details": "boom",
    }
