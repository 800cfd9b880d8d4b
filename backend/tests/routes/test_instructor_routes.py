"""Route tests for instructor listing, profile and search."""

from datetime import date

import pytest

UNKNOWN_ID = "01ARZ3NDEKTSV4RRFFQ69G5FAV"


@pytest.fixture
def anna(make_instructor, make_offer, make_resort, make_discipline):
    anna = make_instructor(languages=["German"], images=["one.jpg"])
    make_offer(
        anna, rate="100", resorts=[make_resort("Zermatt")], disciplines=[make_discipline("Ski")]
    )
    return anna


def test_list_instructors(client, anna, make_instructor):
    make_instructor(first_name="Ben")

    response = client.get("/api/v1/instructors")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [entry["firstName"] for entry in body["data"]] == ["Anna", "Ben"]
    assert body["data"][0]["languages"] == ["German"]


def test_profile(client, anna):
    response = client.get(f"/api/v1/instructors/{anna.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["fullName"] == "Anna Berger"
    assert body["resorts"][0]["name"] == "Zermatt"
    assert body["disciplines"][0]["minPrice"] == 100.0
    assert body["pricing"] == {"minHourlyRate": 100.0, "offerCount": 1}


def test_unknown_profile_is_404(client):
    response = client.get(f"/api/v1/instructors/{UNKNOWN_ID}")
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "INSTRUCTOR_NOT_FOUND"


def test_profile_sub_resources(client, anna, make_booking):
    make_booking(anna, [(date(2025, 2, 10), 2)])

    images = client.get(f"/api/v1/instructors/{anna.id}/images").json()
    assert images["data"][0]["imageUrl"] == "one.jpg"

    resorts = client.get(f"/api/v1/instructors/{anna.id}/resorts").json()
    assert [resort["name"] for resort in resorts["data"]] == ["Zermatt"]

    pricing = client.get(f"/api/v1/instructors/{anna.id}/pricing").json()
    assert pricing["minHourlyRate"] == 100.0

    disciplines = client.get(f"/api/v1/instructors/{anna.id}/disciplines").json()
    assert disciplines["data"][0]["name"] == "Ski"

    stats = client.get(f"/api/v1/instructors/{anna.id}/stats").json()
    assert stats == {
        "bookingCount": 1,
        "earliestBooking": "2025-02-10",
        "latestBooking": "2025-02-10",
    }


def test_search(client, anna, make_booking):
    response = client.get("/api/v1/search/instructors", params={"location": "zer"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["data"][0]["minPrice"] == 100.0
    assert body["params"]["location"] == "zer"
    assert body["params"]["limit"] == 20

    make_booking(anna, [(date(2025, 2, 12), 2)])
    booked = client.get(
        "/api/v1/search/instructors",
        params={"startDate": "2025-02-10", "endDate": "2025-02-14"},
    )
    assert booked.json()["data"] == []


def test_search_rejects_bad_discipline_ids(client):
    response = client.get("/api/v1/search/instructors", params={"disciplineIds": "1,ski"})
    assert response.status_code == 400
