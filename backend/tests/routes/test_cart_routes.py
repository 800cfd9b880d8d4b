"""Route tests for the cart."""

from datetime import date

import pytest

CART = "/api/v1/cart/test-cart"


@pytest.fixture
def anna(make_instructor, make_offer, make_resort):
    anna = make_instructor()
    make_offer(anna, rate="100", resorts=[make_resort("Zermatt")])
    return anna


def _add(client, instructor_id, slots):
    return client.post(f"{CART}/items", json={"instructorId": instructor_id, "slots": slots})


def test_empty_cart(client):
    response = client.get(CART)
    assert response.status_code == 200
    assert response.json() == {
        "key": "test-cart",
        "items": [],
        "total": 0.0,
        "totalHours": 0.0,
        "itemCount": 0,
    }


def test_add_remove_clear(client, anna):
    added = _add(
        client,
        anna.id,
        [{"date": "2025-02-10", "daySlotId": 2}, {"date": "2025-02-11", "daySlotId": 3}],
    )
    assert added.status_code == 201
    item = added.json()["item"]
    assert item["id"].startswith("cart-")
    assert item["totalPrice"] == 500.0
    assert item["location"] == "Zermatt"
    assert [slot["daySlotName"] for slot in item["selectedSlots"]] == ["Morning", "Lunch"]
    assert added.json()["cart"]["total"] == 500.0

    _add(client, anna.id, [{"date": "2025-02-12", "daySlotId": 5}])
    cart = client.get(CART).json()
    assert cart["itemCount"] == 2
    assert cart["total"] == 800.0
    assert cart["totalHours"] == 8.0

    removed = client.delete(f"{CART}/items/{item['id']}")
    assert removed.status_code == 200
    assert removed.json()["removed"] is True
    assert removed.json()["cart"]["total"] == 300.0

    again = client.delete(f"{CART}/items/{item['id']}")
    assert again.status_code == 200
    assert again.json()["removed"] is False

    cleared = client.delete(CART)
    assert cleared.json()["itemCount"] == 0


def test_empty_selection_is_400(client, anna):
    response = _add(client, anna.id, [])
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "EMPTY_SLOT_SELECTION"


def test_booked_slot_is_409(client, anna, make_booking):
    make_booking(anna, [(date(2025, 2, 10), 2)])
    response = _add(client, anna.id, [{"date": "2025-02-10", "daySlotId": 2}])
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "SLOT_UNAVAILABLE"


def test_unknown_instructor_is_404(client):
    response = _add(client, "01ARZ3NDEKTSV4RRFFQ69G5FAV", [{"date": "2025-02-10", "daySlotId": 2}])
    assert response.status_code == 404


def test_unexpected_fields_are_rejected(client, anna):
    response = client.post(
        f"{CART}/items", json={"instructorId": anna.id, "slots": [], "price": 1}
    )
    assert response.status_code == 422
