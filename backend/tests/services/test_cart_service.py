"""Tests for CartService: picks resolved against live occupancy."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from raven.core.config import settings
from raven.core.exceptions import (
    CalendarWindowTooLargeException,
    EmptySlotSelectionException,
    NotFoundException,
    PricingUnavailableException,
    SlotOutOfRangeException,
    SlotUnavailableException,
)
from raven.domain.cart import Cart, CartItemCandidate, InMemoryCartStore
from raven.repositories.cart_repository import CartStateRepository, SqlCartStore
from raven.services.cart_service import CartService

FEB_10 = date(2025, 2, 10)
FEB_11 = date(2025, 2, 11)
CART_KEY = "test-cart"


@pytest.fixture
def instructor(make_instructor, make_offer, make_resort):
    instructor = make_instructor()
    make_offer(instructor, rate="100", resorts=[make_resort("Zermatt")])
    make_offer(instructor, rate="80")
    return instructor


@pytest.fixture
def service(db):
    return CartService(db, clock=lambda: 1700000000000)


def test_add_item_prices_slots_at_lowest_rate(service, instructor):
    item, cart = service.add_item(CART_KEY, instructor.id, [(FEB_10, 2), (FEB_11, 3)])

    assert item.price_per_hour == Decimal("80")
    assert item.total_hours == Decimal("5")
    assert item.total_price == Decimal("400")
    assert item.location == "Zermatt"
    assert item.discipline == "Ski Instruction"
    assert item.instructor_name == "Anna Berger"
    assert item.added_at == 1700000000000
    assert cart.total() == Decimal("400")


def test_cart_is_persisted(db, service, instructor):
    item, _ = service.add_item(CART_KEY, instructor.id, [(FEB_10, 2)])

    reloaded = CartService(db).get_cart(CART_KEY)

    assert [entry.id for entry in reloaded.items] == [item.id]
    assert reloaded.total() == Decimal("240")


def test_booked_slot_is_rejected(service, instructor, make_booking):
    make_booking(instructor, [(FEB_10, 2)])

    with pytest.raises(SlotUnavailableException):
        service.add_item(CART_KEY, instructor.id, [(FEB_10, 2)])
    assert service.get_cart(CART_KEY).item_count() == 0


def test_full_day_pick_is_out_of_range(service, instructor):
    with pytest.raises(SlotOutOfRangeException):
        service.add_item(CART_KEY, instructor.id, [(FEB_10, 1)])


def test_empty_picks_are_rejected(service, instructor):
    with pytest.raises(EmptySlotSelectionException):
        service.add_item(CART_KEY, instructor.id, [])


def test_instructor_without_rate(service, make_instructor, make_offer):
    instructor = make_instructor(first_name="Mia")
    make_offer(instructor, rate=None)
    with pytest.raises(PricingUnavailableException):
        service.add_item(CART_KEY, instructor.id, [(FEB_10, 2)])


def test_unknown_instructor(service):
    with pytest.raises(NotFoundException):
        service.add_item(CART_KEY, "01ARZ3NDEKTSV4RRFFQ69G5FAV", [(FEB_10, 2)])


def test_remove_and_clear(service, instructor):
    first, _ = service.add_item(CART_KEY, instructor.id, [(FEB_10, 2)])
    service.add_item(CART_KEY, instructor.id, [(FEB_11, 4)])

    removed, cart = service.remove_item(CART_KEY, first.id)
    assert removed is True
    assert cart.item_count() == 1

    removed, cart = service.remove_item(CART_KEY, first.id)
    assert removed is False
    assert cart.item_count() == 1

    assert service.clear(CART_KEY).item_count() == 0


def test_injected_store_and_describe(db, instructor):
    service = CartService(db, store=InMemoryCartStore())
    service.add_item(CART_KEY, instructor.id, [(FEB_10, 5)])

    described = service.describe(service.get_cart(CART_KEY))

    assert described["item_count"] == 1
    assert described["total"] == Decimal("240")
    assert described["items"][0]["selected_slots"][0]["day_slot_name"] == "Evening"


def test_picks_spanning_more_than_the_window_limit_are_rejected(service, instructor):
    with patch.object(settings, "max_calendar_window_days", 30):
        with pytest.raises(CalendarWindowTooLargeException):
            service.add_item(
                CART_KEY, instructor.id, [(FEB_10, 2), (FEB_10 + timedelta(days=30), 2)]
            )
        item, _ = service.add_item(
            CART_KEY, instructor.id, [(FEB_10, 2), (FEB_10 + timedelta(days=29), 2)]
        )

    assert len(item.selected_slots) == 2
    assert service.get_cart(CART_KEY).item_count() == 1


def test_sql_store_keeps_items_added_through_carts_opened_earlier(db, service, instructor):
    existing, _ = service.add_item(CART_KEY, instructor.id, [(FEB_10, 2)])
    store = SqlCartStore(CartStateRepository(db))
    first = Cart(CART_KEY, store)
    second = Cart(CART_KEY, store)
    candidate = CartItemCandidate(
        instructor_id=existing.instructor_id,
        instructor_name=existing.instructor_name,
        instructor_avatar=existing.instructor_avatar,
        location=existing.location,
        discipline=existing.discipline,
        selected_slots=existing.selected_slots,
        price_per_hour=existing.price_per_hour,
    )

    first.add_item(candidate)
    second.add_item(candidate)
    db.commit()

    reloaded = CartService(db).get_cart(CART_KEY)
    assert reloaded.item_count() == 3
    assert reloaded.total() == Decimal("720")
