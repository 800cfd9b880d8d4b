"""Tests for cart aggregation."""

from datetime import date, time
from decimal import Decimal
from itertools import count

import pytest

from raven.core.exceptions import EmptySlotSelectionException, RepositoryException
from raven.domain.cart import (
    Cart,
    CartItem,
    CartItemCandidate,
    InMemoryCartStore,
    SelectedSlot,
    items_from_payload,
    items_to_payload,
)


def _slot(day: int, slot_id: int = 2, hours: str = "3", price: str = "300") -> SelectedSlot:
    return SelectedSlot(
        date=date(2025, 2, day),
        day_slot_id=slot_id,
        day_slot_name="Morning",
        start_time=time(9, 0),
        end_time=time(12, 0),
        hours=Decimal(hours),
        price=Decimal(price),
    )


def _candidate(*slots: SelectedSlot, instructor_id: str = "01HZINSTRUCTOR") -> CartItemCandidate:
    return CartItemCandidate(
        instructor_id=instructor_id,
        instructor_name="Anna Berger",
        instructor_avatar="",
        location="Zermatt",
        discipline="Ski Instruction",
        selected_slots=tuple(slots),
        price_per_hour=Decimal("100"),
    )


@pytest.fixture
def store() -> InMemoryCartStore:
    return InMemoryCartStore()


@pytest.fixture
def cart(store: InMemoryCartStore) -> Cart:
    ids = count(1)
    return Cart(
        "test-cart", store, clock=lambda: 1700000000000, id_factory=lambda: f"cart-{next(ids)}"
    )


def _assert_totals_consistent(cart: Cart) -> None:
    items = cart.items
    assert cart.total() == sum((item.total_price for item in items), Decimal("0"))
    assert cart.total_hours() == sum((item.total_hours for item in items), Decimal("0"))
    assert cart.item_count() == len(items)


@pytest.mark.unit
class TestCart:
    def test_add_item_derives_totals(self, cart: Cart) -> None:
        item = cart.add_item(_candidate(_slot(10), _slot(10, 3, "2", "200")))

        assert item.id == "cart-1"
        assert item.total_hours == Decimal("5")
        assert item.total_price == Decimal("500")
        assert item.added_at == 1700000000000
        assert cart.total() == Decimal("500")
        _assert_totals_consistent(cart)

    def test_empty_selection_is_rejected(self, cart: Cart) -> None:
        with pytest.raises(EmptySlotSelectionException):
            cart.add_item(_candidate())
        assert cart.item_count() == 0

    def test_same_instructor_added_twice_gives_two_items(self, cart: Cart) -> None:
        cart.add_item(_candidate(_slot(10)))
        cart.add_item(_candidate(_slot(11)))
        assert [item.id for item in cart.items] == ["cart-1", "cart-2"]
        _assert_totals_consistent(cart)

    def test_remove_item(self, cart: Cart) -> None:
        first = cart.add_item(_candidate(_slot(10)))
        cart.add_item(_candidate(_slot(11, price="150")))

        assert cart.remove_item(first.id) is True
        assert cart.total() == Decimal("150")
        _assert_totals_consistent(cart)

    def test_remove_unknown_item_is_noop(self, cart: Cart) -> None:
        cart.add_item(_candidate(_slot(10)))
        assert cart.remove_item("cart-missing") is False
        assert cart.item_count() == 1

    def test_clear(self, cart: Cart) -> None:
        cart.add_item(_candidate(_slot(10)))
        cart.clear()
        assert cart.items == []
        assert cart.total() == Decimal("0")
        _assert_totals_consistent(cart)

    def test_contents_survive_reload(self, store: InMemoryCartStore, cart: Cart) -> None:
        item = cart.add_item(_candidate(_slot(10)))
        reloaded = Cart("test-cart", store)
        assert reloaded.items == [item]
        assert Cart("other-cart", store).items == []

    def test_carts_sharing_a_key_keep_all_items(self, store: InMemoryCartStore) -> None:
        first = Cart("shared", store)
        second = Cart("shared", store)

        kept = first.add_item(_candidate(_slot(10)))
        added = second.add_item(_candidate(_slot(11, price="150")))

        assert Cart("shared", store).item_count() == 2
        assert [item.id for item in second.items] == [kept.id, added.id]
        assert second.total() == Decimal("450")

    def test_remove_through_stale_cart_keeps_newer_items(self, store: InMemoryCartStore) -> None:
        first = Cart("shared", store)
        second = Cart("shared", store)
        old = first.add_item(_candidate(_slot(10)))
        newer = second.add_item(_candidate(_slot(11)))

        assert first.remove_item(old.id) is True
        assert Cart("shared", store).items == [newer]

    def test_failed_save_leaves_cart_unchanged(self) -> None:
        class FlakyStore(InMemoryCartStore):
            broken = False

            def update(self, key, change):
                if self.broken:
                    raise RepositoryException("disk full")
                return super().update(key, change)

        store = FlakyStore()
        cart = Cart("flaky", store)
        kept = cart.add_item(_candidate(_slot(10)))
        store.broken = True

        with pytest.raises(RepositoryException):
            cart.add_item(_candidate(_slot(11)))
        with pytest.raises(RepositoryException):
            cart.clear()

        assert cart.items == [kept]
        assert cart.total() == Decimal("300")
        _assert_totals_consistent(cart)

    def test_default_item_ids_are_prefixed_ulids(self) -> None:
        item = Cart("fresh").add_item(_candidate(_slot(10)))
        assert item.id.startswith("cart-")
        assert len(item.id) == len("cart-") + 26


@pytest.mark.unit
class TestCartPayload:
    def test_payload_uses_camel_case_and_restores_items(self, cart: Cart) -> None:
        item = cart.add_item(_candidate(_slot(10)))
        payload = items_to_payload([item])

        assert payload[0]["instructorId"] == "01HZINSTRUCTOR"
        assert payload[0]["selectedSlots"][0]["daySlotId"] == 2
        assert payload[0]["totalPrice"] == "300"
        assert items_from_payload(payload) == [item]

    def test_missing_optional_fields_default(self) -> None:
        restored = CartItem.from_dict({"id": "cart-x", "instructorId": "abc"})
        assert restored.selected_slots == ()
        assert restored.total_price == Decimal("0")
        assert restored.added_at == 0
