"""
Shopping cart aggregation.

A cart holds line items, each one instructor plus a set of selected day
slots, with derived hours and price. Every mutation is a change function
that the injected ``CartStore`` applies to the latest stored list in one
read-modify-write, so two carts opened on the same key never overwrite each
other's items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
import logging
import threading
import time as _time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Protocol, Tuple

from ..core.constants import CART_ITEM_ID_PREFIX
from ..core.exceptions import EmptySlotSelectionException
from ..core.ulid_helper import generate_prefixed_id

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """Money and hours arrive as int, float, str or Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class SelectedSlot:
    date: date
    day_slot_id: int
    day_slot_name: str
    start_time: time
    end_time: time
    hours: Decimal
    price: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "daySlotId": self.day_slot_id,
            "daySlotName": self.day_slot_name,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "hours": str(self.hours),
            "price": str(self.price),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SelectedSlot":
        return cls(
            date=date.fromisoformat(str(data["date"])[:10]),
            day_slot_id=int(data["daySlotId"]),
            day_slot_name=str(data["daySlotName"]),
            start_time=time.fromisoformat(str(data["startTime"])),
            end_time=time.fromisoformat(str(data["endTime"])),
            hours=to_decimal(data["hours"]),
            price=to_decimal(data["price"]),
        )


@dataclass(frozen=True)
class CartItemCandidate:
    instructor_id: str
    instructor_name: str
    instructor_avatar: str
    location: str
    discipline: str
    selected_slots: Tuple[SelectedSlot, ...]
    price_per_hour: Decimal


@dataclass(frozen=True)
class CartItem:
    id: str
    instructor_id: str
    instructor_name: str
    instructor_avatar: str
    location: str
    discipline: str
    selected_slots: Tuple[SelectedSlot, ...]
    total_hours: Decimal
    total_price: Decimal
    price_per_hour: Decimal
    added_at: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "instructorId": self.instructor_id,
            "instructorName": self.instructor_name,
            "instructorAvatar": self.instructor_avatar,
            "location": self.location,
            "discipline": self.discipline,
            "selectedSlots": [slot.to_dict() for slot in self.selected_slots],
            "totalHours": str(self.total_hours),
            "totalPrice": str(self.total_price),
            "pricePerHour": str(self.price_per_hour),
            "addedAt": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartItem":
        return cls(
            id=str(data["id"]),
            instructor_id=str(data["instructorId"]),
            instructor_name=str(data.get("instructorName", "")),
            instructor_avatar=str(data.get("instructorAvatar", "")),
            location=str(data.get("location", "")),
            discipline=str(data.get("discipline", "")),
            selected_slots=tuple(SelectedSlot.from_dict(s) for s in data.get("selectedSlots", [])),
            total_hours=to_decimal(data.get("totalHours")),
            total_price=to_decimal(data.get("totalPrice")),
            price_per_hour=to_decimal(data.get("pricePerHour")),
            added_at=int(data.get("addedAt", 0)),
        )


CartChange = Callable[[List[CartItem]], List[CartItem]]


class CartStore(Protocol):
    """Key-value persistence for cart contents."""

    def load(self, key: str) -> List[CartItem]:
        ...

    def update(self, key: str, change: CartChange) -> List[CartItem]:
        """
        Apply ``change`` to the stored items and persist the result as one step.

        ``change`` receives the latest stored list, never a caller's snapshot.
        Returning the same list object means nothing changed and nothing is
        written. Returns the stored list after the update.
        """
        ...


class InMemoryCartStore:
    """Process-local store, used by tests and as the default."""

    def __init__(self) -> None:
        self._data: Dict[str, Tuple[CartItem, ...]] = {}
        self._lock = threading.Lock()

    def load(self, key: str) -> List[CartItem]:
        with self._lock:
            return list(self._data.get(key, ()))

    def update(self, key: str, change: CartChange) -> List[CartItem]:
        with self._lock:
            current = list(self._data.get(key, ()))
            updated = change(current)
            if updated is not current:
                self._data[key] = tuple(updated)
            return list(updated)


def _epoch_millis() -> int:
    return int(_time.time() * 1000)


def _new_item_id() -> str:
    return generate_prefixed_id(CART_ITEM_ID_PREFIX)


@dataclass
class Cart:
    """
    Cart for one storage key.

    Args:
        key: Storage key the cart is persisted under
        store: Persistence backend; defaults to a fresh in-memory store
        clock: Returns epoch milliseconds for ``added_at``
        id_factory: Returns a fresh item id
    """

    key: str
    store: CartStore = field(default_factory=InMemoryCartStore)
    clock: Callable[[], int] = _epoch_millis
    id_factory: Callable[[], str] = _new_item_id
    _items: Tuple[CartItem, ...] = field(init=False, default=())
    _lock: threading.Lock = field(init=False, repr=False, default_factory=threading.Lock)

    def __post_init__(self) -> None:
        self._items = tuple(self.store.load(self.key))

    @property
    def items(self) -> List[CartItem]:
        with self._lock:
            return list(self._items)

    def add_item(self, candidate: CartItemCandidate) -> CartItem:
        """Append a new line item built from the candidate; raises on empty selection."""
        if not candidate.selected_slots:
            raise EmptySlotSelectionException(instructor_id=candidate.instructor_id)

        slots = tuple(candidate.selected_slots)
        item = CartItem(
            id=self.id_factory(),
            instructor_id=candidate.instructor_id,
            instructor_name=candidate.instructor_name,
            instructor_avatar=candidate.instructor_avatar,
            location=candidate.location,
            discipline=candidate.discipline,
            selected_slots=slots,
            total_hours=sum((slot.hours for slot in slots), Decimal("0")),
            total_price=sum((slot.price for slot in slots), Decimal("0")),
            price_per_hour=to_decimal(candidate.price_per_hour),
            added_at=self.clock(),
        )
        with self._lock:
            self._apply(lambda current: current + [item])
        logger.info(
            "Added cart item %s for instructor %s (%d slots)",
            item.id,
            item.instructor_id,
            len(slots),
        )
        return item

    def remove_item(self, item_id: str) -> bool:
        """Drop the item with this id. Unknown ids are a no-op; returns whether one was removed."""
        removed = False

        def drop(current: List[CartItem]) -> List[CartItem]:
            nonlocal removed
            remaining = [item for item in current if item.id != item_id]
            removed = len(remaining) != len(current)
            return remaining if removed else current

        with self._lock:
            self._apply(drop)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._apply(lambda current: [])

    def _apply(self, change: CartChange) -> None:
        # Caller holds self._lock; the local view changes only after the store accepted the write
        self._items = tuple(self.store.update(self.key, change))

    def total(self) -> Decimal:
        with self._lock:
            return sum((item.total_price for item in self._items), Decimal("0"))

    def total_hours(self) -> Decimal:
        with self._lock:
            return sum((item.total_hours for item in self._items), Decimal("0"))

    def item_count(self) -> int:
        with self._lock:
            return len(self._items)


def items_from_payload(payload: Iterable[Mapping[str, Any]]) -> List[CartItem]:
    return [CartItem.from_dict(entry) for entry in payload]


def items_to_payload(items: Iterable[CartItem]) -> List[Dict[str, Any]]:
    return [item.to_dict() for item in items]


__all__ = [
    "Cart",
    "CartChange",
    "CartItem",
    "CartItemCandidate",
    "CartStore",
    "InMemoryCartStore",
    "SelectedSlot",
    "items_from_payload",
    "items_to_payload",
    "to_decimal",
]
