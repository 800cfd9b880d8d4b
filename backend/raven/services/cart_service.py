# backend/raven/services/cart_service.py
"""
Cart Service for Raven

Turns (date, day slot) picks for an instructor into a priced cart item.
Picks are resolved against a freshly generated availability grid so that a
slot booked since the customer opened the calendar is rejected rather than
double-sold.
"""

from contextlib import contextmanager
from dataclasses import asdict
from datetime import date
import logging
import threading
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import EmptySlotSelectionException, PricingUnavailableException
from ..domain.availability import pick_slots
from ..domain.cart import Cart, CartItem, CartItemCandidate, CartStore
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.cart_repository import SqlCartStore
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .calendar_service import CalendarService
from .instructor_service import InstructorService

logger = logging.getLogger(__name__)

_key_locks: Dict[str, threading.Lock] = {}
_key_locks_guard = threading.Lock()


@contextmanager
def cart_key_lock(key: str) -> Iterator[None]:
    """
    Serialize mutations of one cart key within this process.

    Held until the surrounding transaction has committed, so a second request
    on the same key reads the first one's write. Row locks cover other
    processes on databases that support ``SELECT ... FOR UPDATE``.
    """
    with _key_locks_guard:
        lock = _key_locks.setdefault(key, threading.Lock())
    with lock:
        yield


class CartService(BaseService):
    """
    Cart operations keyed by a storage key.

    Args:
        db: Database session
        store: Cart persistence; defaults to the ``cart_states`` table
        clock: Epoch-milliseconds clock for ``added_at``
    """

    def __init__(
        self,
        db: Session,
        store: Optional[CartStore] = None,
        clock: Optional[Callable[[], int]] = None,
        calendar_service: Optional[CalendarService] = None,
        instructor_service: Optional[InstructorService] = None,
    ):
        super().__init__(db)
        self.store = store or SqlCartStore(RepositoryFactory.create_cart_state_repository(db))
        self.clock = clock
        self.instructor_service = instructor_service or InstructorService(db)
        self.calendar_service = calendar_service or CalendarService(
            db, instructor_service=self.instructor_service
        )

    def get_cart(self, key: Optional[str] = None) -> Cart:
        key = key or settings.cart_storage_key
        if self.clock is not None:
            return Cart(key, self.store, clock=self.clock)
        return Cart(key, self.store)

    @staticmethod
    def describe(cart: Cart) -> Dict[str, Any]:
        return {
            "key": cart.key,
            "items": [asdict(item) for item in cart.items],
            "total": cart.total(),
            "total_hours": cart.total_hours(),
            "item_count": cart.item_count(),
        }

    @BaseService.measure_operation("add_item")
    def add_item(
        self, key: str, instructor_id: str, picks: Iterable[Tuple[date, int]]
    ) -> Tuple[CartItem, Cart]:
        """
        Add the picked slots of one instructor as a new cart item.

        Raises:
            EmptySlotSelectionException: No slots picked
            NotFoundException: Unknown instructor
            PricingUnavailableException: Instructor has no priced active offer
            SlotOutOfRangeException / SlotUnavailableException: Bad pick
        """
        picks = list(picks)
        if not picks:
            raise EmptySlotSelectionException(instructor_id=instructor_id)

        details = self.instructor_service.get_cart_details(instructor_id)
        if details.hourly_rate is None:
            raise PricingUnavailableException(instructor_id)

        window_start = min(pick[0] for pick in picks)
        window_end = max(pick[0] for pick in picks)
        grid = self.calendar_service.build_grid(
            instructor_id, window_start, window_end, details.hourly_rate
        )
        selected = pick_slots(grid, picks)

        candidate = CartItemCandidate(
            instructor_id=details.instructor_id,
            instructor_name=details.instructor_name,
            instructor_avatar=details.instructor_avatar,
            location=details.location,
            discipline=details.discipline,
            selected_slots=tuple(selected),
            price_per_hour=details.hourly_rate,
        )

        key = key or settings.cart_storage_key
        with cart_key_lock(key), self.transaction():
            cart = self.get_cart(key)
            item = cart.add_item(candidate)

        self._count("add")
        self.log_operation("add_item", cart_key=key, item_id=item.id, instructor_id=instructor_id)
        return item, cart

    @BaseService.measure_operation("remove_item")
    def remove_item(self, key: str, item_id: str) -> Tuple[bool, Cart]:
        key = key or settings.cart_storage_key
        with cart_key_lock(key), self.transaction():
            cart = self.get_cart(key)
            removed = cart.remove_item(item_id)
        if removed:
            self._count("remove")
        else:
            self.logger.debug(f"Cart item {item_id} not in cart {key}, nothing removed")
        return removed, cart

    @BaseService.measure_operation("clear_cart")
    def clear(self, key: str) -> Cart:
        key = key or settings.cart_storage_key
        with cart_key_lock(key), self.transaction():
            cart = self.get_cart(key)
            cart.clear()
        self._count("clear")
        return cart

    @staticmethod
    def _count(operation: str) -> None:
        if settings.prometheus_enabled:
            prometheus_metrics.inc_cart_operation(operation)
