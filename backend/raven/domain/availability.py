"""
Slot availability grid.

For a date window and an instructor's occupancy index, produces one entry per
(date, slot type) with availability and price. Dates step one calendar day at
a time so the grid is unaffected by DST or local time zones.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.exceptions import SlotOutOfRangeException, SlotUnavailableException
from .cart import SelectedSlot, to_decimal
from .day_slots import STANDARD_CATALOG, DaySlotType
from .occupancy import OccupancyIndex


@dataclass(frozen=True)
class AvailableSlot:
    date: date
    day_slot_id: int
    day_slot_name: str
    start_time: time
    end_time: time
    hours: Decimal
    price: Decimal
    is_available: bool

    @property
    def key(self) -> str:
        return f"{self.date.isoformat()}-{self.day_slot_id}"

    def to_selected(self) -> SelectedSlot:
        return SelectedSlot(
            date=self.date,
            day_slot_id=self.day_slot_id,
            day_slot_name=self.day_slot_name,
            start_time=self.start_time,
            end_time=self.end_time,
            hours=self.hours,
            price=self.price,
        )


@dataclass(frozen=True)
class SlotAvailabilitySummary:
    day_slot_id: int
    name: str
    total_days: int
    available_days: int

    @property
    def is_available(self) -> bool:
        return self.available_days > 0


@dataclass(frozen=True)
class AvailabilitySummary:
    total_days: int
    slots: Tuple[SlotAvailabilitySummary, ...]
    total_available_hours: Decimal


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Inclusive calendar-day range; empty when start is after end."""
    if start_date > end_date:
        return
    current = start_date
    while True:
        yield current
        # Stop before stepping past date.max
        if current == end_date:
            return
        current += timedelta(days=1)


def generate_available_slots(
    start_date: date,
    end_date: date,
    occupancy: OccupancyIndex,
    hourly_rate: Any,
    slot_types: Optional[Iterable[DaySlotType]] = None,
) -> List[AvailableSlot]:
    """
    Build the availability grid for ``start_date..end_date`` inclusive.

    Args:
        start_date: First day of the window
        end_date: Last day of the window
        occupancy: Occupied slot ids per date for one instructor
        hourly_rate: Instructor rate; ``None`` or 0 yields zero prices
        slot_types: Slot types to offer; defaults to the bookable standard ones

    Returns:
        Entries ordered by date, then by slot type id
    """
    if slot_types is None:
        slot_types = STANDARD_CATALOG.bookable()
    ordered_types = sorted(slot_types, key=lambda slot_type: slot_type.id)
    rate = to_decimal(hourly_rate)

    slots: List[AvailableSlot] = []
    for day in iter_dates(start_date, end_date):
        occupied = occupancy.slots_for(day)
        for slot_type in ordered_types:
            slots.append(
                AvailableSlot(
                    date=day,
                    day_slot_id=slot_type.id,
                    day_slot_name=slot_type.name,
                    start_time=slot_type.default_start,
                    end_time=slot_type.default_end,
                    hours=slot_type.hours,
                    price=rate * slot_type.hours,
                    is_available=slot_type.id not in occupied,
                )
            )
    return slots


def summarize_availability(slots: Sequence[AvailableSlot]) -> AvailabilitySummary:
    """Per slot type counts of offered and free days across a grid."""
    per_type: Dict[int, List[AvailableSlot]] = {}
    for slot in slots:
        per_type.setdefault(slot.day_slot_id, []).append(slot)

    summaries = tuple(
        SlotAvailabilitySummary(
            day_slot_id=slot_id,
            name=entries[0].day_slot_name,
            total_days=len(entries),
            available_days=sum(1 for entry in entries if entry.is_available),
        )
        for slot_id, entries in sorted(per_type.items())
    )
    return AvailabilitySummary(
        total_days=len({slot.date for slot in slots}),
        slots=summaries,
        total_available_hours=sum(
            (slot.hours for slot in slots if slot.is_available), Decimal("0")
        ),
    )


def pick_slots(
    grid: Sequence[AvailableSlot], picks: Iterable[Tuple[date, int]]
) -> List[SelectedSlot]:
    """
    Resolve (date, day slot id) picks against a grid.

    Duplicate picks collapse and the result keeps grid order. Raises
    ``SlotOutOfRangeException`` for a pick outside the grid and
    ``SlotUnavailableException`` for a pick on an occupied slot.
    """
    by_key = {(slot.date, slot.day_slot_id): slot for slot in grid}
    wanted = set()
    for slot_date, day_slot_id in picks:
        slot = by_key.get((slot_date, day_slot_id))
        if slot is None:
            raise SlotOutOfRangeException(slot_date.isoformat(), day_slot_id)
        if not slot.is_available:
            raise SlotUnavailableException(slot_date.isoformat(), day_slot_id, slot.day_slot_name)
        wanted.add((slot_date, day_slot_id))

    return [slot.to_selected() for slot in grid if (slot.date, slot.day_slot_id) in wanted]
