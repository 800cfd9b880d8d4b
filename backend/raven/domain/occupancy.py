"""
Booking occupancy index.

Collapses raw booking records (one per booked day slot) into a per-date set
of occupied slot ids. Both the calendar day indicators and the slot
availability grid read from the same index.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Set, Tuple

from ..core.constants import (
    AFTERNOON_SLOT_ID,
    EVENING_SLOT_ID,
    FULL_DAY_SLOT_ID,
    LUNCH_SLOT_ID,
    MORNING_SLOT_ID,
)

_EMPTY: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class BookingOccupancyRecord:
    date: date
    day_slot_id: Optional[int]


@dataclass(frozen=True)
class SlotState:
    """Booked flags for the four segments of a calendar day indicator."""

    morning: bool = False
    lunch: bool = False
    afternoon: bool = False
    evening: bool = False

    @property
    def any_booked(self) -> bool:
        return self.morning or self.lunch or self.afternoon or self.evening

    @property
    def fully_booked(self) -> bool:
        return self.morning and self.lunch and self.afternoon and self.evening


def to_date(value: Any) -> date:
    """Coerce a date, datetime or ISO string ("YYYY-MM-DD[...]") to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class OccupancyIndex(Mapping[date, FrozenSet[int]]):
    """Read-only mapping of date -> occupied day slot ids."""

    def __init__(self, by_date: Optional[Mapping[date, Iterable[int]]] = None):
        self._by_date: Dict[date, FrozenSet[int]] = {
            day: frozenset(slot_ids) for day, slot_ids in (by_date or {}).items()
        }

    def __getitem__(self, day: date) -> FrozenSet[int]:
        return self._by_date[day]

    def __iter__(self) -> Iterator[date]:
        return iter(self._by_date)

    def __len__(self) -> int:
        return len(self._by_date)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OccupancyIndex):
            return self._by_date == other._by_date
        return super().__eq__(other)

    def __repr__(self) -> str:
        return f"OccupancyIndex({self._by_date!r})"

    def slots_for(self, day: date) -> FrozenSet[int]:
        return self._by_date.get(day, _EMPTY)

    def is_occupied(self, day: date, day_slot_id: int) -> bool:
        return day_slot_id in self.slots_for(day)

    def slot_state(self, day: date) -> SlotState:
        """Segment flags for one day; a Full Day booking fills every segment."""
        occupied = self.slots_for(day)
        if FULL_DAY_SLOT_ID in occupied:
            return SlotState(morning=True, lunch=True, afternoon=True, evening=True)
        return SlotState(
            morning=MORNING_SLOT_ID in occupied,
            lunch=LUNCH_SLOT_ID in occupied,
            afternoon=AFTERNOON_SLOT_ID in occupied,
            evening=EVENING_SLOT_ID in occupied,
        )


def _coerce_record(record: Any) -> Tuple[date, Optional[int]]:
    if isinstance(record, Mapping):
        raw_date = record.get("date")
        slot_id = record.get("day_slot_id", record.get("daySlotId"))
    else:
        raw_date = getattr(record, "date", None)
        slot_id = getattr(record, "day_slot_id", None)
    if raw_date is None:
        raise ValueError(f"Occupancy record has no date: {record!r}")
    return to_date(raw_date), (int(slot_id) if slot_id is not None else None)


def build_occupancy_index(records: Iterable[Any]) -> OccupancyIndex:
    """
    Group booking records by date into sets of occupied day slot ids.

    Records may be ``BookingOccupancyRecord`` instances, ORM rows with
    ``date``/``day_slot_id`` attributes, or mappings using either
    ``day_slot_id`` or ``daySlotId``. Records without a slot id are skipped.
    """
    by_date: Dict[date, Set[int]] = defaultdict(set)
    for record in records:
        day, slot_id = _coerce_record(record)
        if slot_id is None:
            continue
        by_date[day].add(slot_id)
    return OccupancyIndex(by_date)
