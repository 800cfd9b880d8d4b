"""
Day slot catalog.

A day slot is a named period of a day (Morning, Lunch, ...) with a default
window and a fixed duration in hours. The catalog is keyed by small integer
ids and is total: looking up an id that is not in the catalog yields a
``FallbackDaySlot`` instead of an error, because booking data may reference
slot ids this deployment does not know about yet.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from ..core.constants import (
    AFTERNOON_SLOT_ID,
    EVENING_SLOT_ID,
    FULL_DAY_SLOT_ID,
    LUNCH_SLOT_ID,
    MORNING_SLOT_ID,
)


@dataclass(frozen=True)
class DaySlotType:
    id: int
    name: str
    default_start: time
    default_end: time
    hours: Decimal

    @property
    def is_full_day(self) -> bool:
        return self.id == FULL_DAY_SLOT_ID


@dataclass(frozen=True)
class KnownDaySlot:
    """Lookup result for an id present in the catalog."""

    slot_type: DaySlotType
    is_known: bool = True

    @property
    def id(self) -> int:
        return self.slot_type.id

    @property
    def name(self) -> str:
        return self.slot_type.name


@dataclass(frozen=True)
class FallbackDaySlot:
    """Lookup result for an id missing from the catalog."""

    id: int
    is_known: bool = False

    @property
    def name(self) -> str:
        return f"Day {self.id}"


DaySlotLookup = Union[KnownDaySlot, FallbackDaySlot]


STANDARD_DAY_SLOTS: tuple[DaySlotType, ...] = (
    DaySlotType(FULL_DAY_SLOT_ID, "Full Day", time(9, 0), time(17, 0), Decimal("8")),
    DaySlotType(MORNING_SLOT_ID, "Morning", time(9, 0), time(12, 0), Decimal("3")),
    DaySlotType(LUNCH_SLOT_ID, "Lunch", time(12, 0), time(14, 0), Decimal("2")),
    DaySlotType(AFTERNOON_SLOT_ID, "Afternoon", time(14, 0), time(17, 0), Decimal("3")),
    DaySlotType(EVENING_SLOT_ID, "Evening", time(17, 0), time(20, 0), Decimal("3")),
)

_STANDARD_BY_ID: Dict[int, DaySlotType] = {slot.id: slot for slot in STANDARD_DAY_SLOTS}


def _parse_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


def _row_value(row: Any, *names: str) -> Any:
    for name in names:
        if isinstance(row, Mapping):
            if name in row and row[name] is not None:
                return row[name]
        else:
            value = getattr(row, name, None)
            if value is not None:
                return value
    return None


class DaySlotCatalog:
    """Immutable id -> DaySlotType mapping."""

    def __init__(self, slot_types: Iterable[DaySlotType]):
        self._by_id: Dict[int, DaySlotType] = {
            slot.id: slot for slot in sorted(slot_types, key=lambda s: s.id)
        }

    @classmethod
    def standard(cls) -> "DaySlotCatalog":
        return cls(STANDARD_DAY_SLOTS)

    @classmethod
    def from_rows(cls, rows: Iterable[Any]) -> "DaySlotCatalog":
        """
        Build a catalog from ``day_slots`` rows or their JSON form.

        Accepts ORM objects or mappings using either the column names
        (``default_start_time``) or the wire names (``defaultStart``).
        Rows without a duration borrow it from the standard catalog.
        """
        slot_types: List[DaySlotType] = []
        for row in rows:
            slot_id = int(_row_value(row, "id"))
            hours = _row_value(row, "duration_hours", "hours")
            if hours is None:
                standard = _STANDARD_BY_ID.get(slot_id)
                if standard is None:
                    raise ValueError(f"Day slot {slot_id} has no duration")
                hours = standard.hours
            slot_types.append(
                DaySlotType(
                    id=slot_id,
                    name=str(_row_value(row, "name")),
                    default_start=_parse_time(
                        _row_value(row, "default_start_time", "defaultStart", "default_start")
                    ),
                    default_end=_parse_time(
                        _row_value(row, "default_end_time", "defaultEnd", "default_end")
                    ),
                    hours=Decimal(str(hours)),
                )
            )
        return cls(slot_types)

    def lookup(self, slot_id: int) -> DaySlotLookup:
        slot_type = self._by_id.get(slot_id)
        if slot_type is None:
            return FallbackDaySlot(slot_id)
        return KnownDaySlot(slot_type)

    def get(self, slot_id: int) -> Optional[DaySlotType]:
        return self._by_id.get(slot_id)

    def name_for(self, slot_id: int) -> str:
        return self.lookup(slot_id).name

    def bookable(self) -> List[DaySlotType]:
        """Slot types offered for selection: everything except Full Day."""
        return [slot for slot in self._by_id.values() if not slot.is_full_day]

    def all(self) -> List[DaySlotType]:
        return list(self._by_id.values())

    def __iter__(self) -> Iterator[DaySlotType]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, slot_id: object) -> bool:
        return slot_id in self._by_id


STANDARD_CATALOG = DaySlotCatalog.standard()
