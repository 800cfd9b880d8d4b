"""
Calendar date-range selection.

Two clicks pick a range: the first sets a tentative start, the second
completes the range, ordered so start <= end whichever date was clicked
first. A third click starts over. In single mode clicks are reported as-is
and the range is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class SelectionMode(str, Enum):
    SINGLE = "single"
    RANGE = "range"


class SelectionPhase(str, Enum):
    EMPTY = "empty"
    PARTIAL_START = "partial_start"
    COMPLETE = "complete"


class SelectionEvent(str, Enum):
    STARTED = "started"
    COMPLETED = "completed"
    DAY_CLICKED = "day_clicked"
    RESET = "reset"


@dataclass(frozen=True)
class DateRangeSelection:
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.start_date is None and self.end_date is not None:
            raise ValueError("A range cannot have an end date without a start date")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("Range end date must not precede its start date")

    @classmethod
    def empty(cls) -> "DateRangeSelection":
        return cls()

    @property
    def phase(self) -> SelectionPhase:
        if self.start_date is None:
            return SelectionPhase.EMPTY
        if self.end_date is None:
            return SelectionPhase.PARTIAL_START
        return SelectionPhase.COMPLETE

    @property
    def is_empty(self) -> bool:
        return self.phase is SelectionPhase.EMPTY

    @property
    def is_complete(self) -> bool:
        return self.phase is SelectionPhase.COMPLETE

    def is_start(self, day: date) -> bool:
        return self.start_date == day

    def is_end(self, day: date) -> bool:
        return self.end_date is not None and self.end_date == day

    def contains(self, day: date) -> bool:
        if not self.is_complete:
            return False
        return self.start_date <= day <= self.end_date

    def day_count(self) -> int:
        if not self.is_complete:
            return 0
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class SelectionChange:
    selection: DateRangeSelection
    event: SelectionEvent
    clicked_date: Optional[date] = None


def apply_click(
    selection: DateRangeSelection,
    clicked: date,
    mode: SelectionMode = SelectionMode.RANGE,
) -> SelectionChange:
    """Pure transition for one day click."""
    if mode is SelectionMode.SINGLE:
        return SelectionChange(selection, SelectionEvent.DAY_CLICKED, clicked)

    if selection.phase is SelectionPhase.PARTIAL_START:
        start = selection.start_date
        if clicked < start:
            completed = DateRangeSelection(clicked, start)
        else:
            completed = DateRangeSelection(start, clicked)
        return SelectionChange(completed, SelectionEvent.COMPLETED, clicked)

    # Empty or Complete: begin a new range
    return SelectionChange(DateRangeSelection(clicked), SelectionEvent.STARTED, clicked)


class RangeSelector:
    """Stateful holder around ``apply_click`` for one calendar."""

    def __init__(self, mode: SelectionMode = SelectionMode.RANGE):
        self._mode = mode
        self._selection = DateRangeSelection.empty()

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @property
    def selection(self) -> DateRangeSelection:
        return self._selection

    def click(self, day: date) -> SelectionChange:
        change = apply_click(self._selection, day, self._mode)
        self._selection = change.selection
        return change

    def set_mode(self, mode: SelectionMode) -> SelectionChange:
        """Switching modes always drops the current range."""
        self._mode = mode
        return self.reset()

    def reset(self) -> SelectionChange:
        self._selection = DateRangeSelection.empty()
        return SelectionChange(self._selection, SelectionEvent.RESET)

    clear = reset
