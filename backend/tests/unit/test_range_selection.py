"""Tests for calendar date-range selection."""

from datetime import date

import pytest

from raven.domain.range_selection import (
    DateRangeSelection,
    RangeSelector,
    SelectionEvent,
    SelectionMode,
    SelectionPhase,
    apply_click,
)

FEB_5 = date(2025, 2, 5)
FEB_10 = date(2025, 2, 10)
FEB_12 = date(2025, 2, 12)


@pytest.mark.unit
class TestApplyClick:
    def test_first_click_starts_a_range(self) -> None:
        change = apply_click(DateRangeSelection.empty(), FEB_10)
        assert change.event is SelectionEvent.STARTED
        assert change.selection == DateRangeSelection(FEB_10, None)
        assert change.selection.phase is SelectionPhase.PARTIAL_START

    def test_second_click_before_start_is_reordered(self) -> None:
        started = apply_click(DateRangeSelection.empty(), FEB_10).selection
        change = apply_click(started, FEB_5)
        assert change.event is SelectionEvent.COMPLETED
        assert change.selection.start_date == FEB_5
        assert change.selection.end_date == FEB_10

    def test_same_day_twice_is_a_single_day_range(self) -> None:
        started = apply_click(DateRangeSelection.empty(), FEB_10).selection
        completed = apply_click(started, FEB_10).selection
        assert completed == DateRangeSelection(FEB_10, FEB_10)
        assert completed.day_count() == 1

    def test_click_on_complete_range_starts_over(self) -> None:
        change = apply_click(DateRangeSelection(FEB_5, FEB_10), FEB_12)
        assert change.event is SelectionEvent.STARTED
        assert change.selection == DateRangeSelection(FEB_12)

    def test_single_mode_reports_click_and_keeps_selection(self) -> None:
        current = DateRangeSelection(FEB_5, FEB_10)
        change = apply_click(current, FEB_12, SelectionMode.SINGLE)
        assert change.event is SelectionEvent.DAY_CLICKED
        assert change.clicked_date == FEB_12
        assert change.selection is current


@pytest.mark.unit
class TestDateRangeSelection:
    def test_contains_is_inclusive(self) -> None:
        selection = DateRangeSelection(FEB_5, FEB_10)
        assert selection.contains(FEB_5)
        assert selection.contains(FEB_10)
        assert not selection.contains(FEB_12)
        assert selection.is_start(FEB_5)
        assert selection.is_end(FEB_10)
        assert selection.day_count() == 6

    def test_partial_range_contains_nothing(self) -> None:
        selection = DateRangeSelection(FEB_5)
        assert not selection.contains(FEB_5)
        assert not selection.is_end(FEB_5)
        assert selection.day_count() == 0

    @pytest.mark.parametrize(
        "start, end",
        [
            (None, FEB_10),  # end without start
            (FEB_10, FEB_5),  # end before start
        ],
    )
    def test_invalid_ranges_are_rejected(self, start, end) -> None:
        with pytest.raises(ValueError):
            DateRangeSelection(start, end)


@pytest.mark.unit
class TestRangeSelector:
    def test_three_click_cycle(self) -> None:
        selector = RangeSelector()
        events = [selector.click(day).event for day in (FEB_10, FEB_5, FEB_12)]

        assert events == [SelectionEvent.STARTED, SelectionEvent.COMPLETED, SelectionEvent.STARTED]
        assert selector.selection == DateRangeSelection(FEB_12)

    def test_mode_switch_resets_selection(self) -> None:
        selector = RangeSelector()
        selector.click(FEB_5)
        selector.click(FEB_10)

        change = selector.set_mode(SelectionMode.SINGLE)

        assert change.event is SelectionEvent.RESET
        assert selector.selection.is_empty
        assert selector.mode is SelectionMode.SINGLE

    def test_clear(self) -> None:
        selector = RangeSelector()
        selector.click(FEB_5)
        selector.clear()
        assert selector.selection.phase is SelectionPhase.EMPTY
