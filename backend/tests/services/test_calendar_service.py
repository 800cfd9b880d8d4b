"""Tests for CalendarService against a real session."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from raven.core.config import settings
from raven.core.exceptions import CalendarWindowTooLargeException, NotFoundException
from raven.domain.range_selection import DateRangeSelection, SelectionEvent
from raven.models import BookingStatus
from raven.services.calendar_service import CalendarService

FEB_10 = date(2025, 2, 10)
FEB_11 = date(2025, 2, 11)


@pytest.fixture
def instructor(make_instructor, make_offer):
    instructor = make_instructor()
    make_offer(instructor, rate="100")
    return instructor


def test_availability_end_to_end(db, instructor, make_booking):
    make_booking(instructor, [(FEB_10, 2)])

    result = CalendarService(db).get_availability(instructor.id, FEB_10, FEB_11)

    assert result["hourly_rate"] == Decimal("100")
    assert len(result["slots"]) == 8
    by_key = {slot["key"]: slot for slot in result["slots"]}
    assert by_key["2025-02-10-2"]["is_available"] is False
    assert by_key["2025-02-10-2"]["price"] == Decimal("300")
    assert by_key["2025-02-10-3"]["is_available"] is True
    assert by_key["2025-02-10-3"]["price"] == Decimal("200")
    assert result["summary"]["total_days"] == 2


def test_cancelled_bookings_do_not_occupy(db, instructor, make_booking):
    make_booking(instructor, [(FEB_10, 2)], status=BookingStatus.CANCELLED.value)

    index = CalendarService(db).get_occupancy_index(instructor.id, FEB_10, FEB_11)

    assert len(index) == 0


def test_occupancy_is_scoped_to_instructor(db, instructor, make_instructor, make_booking):
    other = make_instructor(first_name="Louis")
    make_booking(other, [(FEB_10, 3)])
    make_booking(instructor, [(FEB_11, 5)])

    occupancy = CalendarService(db).get_occupancy(instructor.id, FEB_10, FEB_11)

    days = {day["date"]: day for day in occupancy["days"]}
    assert days[FEB_10]["occupied_slot_ids"] == []
    assert days[FEB_11]["occupied_slot_ids"] == [5]
    assert days[FEB_11]["slot_state"]["evening"] is True


def test_inverted_window_returns_empty_grid(db, instructor):
    result = CalendarService(db).get_availability(instructor.id, FEB_11, FEB_10)
    assert result["slots"] == []
    assert result["summary"]["total_days"] == 0


def test_window_at_the_limit_is_allowed(db, instructor):
    with patch.object(settings, "max_calendar_window_days", 7):
        result = CalendarService(db).get_availability(
            instructor.id, FEB_10, FEB_10 + timedelta(days=6)
        )
    assert result["summary"]["total_days"] == 7


def test_window_past_the_limit_is_rejected(db, instructor):
    service = CalendarService(db)
    with patch.object(settings, "max_calendar_window_days", 7):
        with pytest.raises(CalendarWindowTooLargeException) as exc_info:
            service.get_availability(instructor.id, FEB_10, FEB_10 + timedelta(days=7))
        with pytest.raises(CalendarWindowTooLargeException):
            service.get_occupancy(instructor.id, FEB_10, FEB_10 + timedelta(days=7))

    assert exc_info.value.details["max_days"] == 7


def test_unknown_instructor_is_not_found(db):
    with pytest.raises(NotFoundException):
        CalendarService(db).get_availability("01ARZ3NDEKTSV4RRFFQ69G5FAV", FEB_10, FEB_11)


def test_catalog_rows_drive_the_grid(db, instructor, seed_day_slots):
    slots = CalendarService(db).build_grid(instructor.id, FEB_10, FEB_10, Decimal("50"))
    assert [slot.day_slot_id for slot in slots] == [2, 3, 4, 5]
    assert slots[1].price == Decimal("100")


def test_booking_items_include_instructor(db, instructor, make_booking):
    booking = make_booking(instructor, [(FEB_10, 2), (FEB_11, 3)])

    items = CalendarService(db).get_booking_items(instructor.id, FEB_11, FEB_11)

    assert len(items) == 1
    assert items[0]["booking_id"] == booking.id
    assert items[0]["instructor_id"] == instructor.id
    assert items[0]["day_slot_id"] == 3


def test_apply_selection(db):
    change = CalendarService(db).apply_selection(DateRangeSelection(FEB_11), FEB_10)
    assert change.event is SelectionEvent.COMPLETED
    assert change.selection == DateRangeSelection(FEB_10, FEB_11)
