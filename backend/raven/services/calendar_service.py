# backend/raven/services/calendar_service.py
"""
Calendar Service for Raven

Serves the instructor calendar: raw booking items, per-day occupancy
indicators, the bookable slot grid with prices, and range-selection
transitions. Each request reads one occupancy snapshot for the whole
window and derives everything from it.
"""

from datetime import date
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import CalendarWindowTooLargeException
from ..domain.availability import (
    AvailableSlot,
    generate_available_slots,
    iter_dates,
    summarize_availability,
)
from ..domain.occupancy import OccupancyIndex, build_occupancy_index
from ..domain.range_selection import (
    DateRangeSelection,
    SelectionChange,
    SelectionMode,
    apply_click,
)
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .catalog_service import CatalogService
from .instructor_service import InstructorService

logger = logging.getLogger(__name__)


class CalendarService(BaseService):
    def __init__(
        self,
        db: Session,
        catalog_service: Optional[CatalogService] = None,
        instructor_service: Optional[InstructorService] = None,
    ):
        super().__init__(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.catalog_service = catalog_service or CatalogService(db)
        self.instructor_service = instructor_service or InstructorService(db)

    @BaseService.measure_operation("get_booking_items")
    def get_booking_items(
        self,
        instructor_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        items = self.booking_repository.get_booking_items(instructor_id, start_date, end_date)
        return [
            {
                "id": item.id,
                "booking_id": item.booking_id,
                "booking_slot_id": item.booking_slot_id,
                "day_slot_id": item.day_slot_id,
                "date": item.date,
                "start_time": item.start_time,
                "end_time": item.end_time,
                "total_minutes": item.total_minutes,
                "hourly_rate": item.hourly_rate,
                "offer_id": item.offer_id,
                "instructor_id": item.booking.instructor_id if item.booking else None,
                "customer_id": item.booking.customer_id if item.booking else None,
            }
            for item in items
        ]

    @staticmethod
    def check_window(start_date: date, end_date: date) -> None:
        """Reject windows longer than ``max_calendar_window_days``; inverted windows pass."""
        max_days = settings.max_calendar_window_days
        if start_date <= end_date and (end_date - start_date).days >= max_days:
            raise CalendarWindowTooLargeException(
                start_date.isoformat(), end_date.isoformat(), max_days
            )

    def get_occupancy_index(
        self, instructor_id: str, start_date: date, end_date: date
    ) -> OccupancyIndex:
        if start_date > end_date:
            return OccupancyIndex()
        records = self.booking_repository.get_occupancy_records(instructor_id, start_date, end_date)
        return build_occupancy_index(records)

    @BaseService.measure_operation("get_occupancy")
    def get_occupancy(self, instructor_id: str, start_date: date, end_date: date) -> Dict[str, Any]:
        """Per-day occupied slot ids and indicator segments for the window."""
        self.check_window(start_date, end_date)
        self.instructor_service.get_instructor_or_404(instructor_id)
        index = self.get_occupancy_index(instructor_id, start_date, end_date)

        days = []
        for day in iter_dates(start_date, end_date):
            state = index.slot_state(day)
            days.append(
                {
                    "date": day,
                    "occupied_slot_ids": sorted(index.slots_for(day)),
                    "slot_state": {
                        "morning": state.morning,
                        "lunch": state.lunch,
                        "afternoon": state.afternoon,
                        "evening": state.evening,
                    },
                }
            )
        return {
            "instructor_id": instructor_id,
            "start_date": start_date,
            "end_date": end_date,
            "days": days,
        }

    def build_grid(
        self, instructor_id: str, start_date: date, end_date: date, hourly_rate: Any
    ) -> List[AvailableSlot]:
        self.check_window(start_date, end_date)
        index = self.get_occupancy_index(instructor_id, start_date, end_date)
        catalog = self.catalog_service.get_day_slot_catalog()
        slots = generate_available_slots(
            start_date, end_date, index, hourly_rate, catalog.bookable()
        )
        if settings.prometheus_enabled:
            available = sum(1 for slot in slots if slot.is_available)
            prometheus_metrics.record_availability_grid(available, len(slots) - available)
        return slots

    @BaseService.measure_operation("get_availability")
    def get_availability(
        self, instructor_id: str, start_date: date, end_date: date
    ) -> Dict[str, Any]:
        """
        Bookable slot grid for an instructor, priced at their lowest weekday rate.

        An inverted window yields an empty grid rather than an error.
        """
        self.instructor_service.get_instructor_or_404(instructor_id)
        hourly_rate = self.instructor_service.get_pricing(instructor_id)["min_hourly_rate"]
        slots = self.build_grid(instructor_id, start_date, end_date, hourly_rate)
        summary = summarize_availability(slots)

        return {
            "instructor_id": instructor_id,
            "start_date": start_date,
            "end_date": end_date,
            "hourly_rate": hourly_rate,
            "slots": [
                {
                    "key": slot.key,
                    "date": slot.date,
                    "day_slot_id": slot.day_slot_id,
                    "day_slot_name": slot.day_slot_name,
                    "start_time": slot.start_time,
                    "end_time": slot.end_time,
                    "hours": slot.hours,
                    "price": slot.price,
                    "is_available": slot.is_available,
                }
                for slot in slots
            ],
            "summary": {
                "total_days": summary.total_days,
                "total_available_hours": summary.total_available_hours,
                "slots": [
                    {
                        "day_slot_id": entry.day_slot_id,
                        "name": entry.name,
                        "total_days": entry.total_days,
                        "available_days": entry.available_days,
                        "is_available": entry.is_available,
                    }
                    for entry in summary.slots
                ],
            },
        }

    def apply_selection(
        self,
        selection: DateRangeSelection,
        clicked_date: date,
        mode: SelectionMode = SelectionMode.RANGE,
    ) -> SelectionChange:
        change = apply_click(selection, clicked_date, mode)
        if settings.prometheus_enabled:
            prometheus_metrics.inc_selection_event(change.event.value)
        return change
