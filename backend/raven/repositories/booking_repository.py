# backend/raven/repositories/booking_repository.py
"""
Booking Repository for Raven

Booking items are the unit of occupancy: one row per booked day slot on a
date. Queries here join items to their parent booking to scope them to an
instructor. Cancelled bookings never occupy a slot.
"""

from datetime import date
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, contains_eager

from ..core.exceptions import RepositoryException
from ..domain.occupancy import BookingOccupancyRecord
from ..models.booking import Booking, BookingItem, BookingStatus
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[BookingItem]):
    """Repository for booking items and occupancy snapshots."""

    def __init__(self, db: Session):
        super().__init__(db, BookingItem)

    def _active_items(self) -> Query:
        return (
            self.db.query(BookingItem)
            .join(Booking, BookingItem.booking_id == Booking.id)
            .filter(Booking.status != BookingStatus.CANCELLED.value)
        )

    def get_booking_items(
        self,
        instructor_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[BookingItem]:
        """Booking items with their parent booking, optionally scoped and windowed."""
        query = self._active_items().options(contains_eager(BookingItem.booking))
        if instructor_id:
            query = query.filter(Booking.instructor_id == instructor_id)
        if start_date:
            query = query.filter(BookingItem.date >= start_date)
        if end_date:
            query = query.filter(BookingItem.date <= end_date)
        return self._execute_query(query.order_by(BookingItem.date, BookingItem.day_slot_id))

    def get_occupancy_records(
        self, instructor_id: str, start_date: date, end_date: date
    ) -> List[BookingOccupancyRecord]:
        """One consistent (date, day_slot_id) snapshot for an instructor's window."""
        try:
            rows = (
                self.db.query(BookingItem.date, BookingItem.day_slot_id)
                .join(Booking, BookingItem.booking_id == Booking.id)
                .filter(
                    Booking.instructor_id == instructor_id,
                    Booking.status != BookingStatus.CANCELLED.value,
                    BookingItem.date >= start_date,
                    BookingItem.date <= end_date,
                )
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading occupancy for {instructor_id}: {str(e)}")
            raise RepositoryException(f"Failed to load occupancy: {str(e)}")
        return [BookingOccupancyRecord(date=row[0], day_slot_id=row[1]) for row in rows]

    def get_booked_instructor_ids(
        self, instructor_ids: Iterable[str], start_date: date, end_date: date
    ) -> Set[str]:
        """Instructors with at least one booking item inside the inclusive window."""
        id_list = list(instructor_ids)
        if not id_list:
            return set()
        try:
            rows = (
                self.db.query(Booking.instructor_id)
                .join(BookingItem, BookingItem.booking_id == Booking.id)
                .filter(
                    Booking.instructor_id.in_(id_list),
                    Booking.status != BookingStatus.CANCELLED.value,
                    BookingItem.date >= start_date,
                    BookingItem.date <= end_date,
                )
                .distinct()
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading booked instructors: {str(e)}")
            raise RepositoryException(f"Failed to load booked instructors: {str(e)}")
        return {row[0] for row in rows}

    def get_booking_stats(self, instructor_id: str) -> Dict[str, Any]:
        """Item count plus earliest and latest item date for one instructor."""
        try:
            count, earliest, latest = (
                self.db.query(
                    func.count(BookingItem.id),
                    func.min(BookingItem.date),
                    func.max(BookingItem.date),
                )
                .join(Booking, BookingItem.booking_id == Booking.id)
                .filter(Booking.instructor_id == instructor_id)
                .one()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading booking stats for {instructor_id}: {str(e)}")
            raise RepositoryException(f"Failed to load booking stats: {str(e)}")
        return {"booking_count": count or 0, "earliest": earliest, "latest": latest}
