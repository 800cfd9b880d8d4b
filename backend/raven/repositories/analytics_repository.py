# backend/raven/repositories/analytics_repository.py
"""
Analytics Repository for Raven

Raw reads behind the admin dashboard. Aggregation lives in
AnalyticsService; this class only fetches rows and counts.
"""

from datetime import datetime
import logging
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.customer import Customer
from ..models.day_slot import BookingSlot
from ..models.instructor import Instructor, InstructorImage, UserLanguage
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AnalyticsRepository(BaseRepository[Instructor]):
    """Repository for dashboard reads across instructors, customers and slot configuration."""

    def __init__(self, db: Session):
        super().__init__(db, Instructor)

    def count_instructors(self) -> int:
        return self.count()

    def count_customers(self) -> int:
        return self._count_query(self.db.query(Customer))

    def list_instructors(self, profile_status: Optional[int] = None) -> List[Instructor]:
        query = self._build_query()
        if profile_status is not None:
            query = query.filter(Instructor.profile_status == profile_status)
        return self._execute_query(query.order_by(Instructor.first_name, Instructor.id))

    def list_booking_slots(self, instructor_id: Optional[str] = None) -> List[BookingSlot]:
        query = self.db.query(BookingSlot)
        if instructor_id is not None:
            query = query.filter(BookingSlot.instructor_id == instructor_id)
        return self._execute_query(query.order_by(BookingSlot.id))

    def get_instructor_signup_times(
        self,
        profile_status: int,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[datetime]:
        query = self.db.query(Instructor.created_at).filter(
            Instructor.profile_status == profile_status
        )
        if created_from is not None:
            query = query.filter(Instructor.created_at >= created_from)
        if created_to is not None:
            query = query.filter(Instructor.created_at <= created_to)
        return [row[0] for row in self._execute_query(query)]

    def get_customer_signup_times(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[datetime]:
        query = self.db.query(Customer.created_at)
        if created_from is not None:
            query = query.filter(Customer.created_at >= created_from)
        if created_to is not None:
            query = query.filter(Customer.created_at <= created_to)
        return [row[0] for row in self._execute_query(query)]

    def count_images_by_instructor(self) -> Dict[str, int]:
        query = self.db.query(InstructorImage.instructor_id, func.count(InstructorImage.id)).group_by(
            InstructorImage.instructor_id
        )
        return {instructor_id: count for instructor_id, count in self._execute_query(query)}

    def count_languages_by_user(self) -> Dict[str, int]:
        query = self.db.query(UserLanguage.user_id, func.count(UserLanguage.id)).group_by(
            UserLanguage.user_id
        )
        return {user_id: count for user_id, count in self._execute_query(query)}
