# backend/raven/repositories/factory.py
"""
Repository Factory for Raven

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .analytics_repository import AnalyticsRepository
    from .booking_repository import BookingRepository
    from .cart_repository import CartStateRepository
    from .day_slot_repository import DaySlotRepository
    from .instructor_repository import InstructorRepository
    from .offer_repository import OfferRepository
    from .resort_repository import ResortRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_instructor_repository(db: Session) -> "InstructorRepository":
        from .instructor_repository import InstructorRepository

        return InstructorRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        """Create repository for booking items and occupancy queries."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_day_slot_repository(db: Session) -> "DaySlotRepository":
        """Create repository for the slot catalog and configured booking slots."""
        from .day_slot_repository import DaySlotRepository

        return DaySlotRepository(db)

    @staticmethod
    def create_offer_repository(db: Session) -> "OfferRepository":
        from .offer_repository import OfferRepository

        return OfferRepository(db)

    @staticmethod
    def create_resort_repository(db: Session) -> "ResortRepository":
        from .resort_repository import ResortRepository

        return ResortRepository(db)

    @staticmethod
    def create_cart_state_repository(db: Session) -> "CartStateRepository":
        from .cart_repository import CartStateRepository

        return CartStateRepository(db)

    @staticmethod
    def create_analytics_repository(db: Session) -> "AnalyticsRepository":
        """Create repository for dashboard aggregate queries."""
        from .analytics_repository import AnalyticsRepository

        return AnalyticsRepository(db)
