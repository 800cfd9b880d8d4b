# backend/raven/repositories/__init__.py
"""
Repository Pattern Implementation for Raven

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with common read/create helpers
- RepositoryFactory: Factory for creating repository instances
- InstructorRepository: Profiles, gallery images and languages
- BookingRepository: Booking items and occupancy snapshots
- DaySlotRepository: Slot catalog rows
- OfferRepository: Offers, rates and resort/discipline links
- CartStateRepository / SqlCartStore: Persisted carts

Usage:
    from raven.repositories import RepositoryFactory

    repository = RepositoryFactory.create_booking_repository(db)
    records = repository.get_occupancy_records(instructor_id, start, end)
"""

from .analytics_repository import AnalyticsRepository
from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .cart_repository import CartStateRepository, SqlCartStore
from .day_slot_repository import DaySlotRepository
from .factory import RepositoryFactory
from .instructor_repository import InstructorRepository
from .offer_repository import OfferRepository
from .resort_repository import ResortRepository

__all__ = [
    "AnalyticsRepository",
    "BaseRepository",
    "BookingRepository",
    "CartStateRepository",
    "DaySlotRepository",
    "InstructorRepository",
    "OfferRepository",
    "RepositoryFactory",
    "ResortRepository",
    "SqlCartStore",
]
