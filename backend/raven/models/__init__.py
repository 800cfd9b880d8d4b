"""
Database models for the Raven platform.

The models are organized by functionality:
- Instructors, their images and languages
- Customers
- Resorts, disciplines and instructor offers
- Day slot catalog and instructor slot configuration
- Bookings and booking items (calendar occupancy)
- Persisted cart state
"""

from .booking import Booking, BookingItem, BookingStatus
from .cart import CartState
from .customer import Customer
from .day_slot import BookingSlot, DaySlot
from .instructor import Instructor, InstructorImage, UserLanguage
from .offer import InstructorOffer, InstructorOfferDiscipline, InstructorOfferResort
from .resort import Discipline, Resort

__all__ = [
    "Booking",
    "BookingItem",
    "BookingSlot",
    "BookingStatus",
    "CartState",
    "Customer",
    "DaySlot",
    "Discipline",
    "Instructor",
    "InstructorImage",
    "InstructorOffer",
    "InstructorOfferDiscipline",
    "InstructorOfferResort",
    "Resort",
    "UserLanguage",
]
