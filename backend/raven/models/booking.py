# backend/raven/models/booking.py
"""
Booking models for the Raven platform.

A booking groups the slots a customer reserved with one instructor. Each
reserved day slot is a booking item carrying its date and day_slot_id;
booking items are the occupancy records the calendar reads.
"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Time
from sqlalchemy.orm import relationship

from ..database import Base


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    instructor_id = Column(
        String(26), ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_id = Column(String(26), ForeignKey("customers.id"), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    items = relationship("BookingItem", back_populates="booking", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Booking {self.id} instructor={self.instructor_id} status={self.status}>"


class BookingItem(Base):
    __tablename__ = "booking_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    booking_slot_id = Column(Integer, ForeignKey("booking_slots.id"), nullable=True)
    day_slot_id = Column(Integer, nullable=True)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    total_minutes = Column(Integer, nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    offer_id = Column(Integer, ForeignKey("instructor_offers.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    booking = relationship("Booking", back_populates="items")

    __table_args__ = (Index("ix_booking_items_date", "date"),)
