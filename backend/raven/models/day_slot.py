# backend/raven/models/day_slot.py
"""
Day slot models.

``day_slots`` is the small catalog of named periods of a day (Full Day,
Morning, Lunch, Afternoon, Evening). ``booking_slots`` records which of
those periods an instructor has configured, either for a concrete date or
for a recurring weekday; the analytics dashboard aggregates it.
"""

from sqlalchemy import Column, Date, ForeignKey, Index, Integer, Numeric, String, Time

from ..database import Base


class DaySlot(Base):
    __tablename__ = "day_slots"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(50), nullable=False)
    default_start_time = Column(Time, nullable=False)
    default_end_time = Column(Time, nullable=False)
    duration_hours = Column(Numeric(5, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<DaySlot {self.id} {self.name}>"


class BookingSlot(Base):
    """Day slot an instructor offers, for a date and/or a weekday."""

    __tablename__ = "booking_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    instructor_id = Column(
        String(26), ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False
    )
    day_slot_id = Column(Integer, ForeignKey("day_slots.id"), nullable=True)
    date = Column(Date, nullable=True)
    # 0 = Sunday ... 6 = Saturday (7 is accepted as Sunday)
    weekday = Column(Integer, nullable=True)
    slot_start_time = Column(Time, nullable=True)
    slot_end_time = Column(Time, nullable=True)

    __table_args__ = (Index("ix_booking_slots_instructor", "instructor_id", "day_slot_id"),)
