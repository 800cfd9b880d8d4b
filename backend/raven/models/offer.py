# backend/raven/models/offer.py
"""
Instructor offers.

An offer is the priced unit an instructor publishes: an hourly rate for
weekdays (and optionally weekends), valid at one or more resorts for one
or more disciplines. Search, pricing and the cart all read the weekday
rate of the instructor's active offers.
"""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.constants import OFFER_STATUS_ACTIVE
from ..database import Base


class InstructorOffer(Base):
    __tablename__ = "instructor_offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    instructor_id = Column(
        String(26), ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default=OFFER_STATUS_ACTIVE)
    hourly_rate_weekday = Column(Numeric(10, 2), nullable=True)
    hourly_rate_weekend = Column(Numeric(10, 2), nullable=True)

    instructor = relationship("Instructor", back_populates="offers")
    resort_links = relationship(
        "InstructorOfferResort", back_populates="offer", cascade="all, delete-orphan"
    )
    discipline_links = relationship(
        "InstructorOfferDiscipline", back_populates="offer", cascade="all, delete-orphan"
    )


class InstructorOfferResort(Base):
    __tablename__ = "instructor_offer_resorts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    offer_id = Column(
        Integer, ForeignKey("instructor_offers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    resort_id = Column(Integer, ForeignKey("resorts.id", ondelete="CASCADE"), nullable=False)

    offer = relationship("InstructorOffer", back_populates="resort_links")
    resort = relationship("Resort")

    __table_args__ = (UniqueConstraint("offer_id", "resort_id", name="uq_offer_resort"),)


class InstructorOfferDiscipline(Base):
    __tablename__ = "instructor_offer_disciplines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    offer_id = Column(
        Integer, ForeignKey("instructor_offers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    discipline_id = Column(
        Integer, ForeignKey("disciplines.id", ondelete="CASCADE"), nullable=False
    )

    offer = relationship("InstructorOffer", back_populates="discipline_links")
    discipline = relationship("Discipline")

    __table_args__ = (UniqueConstraint("offer_id", "discipline_id", name="uq_offer_discipline"),)
