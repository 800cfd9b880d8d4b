# backend/raven/models/instructor.py
"""
Instructor models for the Raven platform.

An instructor carries the public profile shown on search results and the
profile page. Languages and gallery images live in their own tables so
that they can be fetched in bulk for a page of instructors.
"""

from datetime import datetime, timezone
import logging

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class Instructor(Base):
    """Ski instructor with a public profile."""

    __tablename__ = "instructors"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="")
    email = Column(String(255), nullable=True, unique=True)
    avatar_url = Column(String(500), nullable=True)
    biography = Column(Text, nullable=True)
    # 0 = draft, 1 = approved, 2 = live
    profile_status = Column(Integer, nullable=False, default=0)
    stripe_connected_account_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    images = relationship(
        "InstructorImage",
        back_populates="instructor",
        cascade="all, delete-orphan",
        order_by="InstructorImage.created_at",
    )
    offers = relationship("InstructorOffer", back_populates="instructor", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self) -> str:
        return f"<Instructor {self.id} {self.full_name}>"


class InstructorImage(Base):
    """Gallery image attached to an instructor profile."""

    __tablename__ = "instructor_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    instructor_id = Column(
        String(26), ForeignKey("instructors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_url = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    instructor = relationship("Instructor", back_populates="images")


class UserLanguage(Base):
    """Language spoken by a user (instructors in practice)."""

    __tablename__ = "user_languages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(26), nullable=False)
    name = Column(String(100), nullable=False)

    __table_args__ = (Index("ix_user_languages_user_id", "user_id"),)
