"""Instructor profile and search result schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, Money
from .resort import ResortResponse


class InstructorImageResponse(CamelModel):
    id: int
    instructor_id: str
    image_url: str
    created_at: Optional[datetime] = None


class InstructorSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None
    biography: Optional[str] = None
    profile_status: int = 0
    created_at: Optional[datetime] = None
    languages: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class InstructorSearchResult(InstructorSummary):
    min_price: Optional[Money] = None


class PricingResponse(CamelModel):
    min_hourly_rate: Optional[Money] = None
    offer_count: int = 0


class InstructorDisciplineResponse(CamelModel):
    id: int
    name: str
    color_id: Optional[int] = None
    min_price: Money


class BookingStatsResponse(CamelModel):
    booking_count: int = 0
    earliest_booking: Optional[date] = None
    latest_booking: Optional[date] = None


class InstructorProfileResponse(InstructorSummary):
    full_name: str
    resorts: List[ResortResponse] = Field(default_factory=list)
    disciplines: List[InstructorDisciplineResponse] = Field(default_factory=list)
    pricing: PricingResponse
