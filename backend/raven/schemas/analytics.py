"""Analytics dashboard payloads, wrapped in ``ApiResponse`` by the routes."""

from datetime import date, time
from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class OverviewData(CamelModel):
    total_users: int
    total_instructors: int
    total_customers: int
    instructors_with_availability: int
    average_slot_types_per_instructor: float
    slot_types_used: List[str] = Field(default_factory=list)


class SignupDataPoint(CamelModel):
    date: str
    instructor_signups: int
    customer_signups: int
    total_signups: int


class SignupDateRange(CamelModel):
    start: str
    end: str


class SignupsData(CamelModel):
    series: List[SignupDataPoint] = Field(default_factory=list)
    date_range: SignupDateRange


class DateRange(CamelModel):
    earliest: date
    latest: date


class InstructorWithAvailability(CamelModel):
    id: str
    name: str
    slot_type_count: int
    slot_types: List[str] = Field(default_factory=list)
    date_range: Optional[DateRange] = None


class InstructorsSummary(CamelModel):
    total_instructors_with_slot_types: int
    total_instructors: int


class SlotTypeAggregate(CamelModel):
    id: int
    name: str
    default_start_time: time
    default_end_time: time
    instructor_count: int
    instructor_names: List[str] = Field(default_factory=list)


class InstructorsAggregate(CamelModel):
    slot_types: List[SlotTypeAggregate] = Field(default_factory=list)
    date_range: Optional[DateRange] = None


class InstructorsAnalyticsData(CamelModel):
    instructors: List[InstructorWithAvailability] = Field(default_factory=list)
    summary: InstructorsSummary
    aggregate: InstructorsAggregate


class SlotTypeBreakdown(CamelModel):
    id: int
    name: str
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    days_configured: List[str] = Field(default_factory=list)


class InstructorRef(CamelModel):
    id: str
    name: str


class InstructorSlotDetails(CamelModel):
    instructor: InstructorRef
    slot_types: List[SlotTypeBreakdown] = Field(default_factory=list)
    date_range: Optional[DateRange] = None


class CompletenessSummary(CamelModel):
    total_instructors: int
    with_avatar: int
    with_gallery: int
    with_languages: int
    with_biography: int
    with_stripe_account: int


class CompletenessPercentages(CamelModel):
    avatar: int
    gallery: int
    languages: int
    biography: int
    stripe_account: int


class CompletenessDetail(CamelModel):
    id: str
    name: str
    has_avatar: bool
    gallery_count: int
    language_count: int
    has_biography: bool
    has_stripe_account: bool


class ProfileCompletenessData(CamelModel):
    summary: CompletenessSummary
    percentages: CompletenessPercentages
    details: List[CompletenessDetail] = Field(default_factory=list)
