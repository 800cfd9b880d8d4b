"""Calendar schemas: booking items, occupancy, availability grid and range selection."""

from datetime import date, time
from typing import List, Optional

from pydantic import Field, model_validator

from ..domain.range_selection import SelectionEvent, SelectionMode, SelectionPhase
from .base import CamelModel, Money, StrictCamelRequest


class BookingItemResponse(CamelModel):
    id: int
    booking_id: Optional[int] = None
    booking_slot_id: Optional[int] = None
    day_slot_id: Optional[int] = None
    date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    total_minutes: Optional[int] = None
    hourly_rate: Optional[Money] = None
    offer_id: Optional[int] = None
    instructor_id: Optional[str] = None
    customer_id: Optional[str] = None


class SlotStateResponse(CamelModel):
    morning: bool = False
    lunch: bool = False
    afternoon: bool = False
    evening: bool = False


class OccupancyDayResponse(CamelModel):
    date: date
    occupied_slot_ids: List[int] = Field(default_factory=list)
    slot_state: SlotStateResponse


class OccupancyResponse(CamelModel):
    instructor_id: str
    start_date: date
    end_date: date
    days: List[OccupancyDayResponse] = Field(default_factory=list)


class AvailableSlotResponse(CamelModel):
    key: str
    date: date
    day_slot_id: int
    day_slot_name: str
    start_time: time
    end_time: time
    hours: Money
    price: Money
    is_available: bool


class SlotAvailabilitySummaryResponse(CamelModel):
    day_slot_id: int
    name: str
    total_days: int
    available_days: int
    is_available: bool


class AvailabilitySummaryResponse(CamelModel):
    total_days: int
    total_available_hours: Money
    slots: List[SlotAvailabilitySummaryResponse] = Field(default_factory=list)


class AvailabilityResponse(CamelModel):
    instructor_id: str
    start_date: date
    end_date: date
    hourly_rate: Optional[Money] = None
    slots: List[AvailableSlotResponse] = Field(default_factory=list)
    summary: AvailabilitySummaryResponse


class SelectionState(CamelModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_ordering(self) -> "SelectionState":
        if self.start_date is None and self.end_date is not None:
            raise ValueError("endDate requires startDate")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class SelectionRequest(StrictCamelRequest):
    selection: SelectionState = Field(default_factory=SelectionState)
    clicked_date: date
    mode: SelectionMode = SelectionMode.RANGE


class SelectionResponse(CamelModel):
    selection: SelectionState
    phase: SelectionPhase
    event: SelectionEvent
    clicked_date: Optional[date] = None
    day_count: int = 0
