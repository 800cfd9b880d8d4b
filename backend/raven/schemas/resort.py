"""Resort, discipline and day slot catalog schemas."""

from datetime import time
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, Money


class ResortResponse(CamelModel):
    id: int
    name: str
    country: Optional[str] = None


class ResortListResponse(CamelModel):
    success: bool = True
    data: List[ResortResponse] = Field(default_factory=list)
    count: int = 0


class DisciplineResponse(CamelModel):
    id: int
    name: str
    color_id: Optional[int] = None


class DaySlotResponse(CamelModel):
    id: int
    name: str
    default_start_time: time
    default_end_time: time
    duration_hours: Money
    bookable: bool = True
