"""Cart request and response schemas."""

from datetime import date, time
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, Money, StrictCamelRequest


class SelectedSlotResponse(CamelModel):
    date: date
    day_slot_id: int
    day_slot_name: str
    start_time: time
    end_time: time
    hours: Money
    price: Money


class CartItemResponse(CamelModel):
    id: str
    instructor_id: str
    instructor_name: str
    instructor_avatar: str
    location: str
    discipline: str
    selected_slots: List[SelectedSlotResponse]
    total_hours: Money
    total_price: Money
    price_per_hour: Money
    added_at: int


class CartResponse(CamelModel):
    key: str
    items: List[CartItemResponse] = Field(default_factory=list)
    total: Money
    total_hours: Money
    item_count: int


class SlotPick(StrictCamelRequest):
    date: date
    day_slot_id: int


class AddCartItemRequest(StrictCamelRequest):
    instructor_id: str = Field(..., min_length=1)
    slots: List[SlotPick] = Field(default_factory=list)


class AddCartItemResponse(CamelModel):
    item: CartItemResponse
    cart: CartResponse


class RemoveCartItemResponse(CamelModel):
    removed: bool
    item_id: Optional[str] = None
    cart: CartResponse
