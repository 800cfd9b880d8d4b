# backend/raven/routes/v1/calendar.py
"""
Calendar routes - API v1

Endpoints:
    GET /bookings - Booking items, optionally for one instructor and window
    GET /instructors/{instructor_id}/occupancy - Per-day slot indicators
    GET /instructors/{instructor_id}/availability - Priced slot grid and summary
    POST /selection - Apply one day click to a date-range selection
"""

import asyncio
from datetime import date
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies.services import get_calendar_service
from ...core.exceptions import DomainException
from ...domain.range_selection import DateRangeSelection, SelectionMode
from ...schemas.base import ListResponse
from ...schemas.calendar import (
    AvailabilityResponse,
    BookingItemResponse,
    OccupancyResponse,
    SelectionRequest,
    SelectionResponse,
    SelectionState,
)
from ...services.calendar_service import CalendarService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calendar"])


@router.get("/bookings", response_model=ListResponse[BookingItemResponse])
async def get_booking_items(
    instructor_id: Optional[str] = Query(None, alias="instructorId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> ListResponse[BookingItemResponse]:
    items = await asyncio.to_thread(
        calendar_service.get_booking_items, instructor_id, start_date, end_date
    )
    data = [BookingItemResponse(**item) for item in items]
    return ListResponse[BookingItemResponse](data=data, count=len(data))


@router.get(
    "/instructors/{instructor_id}/occupancy",
    response_model=OccupancyResponse,
    responses={
        400: {"description": "Window longer than the configured maximum"},
        404: {"description": "Instructor not found"},
    },
)
async def get_instructor_occupancy(
    instructor_id: str,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> OccupancyResponse:
    try:
        occupancy = await asyncio.to_thread(
            calendar_service.get_occupancy, instructor_id, start_date, end_date
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return OccupancyResponse(**occupancy)


@router.get(
    "/instructors/{instructor_id}/availability",
    response_model=AvailabilityResponse,
    responses={
        400: {"description": "Window longer than the configured maximum"},
        404: {"description": "Instructor not found"},
    },
)
async def get_instructor_availability(
    instructor_id: str,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> AvailabilityResponse:
    """
    Slot grid for the window, one entry per date and bookable slot type.

    A window whose start is after its end returns an empty grid.
    """
    try:
        availability = await asyncio.to_thread(
            calendar_service.get_availability, instructor_id, start_date, end_date
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return AvailabilityResponse(**availability)


@router.post("/selection", response_model=SelectionResponse)
def apply_selection(
    payload: SelectionRequest,
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> SelectionResponse:
    """Stateless range-selection transition: current selection + click -> next selection."""
    current = DateRangeSelection(payload.selection.start_date, payload.selection.end_date)
    change = calendar_service.apply_selection(
        current, payload.clicked_date, SelectionMode(payload.mode)
    )
    return SelectionResponse(
        selection=SelectionState(
            start_date=change.selection.start_date, end_date=change.selection.end_date
        ),
        phase=change.selection.phase,
        event=change.event,
        clicked_date=change.clicked_date,
        day_count=change.selection.day_count(),
    )
