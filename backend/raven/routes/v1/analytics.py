# backend/raven/routes/v1/analytics.py
"""
Analytics routes for the admin dashboard (v1 API).

Every response uses the ``{success, data, error, details}`` envelope. Failures
are reported inside the envelope with a 500 status; an unknown instructor on
the slot breakdown is a 404.
"""

import asyncio
from datetime import date
import logging
from typing import Any, Callable, Optional, Type

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...api.dependencies.services import get_analytics_service
from ...core.exceptions import NotFoundException
from ...schemas.analytics import (
    InstructorsAnalyticsData,
    InstructorSlotDetails,
    OverviewData,
    ProfileCompletenessData,
    SignupsData,
)
from ...schemas.base import ApiResponse
from ...services.analytics_service import AnalyticsService

router = APIRouter(tags=["analytics"])
logger = logging.getLogger(__name__)


def _failure(
    error: str, exc: Exception, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "details": str(exc)},
    )


async def _envelope(
    model: Type[BaseModel], error: str, fn: Callable[..., Any], *args: Any
) -> Any:
    try:
        data = await asyncio.to_thread(fn, *args)
    except NotFoundException as exc:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": exc.message},
        )
    except Exception as exc:
        logger.error(f"{error}: {str(exc)}", exc_info=True)
        return _failure(error, exc)
    return ApiResponse[model](success=True, data=model(**data))  # type: ignore[valid-type]


@router.get("/overview", response_model=ApiResponse[OverviewData])
async def get_overview(
    service: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    """User totals and which slot types instructors have set up."""
    return await _envelope(OverviewData, "Failed to fetch overview", service.get_overview)


@router.get("/signups", response_model=ApiResponse[SignupsData])
async def get_signups(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    """
    Daily signups for approved instructors and customers.

    The end date includes its whole day.
    """
    return await _envelope(
        SignupsData, "Failed to fetch signups", service.get_signups, start_date, end_date
    )


@router.get("/instructors", response_model=ApiResponse[InstructorsAnalyticsData])
async def get_instructors(
    service: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    return await _envelope(
        InstructorsAnalyticsData, "Failed to fetch instructors", service.get_instructors
    )


@router.get("/instructors/{instructor_id}/slots", response_model=ApiResponse[InstructorSlotDetails])
async def get_instructor_slots(
    instructor_id: str,
    service: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    return await _envelope(
        InstructorSlotDetails,
        "Failed to fetch instructor slots",
        service.get_instructor_slots,
        instructor_id,
    )


@router.get("/profile-completeness", response_model=ApiResponse[ProfileCompletenessData])
async def get_profile_completeness(
    service: AnalyticsService = Depends(get_analytics_service),
) -> Any:
    """Share of live instructors with avatar, gallery, languages, biography and payouts set up."""
    return await _envelope(
        ProfileCompletenessData,
        "Failed to fetch profile completeness",
        service.get_profile_completeness,
    )
