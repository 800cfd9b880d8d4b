# backend/raven/routes/v1/instructors.py
"""
Instructor routes - API v1

Versioned instructor endpoints under /api/v1/instructors.
All business logic delegated to InstructorService.

Endpoints:
    GET / - All instructors with languages and images
    GET /{instructor_id} - Full profile
    GET /{instructor_id}/images - Gallery images
    GET /{instructor_id}/pricing - Lowest active weekday rate and offer count
    GET /{instructor_id}/resorts - Resorts the instructor teaches at
    GET /{instructor_id}/disciplines - Disciplines with their lowest rate
    GET /{instructor_id}/stats - Booking statistics
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ...api.dependencies.services import get_instructor_service
from ...core.exceptions import DomainException
from ...schemas.base import ListResponse
from ...schemas.instructor import (
    BookingStatsResponse,
    InstructorDisciplineResponse,
    InstructorImageResponse,
    InstructorProfileResponse,
    InstructorSummary,
    PricingResponse,
)
from ...schemas.resort import ResortResponse
from ...services.instructor_service import InstructorService

logger = logging.getLogger(__name__)

# V1 router - mounted at /api/v1/instructors
router = APIRouter(tags=["instructors-v1"])


@router.get("", response_model=ListResponse[InstructorSummary])
async def list_instructors(
    instructor_service: InstructorService = Depends(get_instructor_service),
) -> ListResponse[InstructorSummary]:
    instructors = await asyncio.to_thread(instructor_service.list_instructors)
    data = [InstructorSummary(**instructor) for instructor in instructors]
    return ListResponse[InstructorSummary](data=data, count=len(data))


@router.get(
    "/{instructor_id}",
    response_model=InstructorProfileResponse,
    responses={404: {"description": "Instructor not found"}},
)
async def get_instructor_profile(
    instructor_id: str,
    instructor_service: InstructorService = Depends(get_instructor_service),
) -> InstructorProfileResponse:
    """Profile page payload: instructor, languages, gallery, resorts, disciplines and pricing."""
    try:
        profile = await asyncio.to_thread(instructor_service.get_instructor_profile, instructor_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return InstructorProfileResponse(**profile)


@router.get("/{instructor_id}/images", response_model=ListResponse[InstructorImageResponse])
async def get_instructor_images(
    instructor_id: str,
    instructor_service: InstructorService = Depends(get_instructor_service),
) -> ListResponse[InstructorImageResponse]:
    images = await asyncio.to_thread(instructor_service.get_images, instructor_id)
    data = [InstructorImageResponse.model_validate(image) for image in images]
    return ListResponse[InstructorImageResponse](data=data, count=len(data))


@router.get("/{instructor_id}/pricing", response_model=PricingResponse)
async def get_instructor_pricing(
    instructor_id: str,
    instructor_service: InstructorService = Depends(get_instructor_service),
) -> PricingResponse:
    pricing = await asyncio.to_thread(instructor_service.get_pricing, instructor_id)
    return PricingResponse(**pricing)


@router.get("/{instructor_id}/resorts", response_model=ListResponse[ResortResponse])
async def get_instructor_resorts(
    instructor_id: str,
    instructor_service: InstructorService = Depends(get_instructor_service),
) -> ListResponse[ResortResponse]:
    resorts = await asyncio.to_thread(instructor_service.get_resorts, instructor_id)
    data = [ResortResponse.model_validate(resort) for resort in resorts]
    return ListResponse[ResortResponse](data=data, count=len(data))


@router.get(
    "/{instructor_id}/disciplines", response_model=ListResponse[InstructorDisciplineResponse]
)
async def get_instructor_disciplines(
    instructor_id: str,
    instructor_service: InstructorService = Depends(get_instructor_service),
) -> ListResponse[InstructorDisciplineResponse]:
    disciplines = await asyncio.to_thread(instructor_service.get_disciplines, instructor_id)
    data = [InstructorDisciplineResponse(**discipline) for discipline in disciplines]
    return ListResponse[InstructorDisciplineResponse](data=data, count=len(data))


@router.get("/{instructor_id}/stats", response_model=BookingStatsResponse)
async def get_instructor_stats(
    instructor_id: str,
    instructor_service: InstructorService = Depends(get_instructor_service),
) -> BookingStatsResponse:
    stats = await asyncio.to_thread(instructor_service.get_booking_stats, instructor_id)
    return BookingStatsResponse(**stats)
