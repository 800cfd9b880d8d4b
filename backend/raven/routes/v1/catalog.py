# backend/raven/routes/v1/catalog.py
"""
Reference data routes - API v1

Endpoints:
    GET /resorts - All resorts ordered by name
    GET /day-slots - Day slot catalog
    GET /disciplines - All disciplines
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ...api.dependencies.services import get_catalog_service
from ...schemas.base import ListResponse
from ...schemas.resort import (
    DaySlotResponse,
    DisciplineResponse,
    ResortListResponse,
    ResortResponse,
)
from ...services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/resorts", response_model=ResortListResponse)
async def list_resorts(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> ResortListResponse:
    resorts = await asyncio.to_thread(catalog_service.list_resorts)
    data = [ResortResponse.model_validate(resort) for resort in resorts]
    return ResortListResponse(success=True, data=data, count=len(data))


@router.get("/day-slots", response_model=ListResponse[DaySlotResponse])
async def list_day_slots(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> ListResponse[DaySlotResponse]:
    slots = await asyncio.to_thread(catalog_service.list_day_slots)
    data = [DaySlotResponse(**slot) for slot in slots]
    return ListResponse[DaySlotResponse](data=data, count=len(data))


@router.get("/disciplines", response_model=ListResponse[DisciplineResponse])
async def list_disciplines(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> ListResponse[DisciplineResponse]:
    disciplines = await asyncio.to_thread(catalog_service.list_disciplines)
    data = [DisciplineResponse.model_validate(discipline) for discipline in disciplines]
    return ListResponse[DisciplineResponse](data=data, count=len(data))
