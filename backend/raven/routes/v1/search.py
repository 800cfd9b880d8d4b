# backend/raven/routes/v1/search.py
"""
Search routes - API v1

Endpoints:
    GET /instructors - Search instructors by resort, dates and disciplines
"""

import asyncio
from datetime import date
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_search_service
from ...core.exceptions import DomainException
from ...schemas.search import SearchResponse
from ...services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


def parse_discipline_ids(raw: Optional[str]) -> Optional[List[int]]:
    """Parse a comma-separated id list, ignoring blanks."""
    if not raw:
        return None
    try:
        ids = [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="disciplineIds must be a comma-separated list of integers",
        )
    return ids or None


@router.get("/instructors", response_model=SearchResponse)
async def search_instructors(
    location: Optional[str] = Query(None, max_length=200, description="Resort name (partial match)"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    discipline_ids: Optional[str] = Query(
        None, alias="disciplineIds", description="Comma-separated discipline ids"
    ),
    limit: Optional[int] = Query(None, ge=1, description="Results per page"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    search_service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """Instructors with active offers matching every given filter."""
    ids = parse_discipline_ids(discipline_ids)
    try:
        result = await asyncio.to_thread(
            search_service.search_instructors,
            location=location or None,
            start_date=start_date,
            end_date=end_date,
            discipline_ids=ids,
            limit=limit,
            offset=offset,
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc

    return SearchResponse(**result)
