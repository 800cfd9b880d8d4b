"""Instructor search schemas."""

from datetime import date
from typing import List, Optional

from pydantic import Field

from .base import CamelModel
from .instructor import InstructorSearchResult


class SearchParams(CamelModel):
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    discipline_ids: Optional[List[int]] = None
    limit: int
    offset: int = 0


class SearchResponse(CamelModel):
    data: List[InstructorSearchResult] = Field(default_factory=list)
    count: int = 0
    params: SearchParams
