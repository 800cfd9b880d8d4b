# backend/raven/services/__init__.py
"""
Service layer for Raven.

Services own business rules and transactions; routes stay thin and
repositories stay query-only.
"""

from .analytics_service import AnalyticsService
from .base import BaseService
from .calendar_service import CalendarService
from .cart_service import CartService
from .catalog_service import CatalogService
from .instructor_service import InstructorService
from .search_service import SearchService

__all__ = [
    "AnalyticsService",
    "BaseService",
    "CalendarService",
    "CartService",
    "CatalogService",
    "InstructorService",
    "SearchService",
]
