# backend/raven/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.analytics_service import AnalyticsService
from ...services.calendar_service import CalendarService
from ...services.cart_service import CartService
from ...services.catalog_service import CatalogService
from ...services.instructor_service import InstructorService
from ...services.search_service import SearchService
from .database import get_db


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_instructor_service(db: Session = Depends(get_db)) -> InstructorService:
    return InstructorService(db)


def get_search_service(db: Session = Depends(get_db)) -> SearchService:
    return SearchService(db)


def get_calendar_service(db: Session = Depends(get_db)) -> CalendarService:
    """
    Calendar service dependency.

    Usage in routes:
        calendar_service: CalendarService = Depends(get_calendar_service)
    """
    return CalendarService(db)


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)
