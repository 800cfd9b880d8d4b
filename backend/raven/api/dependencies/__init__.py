"""FastAPI dependency providers."""

from .database import get_db
from .services import (
    get_analytics_service,
    get_calendar_service,
    get_cart_service,
    get_catalog_service,
    get_instructor_service,
    get_search_service,
)

__all__ = [
    "get_analytics_service",
    "get_calendar_service",
    "get_cart_service",
    "get_catalog_service",
    "get_db",
    "get_instructor_service",
    "get_search_service",
]
