# backend/raven/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import analytics, calendar, cart, catalog, health, instructors, prometheus, search

__all__ = [
    "analytics",
    "calendar",
    "cart",
    "catalog",
    "health",
    "instructors",
    "prometheus",
    "search",
]
