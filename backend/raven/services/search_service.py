# backend/raven/services/search_service.py
"""
Search Service for Raven

Instructor search narrows active offers by location and discipline, drops
instructors already booked inside the requested window, then pages the
survivors by first name. Every filter that matches nothing short-circuits
to an empty result.
"""

from datetime import date
from decimal import Decimal
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.config import settings
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class SearchService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.instructor_repository = RepositoryFactory.create_instructor_repository(db)
        self.offer_repository = RepositoryFactory.create_offer_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)

    def clamp_limit(self, limit: Optional[int]) -> int:
        if limit is None or limit <= 0:
            return settings.default_search_limit
        return min(limit, settings.max_search_limit)

    @BaseService.measure_operation("search_instructors")
    def search_instructors(
        self,
        location: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        discipline_ids: Optional[Sequence[int]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """
        Search instructors with active offers.

        Args:
            location: Case-insensitive substring of a resort name
            start_date: Window start; only applied together with end_date
            end_date: Window end (inclusive)
            discipline_ids: Keep offers teaching any of these disciplines
            limit: Page size, clamped to the configured maximum
            offset: Number of matches to skip

        Returns:
            ``{"data": [...], "count": n, "params": {...}}``
        """
        limit = self.clamp_limit(limit)
        offset = max(offset, 0)
        params = {
            "location": location,
            "start_date": start_date,
            "end_date": end_date,
            "discipline_ids": list(discipline_ids) if discipline_ids else None,
            "limit": limit,
            "offset": offset,
        }
        self.log_operation("search_instructors", **{k: v for k, v in params.items() if v})

        results = self._search(location, start_date, end_date, discipline_ids)
        page = results[offset : offset + limit]
        self.logger.info(f"Returning {len(page)} instructors (offset: {offset}, limit: {limit})")
        return {"data": page, "count": len(page), "params": params}

    def _search(
        self,
        location: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
        discipline_ids: Optional[Sequence[int]],
    ) -> List[Dict[str, Any]]:
        offers = self.offer_repository.get_active_offers()
        if not offers:
            self.logger.info("No active offers found")
            return []

        valid_offer_ids = {offer.id for offer in offers}

        if location:
            valid_offer_ids = self.offer_repository.filter_offer_ids_by_location(
                valid_offer_ids, location
            )
            if not valid_offer_ids:
                self.logger.info(f"No offers found for location: {location}")
                return []

        if discipline_ids:
            valid_offer_ids = self.offer_repository.filter_offer_ids_by_disciplines(
                valid_offer_ids, discipline_ids
            )
            if not valid_offer_ids:
                self.logger.info(f"No offers found for disciplines: {list(discipline_ids)}")
                return []

        valid_offers = [offer for offer in offers if offer.id in valid_offer_ids]
        instructor_ids = {offer.instructor_id for offer in valid_offers}

        if start_date and end_date:
            booked = self.booking_repository.get_booked_instructor_ids(
                instructor_ids, start_date, end_date
            )
            instructor_ids -= booked
            if booked:
                self.logger.info(f"Filtered out {len(booked)} booked instructors")

        if not instructor_ids:
            return []

        min_prices: Dict[str, Decimal] = {}
        for offer in valid_offers:
            rate = offer.hourly_rate_weekday
            if rate is None or rate <= 0 or offer.instructor_id not in instructor_ids:
                continue
            rate = Decimal(str(rate))
            current = min_prices.get(offer.instructor_id)
            if current is None or rate < current:
                min_prices[offer.instructor_id] = rate

        instructors = self.instructor_repository.list_ordered(instructor_ids)
        languages = self.instructor_repository.get_languages_by_user(instructor_ids)
        images = self.instructor_repository.get_image_urls_by_instructor(instructor_ids)

        return [
            {
                "id": instructor.id,
                "first_name": instructor.first_name,
                "last_name": instructor.last_name,
                "avatar_url": instructor.avatar_url,
                "biography": instructor.biography,
                "profile_status": instructor.profile_status,
                "created_at": instructor.created_at,
                "languages": languages.get(instructor.id, []),
                "images": images.get(instructor.id, []),
                "min_price": min_prices.get(instructor.id),
            }
            for instructor in instructors
        ]
