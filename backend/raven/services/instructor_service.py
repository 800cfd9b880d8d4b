# backend/raven/services/instructor_service.py
"""
Instructor Service for Raven

Profile assembly for the instructor page: languages, gallery, resorts,
disciplines with their lowest rate, pricing and booking statistics. Also
provides the cart details (rate, location, avatar) used when adding slots.
"""

from dataclasses import dataclass
from decimal import Decimal
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_DISCIPLINE_LABEL, UNKNOWN_LOCATION_LABEL
from ..core.exceptions import NotFoundException
from ..models.instructor import Instructor, InstructorImage
from ..models.offer import InstructorOffer
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


def min_positive_weekday_rate(offers: List[InstructorOffer]) -> Optional[Decimal]:
    rates = [
        Decimal(str(offer.hourly_rate_weekday))
        for offer in offers
        if offer.hourly_rate_weekday is not None and offer.hourly_rate_weekday > 0
    ]
    return min(rates) if rates else None


@dataclass(frozen=True)
class CartDetails:
    """What the cart needs to know about an instructor."""

    instructor_id: str
    instructor_name: str
    instructor_avatar: str
    location: str
    discipline: str
    hourly_rate: Optional[Decimal]


class InstructorService(BaseService):
    """Read-side service for instructor profiles."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.instructor_repository = RepositoryFactory.create_instructor_repository(db)
        self.offer_repository = RepositoryFactory.create_offer_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)

    def get_instructor_or_404(self, instructor_id: str) -> Instructor:
        instructor = self.instructor_repository.get_by_id(instructor_id)
        if instructor is None:
            raise NotFoundException(
                f"Instructor {instructor_id} not found",
                code="INSTRUCTOR_NOT_FOUND",
                details={"instructor_id": instructor_id},
            )
        return instructor

    def _summary(
        self, instructor: Instructor, languages: List[str], images: List[str]
    ) -> Dict[str, Any]:
        return {
            "id": instructor.id,
            "first_name": instructor.first_name,
            "last_name": instructor.last_name,
            "avatar_url": instructor.avatar_url,
            "biography": instructor.biography,
            "profile_status": instructor.profile_status,
            "created_at": instructor.created_at,
            "languages": languages,
            "images": images,
        }

    @BaseService.measure_operation("list_instructors")
    def list_instructors(self) -> List[Dict[str, Any]]:
        """All instructors ordered by first name, with languages and image urls."""
        instructors = self.instructor_repository.list_ordered()
        ids = [instructor.id for instructor in instructors]
        languages = self.instructor_repository.get_languages_by_user(ids)
        images = self.instructor_repository.get_image_urls_by_instructor(ids)
        return [
            self._summary(instructor, languages.get(instructor.id, []), images.get(instructor.id, []))
            for instructor in instructors
        ]

    def get_images(self, instructor_id: str) -> List[InstructorImage]:
        return self.instructor_repository.get_images(instructor_id)

    def get_pricing(self, instructor_id: str) -> Dict[str, Any]:
        offers = self.offer_repository.get_active_offers_for_instructor(instructor_id)
        return {
            "min_hourly_rate": min_positive_weekday_rate(offers),
            "offer_count": len(offers),
        }

    def get_resorts(self, instructor_id: str) -> List[Any]:
        return self.offer_repository.get_resorts_for_instructor(instructor_id)

    def get_disciplines(self, instructor_id: str) -> List[Dict[str, Any]]:
        """Disciplines taught through active offers with the lowest weekday rate each."""
        disciplines: Dict[int, Dict[str, Any]] = {}
        for offer in self.offer_repository.get_active_offers_with_disciplines(instructor_id):
            rate = Decimal(str(offer.hourly_rate_weekday or 0))
            for link in offer.discipline_links:
                discipline = link.discipline
                if discipline is None:
                    continue
                existing = disciplines.get(discipline.id)
                if existing is None or rate < existing["min_price"]:
                    disciplines[discipline.id] = {
                        "id": discipline.id,
                        "name": discipline.name,
                        "color_id": discipline.color_id,
                        "min_price": rate,
                    }
        return list(disciplines.values())

    def get_booking_stats(self, instructor_id: str) -> Dict[str, Any]:
        stats = self.booking_repository.get_booking_stats(instructor_id)
        return {
            "booking_count": stats["booking_count"],
            "earliest_booking": stats["earliest"],
            "latest_booking": stats["latest"],
        }

    @BaseService.measure_operation("get_instructor_profile")
    def get_instructor_profile(self, instructor_id: str) -> Dict[str, Any]:
        instructor = self.get_instructor_or_404(instructor_id)
        languages = self.instructor_repository.get_languages_by_user([instructor.id])
        images = [image.image_url for image in self.get_images(instructor.id)]

        profile = self._summary(instructor, languages.get(instructor.id, []), images)
        profile.update(
            {
                "full_name": instructor.full_name,
                "resorts": [
                    {"id": resort.id, "name": resort.name, "country": resort.country}
                    for resort in self.get_resorts(instructor.id)
                ],
                "disciplines": self.get_disciplines(instructor.id),
                "pricing": self.get_pricing(instructor.id),
            }
        )
        return profile

    def get_cart_details(self, instructor_id: str) -> CartDetails:
        instructor = self.get_instructor_or_404(instructor_id)
        resorts = self.get_resorts(instructor_id)
        return CartDetails(
            instructor_id=instructor.id,
            instructor_name=instructor.full_name,
            instructor_avatar=instructor.avatar_url or "",
            location=resorts[0].name if resorts else UNKNOWN_LOCATION_LABEL,
            discipline=DEFAULT_DISCIPLINE_LABEL,
            hourly_rate=self.get_pricing(instructor_id)["min_hourly_rate"],
        )
