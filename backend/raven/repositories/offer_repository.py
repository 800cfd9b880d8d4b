# backend/raven/repositories/offer_repository.py
"""
Offer Repository for Raven

Instructor offers carry the hourly rates and link an instructor to the
resorts and disciplines they teach. Search narrows offers step by step
(location, then disciplines) and maps the survivors back to instructors.
"""

import logging
from typing import Iterable, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from ..core.constants import OFFER_STATUS_ACTIVE
from ..models.offer import InstructorOffer, InstructorOfferDiscipline, InstructorOfferResort
from ..models.resort import Discipline, Resort
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class OfferRepository(BaseRepository[InstructorOffer]):
    """Repository for instructor offers and their resort/discipline links."""

    def __init__(self, db: Session):
        super().__init__(db, InstructorOffer)

    def get_active_offers(
        self, instructor_ids: Optional[Iterable[str]] = None
    ) -> List[InstructorOffer]:
        query = self._build_query().filter(InstructorOffer.status == OFFER_STATUS_ACTIVE)
        if instructor_ids is not None:
            id_list = list(instructor_ids)
            if not id_list:
                return []
            query = query.filter(InstructorOffer.instructor_id.in_(id_list))
        return self._execute_query(query.order_by(InstructorOffer.id))

    def get_active_offers_for_instructor(self, instructor_id: str) -> List[InstructorOffer]:
        return self.get_active_offers([instructor_id])

    def filter_offer_ids_by_location(self, offer_ids: Iterable[int], location: str) -> Set[int]:
        """Offers linked to a resort whose name contains ``location`` (case-insensitive)."""
        id_list = list(offer_ids)
        if not id_list:
            return set()
        pattern = f"%{location.lower()}%"
        query = (
            self.db.query(InstructorOfferResort.offer_id)
            .join(Resort, InstructorOfferResort.resort_id == Resort.id)
            .filter(
                InstructorOfferResort.offer_id.in_(id_list),
                func.lower(Resort.name).like(pattern),
            )
        )
        return {row[0] for row in self._execute_query(query)}

    def filter_offer_ids_by_disciplines(
        self, offer_ids: Iterable[int], discipline_ids: Iterable[int]
    ) -> Set[int]:
        id_list = list(offer_ids)
        discipline_list = list(discipline_ids)
        if not id_list or not discipline_list:
            return set()
        query = self.db.query(InstructorOfferDiscipline.offer_id).filter(
            InstructorOfferDiscipline.offer_id.in_(id_list),
            InstructorOfferDiscipline.discipline_id.in_(discipline_list),
        )
        return {row[0] for row in self._execute_query(query)}

    def get_resorts_for_instructor(self, instructor_id: str) -> List[Resort]:
        """Unique resorts across every offer of the instructor, any status."""
        query = (
            self.db.query(Resort)
            .join(InstructorOfferResort, InstructorOfferResort.resort_id == Resort.id)
            .join(InstructorOffer, InstructorOfferResort.offer_id == InstructorOffer.id)
            .filter(InstructorOffer.instructor_id == instructor_id)
            .distinct()
            .order_by(Resort.name, Resort.id)
        )
        return self._execute_query(query)

    def get_active_offers_with_disciplines(self, instructor_id: str) -> List[InstructorOffer]:
        query = (
            self._build_query()
            .options(
                selectinload(InstructorOffer.discipline_links).selectinload(
                    InstructorOfferDiscipline.discipline
                )
            )
            .filter(
                InstructorOffer.instructor_id == instructor_id,
                InstructorOffer.status == OFFER_STATUS_ACTIVE,
            )
            .order_by(InstructorOffer.id)
        )
        return self._execute_query(query)

    def list_disciplines(self) -> List[Discipline]:
        return self._execute_query(self.db.query(Discipline).order_by(Discipline.name))
