# backend/raven/services/catalog_service.py
"""
Catalog Service for Raven

Reference data: the day slot catalog, resorts and disciplines. The slot
catalog is read from ``day_slots`` when the table is populated and falls
back to the built-in standard catalog otherwise.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from ..domain.day_slots import STANDARD_CATALOG, DaySlotCatalog
from ..models.resort import Discipline, Resort
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class CatalogService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.day_slot_repository = RepositoryFactory.create_day_slot_repository(db)
        self.resort_repository = RepositoryFactory.create_resort_repository(db)
        self.offer_repository = RepositoryFactory.create_offer_repository(db)

    @BaseService.measure_operation("get_day_slot_catalog")
    def get_day_slot_catalog(self) -> DaySlotCatalog:
        catalog = self.day_slot_repository.load_catalog()
        if catalog is None:
            self.logger.debug("day_slots table is empty, using the standard catalog")
            return STANDARD_CATALOG
        return catalog

    def list_day_slots(self) -> List[Dict[str, Any]]:
        catalog = self.get_day_slot_catalog()
        return [
            {
                "id": slot_type.id,
                "name": slot_type.name,
                "default_start_time": slot_type.default_start,
                "default_end_time": slot_type.default_end,
                "duration_hours": slot_type.hours,
                "bookable": not slot_type.is_full_day,
            }
            for slot_type in catalog
        ]

    @BaseService.measure_operation("list_resorts")
    def list_resorts(self) -> List[Resort]:
        resorts = self.resort_repository.list_ordered()
        self.logger.info(f"Found {len(resorts)} resorts")
        return resorts

    def list_disciplines(self) -> List[Discipline]:
        return self.offer_repository.list_disciplines()
