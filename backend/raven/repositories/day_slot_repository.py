# backend/raven/repositories/day_slot_repository.py
"""
Day Slot Repository for Raven

Reads the slot catalog stored in ``day_slots``.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..domain.day_slots import DaySlotCatalog
from ..models.day_slot import DaySlot
from .base_repository import BaseRepository


class DaySlotRepository(BaseRepository[DaySlot]):
    def __init__(self, db: Session):
        super().__init__(db, DaySlot)

    def list_ordered(self) -> List[DaySlot]:
        return self._execute_query(self._build_query().order_by(DaySlot.id))

    def load_catalog(self) -> Optional[DaySlotCatalog]:
        """Catalog built from stored rows, or None when the table is empty."""
        rows = self.list_ordered()
        if not rows:
            return None
        return DaySlotCatalog.from_rows(rows)
