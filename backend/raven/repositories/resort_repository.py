# backend/raven/repositories/resort_repository.py
"""Resort Repository for Raven."""

from typing import List

from sqlalchemy.orm import Session

from ..models.resort import Resort
from .base_repository import BaseRepository


class ResortRepository(BaseRepository[Resort]):
    def __init__(self, db: Session):
        super().__init__(db, Resort)

    def list_ordered(self) -> List[Resort]:
        return self._execute_query(self._build_query().order_by(Resort.name, Resort.id))
