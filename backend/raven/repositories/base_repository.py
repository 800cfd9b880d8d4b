# backend/raven/repositories/base_repository.py
"""
Base Repository for Raven

Typed access to one model plus query helpers that turn SQLAlchemy errors
into ``RepositoryException``. Repositories never commit; the service layer
owns transactions.
"""

import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Shared lookups for a single SQLAlchemy model.

    Attributes:
        db: SQLAlchemy session
        model: SQLAlchemy model class
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(self, id: Any, load_relationships: bool = True) -> Optional[T]:
        """Fetch by primary key; subclasses choose what ``load_relationships`` loads."""
        query = self._build_query().filter(self.model.id == id)
        if load_relationships:
            query = self._apply_eager_loading(query)
        return self._first(query)

    def count(self) -> int:
        return self._count_query(self._build_query())

    def _apply_eager_loading(self, query: Query) -> Query:
        return query

    def _build_query(self) -> Query:
        return self.db.query(self.model)

    def _first(self, query: Query) -> Optional[Any]:
        try:
            return query.first()
        except SQLAlchemyError as e:
            raise self._failure(f"Failed to retrieve {self.model.__name__}", e)

    def _count_query(self, query: Query) -> int:
        try:
            return query.count()
        except SQLAlchemyError as e:
            raise self._failure("Failed to count records", e)

    def _execute_query(self, query: Query) -> List[Any]:
        try:
            return query.all()
        except SQLAlchemyError as e:
            raise self._failure("Query failed", e)

    def _failure(self, message: str, error: SQLAlchemyError) -> RepositoryException:
        self.logger.error(f"{message}: {str(error)}")
        return RepositoryException(f"{message}: {str(error)}")
