# backend/raven/repositories/instructor_repository.py
"""
Instructor Repository for Raven

Profile, gallery and language lookups for instructors. Bulk helpers return
dictionaries keyed by instructor id so a page of search results can be
enriched with one query per table.
"""

from collections import defaultdict
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from ..core.exceptions import RepositoryException
from ..models.instructor import Instructor, InstructorImage, UserLanguage
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class InstructorRepository(BaseRepository[Instructor]):
    """Repository for instructor profile data."""

    def __init__(self, db: Session):
        super().__init__(db, Instructor)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(selectinload(Instructor.images))

    def list_ordered(self, ids: Optional[Iterable[str]] = None) -> List[Instructor]:
        """All instructors (or the given ids) ordered by first name."""
        query = self._apply_eager_loading(self._build_query())
        if ids is not None:
            id_list = list(ids)
            if not id_list:
                return []
            query = query.filter(Instructor.id.in_(id_list))
        return self._execute_query(query.order_by(Instructor.first_name, Instructor.id))

    def get_images(self, instructor_id: str) -> List[InstructorImage]:
        query = (
            self.db.query(InstructorImage)
            .filter(InstructorImage.instructor_id == instructor_id)
            .order_by(InstructorImage.created_at, InstructorImage.id)
        )
        return self._execute_query(query)

    def get_image_urls_by_instructor(self, instructor_ids: Iterable[str]) -> Dict[str, List[str]]:
        id_list = list(instructor_ids)
        if not id_list:
            return {}
        try:
            rows = (
                self.db.query(InstructorImage.instructor_id, InstructorImage.image_url)
                .filter(InstructorImage.instructor_id.in_(id_list))
                .order_by(InstructorImage.created_at, InstructorImage.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading instructor images: {str(e)}")
            raise RepositoryException(f"Failed to load instructor images: {str(e)}")

        images: Dict[str, List[str]] = defaultdict(list)
        for instructor_id, image_url in rows:
            images[instructor_id].append(image_url)
        return dict(images)

    def get_languages_by_user(self, user_ids: Iterable[str]) -> Dict[str, List[str]]:
        id_list = list(user_ids)
        if not id_list:
            return {}
        try:
            rows = (
                self.db.query(UserLanguage.user_id, UserLanguage.name)
                .filter(UserLanguage.user_id.in_(id_list))
                .order_by(UserLanguage.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading user languages: {str(e)}")
            raise RepositoryException(f"Failed to load user languages: {str(e)}")

        languages: Dict[str, List[str]] = defaultdict(list)
        for user_id, name in rows:
            languages[user_id].append(name)
        return dict(languages)
