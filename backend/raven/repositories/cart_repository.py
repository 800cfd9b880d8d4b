# backend/raven/repositories/cart_repository.py
"""
Cart persistence for Raven.

Carts are stored as one JSON document per storage key in ``cart_states``.
``SqlCartStore`` adapts the repository to the domain ``CartStore`` protocol.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..domain.cart import CartChange, CartItem, items_from_payload, items_to_payload
from ..models.cart import CartState
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class CartStateRepository(BaseRepository[CartState]):
    def __init__(self, db: Session):
        super().__init__(db, CartState)

    def get_payload(self, key: str, for_update: bool = False) -> Optional[Dict[str, Any]]:
        """
        Decoded payload for ``key``, or None when missing or unreadable.

        With ``for_update`` the row is re-read with ``SELECT ... FOR UPDATE``
        so it stays locked until the caller's transaction ends.
        """
        query = self.db.query(CartState).filter(CartState.key == key)
        if for_update:
            query = query.with_for_update().populate_existing()
        try:
            state = query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading cart {key}: {str(e)}")
            raise RepositoryException(f"Failed to load cart: {str(e)}")
        if state is None:
            return None
        try:
            return json.loads(state.payload)
        except json.JSONDecodeError:
            self.logger.warning("Discarding unreadable cart payload for key %s", key)
            return None

    def save_payload(self, key: str, payload: Dict[str, Any]) -> None:
        try:
            state = self.db.get(CartState, key)
            if state is None:
                state = CartState(key=key)
                self.db.add(state)
            state.payload = json.dumps(payload)
            self.db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error saving cart {key}: {str(e)}")
            raise RepositoryException(f"Failed to save cart: {str(e)}")


class SqlCartStore:
    """CartStore backed by the ``cart_states`` table. Commits belong to the caller."""

    def __init__(self, repository: CartStateRepository):
        self.repository = repository

    def load(self, key: str) -> List[CartItem]:
        return self._decode(self.repository.get_payload(key))

    def update(self, key: str, change: CartChange) -> List[CartItem]:
        current = self._decode(self.repository.get_payload(key, for_update=True))
        updated = change(current)
        if updated is not current:
            self.repository.save_payload(key, {"items": items_to_payload(updated)})
        return list(updated)

    @staticmethod
    def _decode(payload: Optional[Dict[str, Any]]) -> List[CartItem]:
        if not payload:
            return []
        return items_from_payload(payload.get("items", []))
