"""Persisted cart state, one row per storage key."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from ..database import Base


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class CartState(Base):
    __tablename__ = "cart_states"

    key = Column(String(128), primary_key=True)
    # JSON document: {"items": [...]}
    payload = Column(Text, nullable=False, default='{"items": []}')
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc, onupdate=_now_utc)
