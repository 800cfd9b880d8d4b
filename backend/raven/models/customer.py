"""Customer model for the Raven platform."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from ..core.ulid_helper import generate_ulid
from ..database import Base


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class Customer(Base):
    """Person booking lessons. Only counted by analytics here."""

    __tablename__ = "customers"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    def __repr__(self) -> str:
        return f"<Customer {self.id}>"
