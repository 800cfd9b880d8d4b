"""Resort and discipline reference tables."""

from sqlalchemy import Column, Integer, String

from ..database import Base


class Resort(Base):
    """Ski resort an instructor can teach at."""

    __tablename__ = "resorts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    country = Column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<Resort {self.id} {self.name}>"


class Discipline(Base):
    """Teaching discipline (ski, snowboard, telemark, ...)."""

    __tablename__ = "disciplines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    color_id = Column(Integer, nullable=True)
