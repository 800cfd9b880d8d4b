# backend/tests/conftest.py
"""
Shared fixtures for the Raven test suite.

Every test gets a fresh in-memory SQLite database. The ``client`` fixture
routes API requests through the same session so tests can arrange data with
the factories and assert on what the endpoints return.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
import os
from typing import Callable, Iterable, Optional

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from raven.api.dependencies.database import get_db
from raven.database import Base
from raven.domain.day_slots import STANDARD_DAY_SLOTS
from raven.main import app
from raven.models import (
    Booking,
    BookingItem,
    BookingSlot,
    BookingStatus,
    Customer,
    DaySlot,
    Discipline,
    Instructor,
    InstructorImage,
    InstructorOffer,
    InstructorOfferDiscipline,
    InstructorOfferResort,
    Resort,
    UserLanguage,
)

TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def engine():
    test_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine) -> Session:
    """Create a new database session for each test."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db: Session):
    """Create a test client with the test database."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def seed_day_slots(db: Session) -> None:
    for slot_type in STANDARD_DAY_SLOTS:
        db.add(
            DaySlot(
                id=slot_type.id,
                name=slot_type.name,
                default_start_time=slot_type.default_start,
                default_end_time=slot_type.default_end,
                duration_hours=slot_type.hours,
            )
        )
    db.commit()


@pytest.fixture
def make_resort(db: Session) -> Callable[..., Resort]:
    def _make(name: str = "Zermatt", country: Optional[str] = "Switzerland") -> Resort:
        resort = Resort(name=name, country=country)
        db.add(resort)
        db.commit()
        return resort

    return _make


@pytest.fixture
def make_discipline(db: Session) -> Callable[..., Discipline]:
    def _make(name: str = "Ski", color_id: Optional[int] = 1) -> Discipline:
        discipline = Discipline(name=name, color_id=color_id)
        db.add(discipline)
        db.commit()
        return discipline

    return _make


@pytest.fixture
def make_instructor(db: Session) -> Callable[..., Instructor]:
    def _make(
        first_name: str = "Anna",
        last_name: str = "Berger",
        profile_status: int = 2,
        avatar_url: Optional[str] = "https://images.example.com/anna.jpg",
        biography: Optional[str] = "Former racer.",
        stripe_connected_account_id: Optional[str] = None,
        languages: Iterable[str] = (),
        images: Iterable[str] = (),
        created_at: Optional[datetime] = None,
    ) -> Instructor:
        instructor = Instructor(
            first_name=first_name,
            last_name=last_name,
            profile_status=profile_status,
            avatar_url=avatar_url,
            biography=biography,
            stripe_connected_account_id=stripe_connected_account_id,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(instructor)
        db.flush()
        for language in languages:
            db.add(UserLanguage(user_id=instructor.id, name=language))
        for url in images:
            db.add(InstructorImage(instructor_id=instructor.id, image_url=url))
        db.commit()
        return instructor

    return _make


@pytest.fixture
def make_offer(db: Session) -> Callable[..., InstructorOffer]:
    def _make(
        instructor: Instructor,
        rate: Optional[str] = "100",
        resorts: Iterable[Resort] = (),
        disciplines: Iterable[Discipline] = (),
        status: str = "active",
    ) -> InstructorOffer:
        offer = InstructorOffer(
            instructor_id=instructor.id,
            status=status,
            hourly_rate_weekday=Decimal(rate) if rate is not None else None,
        )
        offer.resort_links = [InstructorOfferResort(resort_id=resort.id) for resort in resorts]
        offer.discipline_links = [
            InstructorOfferDiscipline(discipline_id=discipline.id) for discipline in disciplines
        ]
        db.add(offer)
        db.commit()
        return offer

    return _make


@pytest.fixture
def make_booking(db: Session) -> Callable[..., Booking]:
    def _make(
        instructor: Instructor,
        slots: Iterable[tuple],
        status: str = BookingStatus.CONFIRMED.value,
        customer: Optional[Customer] = None,
    ) -> Booking:
        """``slots`` is an iterable of (date, day_slot_id) pairs."""
        booking = Booking(
            instructor_id=instructor.id,
            customer_id=customer.id if customer else None,
            status=status,
        )
        booking.items = [
            BookingItem(date=slot_date, day_slot_id=slot_id) for slot_date, slot_id in slots
        ]
        db.add(booking)
        db.commit()
        return booking

    return _make


@pytest.fixture
def make_booking_slot(db: Session) -> Callable[..., BookingSlot]:
    def _make(
        instructor: Instructor,
        day_slot_id: Optional[int],
        slot_date: Optional[date] = None,
        weekday: Optional[int] = None,
        start: Optional[time] = None,
        end: Optional[time] = None,
    ) -> BookingSlot:
        slot = BookingSlot(
            instructor_id=instructor.id,
            day_slot_id=day_slot_id,
            date=slot_date,
            weekday=weekday,
            slot_start_time=start,
            slot_end_time=end,
        )
        db.add(slot)
        db.commit()
        return slot

    return _make


@pytest.fixture
def make_customer(db: Session) -> Callable[..., Customer]:
    def _make(email: str = "guest@example.com", created_at: Optional[datetime] = None) -> Customer:
        customer = Customer(
            first_name="Guest",
            last_name="Skier",
            email=email,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(customer)
        db.commit()
        return customer

    return _make
