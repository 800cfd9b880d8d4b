#!/usr/bin/env python
# backend/raven/commands/seed.py
"""
Seed reference data for Raven.

Creates the tables, then inserts the day slot catalog, disciplines and
resorts. With ``--demo`` it also adds a few instructors with offers, slot
configuration and bookings so the calendar has something to show.

Usage:
    python -m raven.commands.seed          # Reference data only
    python -m raven.commands.seed --demo   # Reference data plus demo instructors
"""

import argparse
from datetime import date, timedelta
from decimal import Decimal
import logging
import sys
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import (
    AFTERNOON_SLOT_ID,
    LUNCH_SLOT_ID,
    MORNING_SLOT_ID,
    OFFER_STATUS_ACTIVE,
    PROFILE_STATUS_LIVE,
)
from ..database import SessionLocal, init_db
from ..domain.day_slots import STANDARD_DAY_SLOTS
from ..models import (
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

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DISCIPLINES = [("Ski", 1), ("Snowboard", 2), ("Telemark", 3), ("Freeride", 4)]

RESORTS = [
    ("Chamonix", "France"),
    ("Courchevel", "France"),
    ("St. Anton", "Austria"),
    ("Verbier", "Switzerland"),
    ("Zermatt", "Switzerland"),
]

DEMO_INSTRUCTORS = [
    {
        "first_name": "Anna",
        "last_name": "Berger",
        "email": "anna.berger@example.com",
        "biography": "Former racer, teaching all levels on piste.",
        "rate": Decimal("100.00"),
        "resorts": ["Zermatt", "Verbier"],
        "disciplines": ["Ski"],
        "languages": ["German", "English"],
    },
    {
        "first_name": "Louis",
        "last_name": "Martin",
        "email": "louis.martin@example.com",
        "biography": "Off-piste and freeride specialist.",
        "rate": Decimal("120.00"),
        "resorts": ["Chamonix"],
        "disciplines": ["Ski", "Freeride"],
        "languages": ["French", "English"],
    },
    {
        "first_name": "Mia",
        "last_name": "Huber",
        "email": "mia.huber@example.com",
        "biography": None,
        "rate": Decimal("85.00"),
        "resorts": ["St. Anton"],
        "disciplines": ["Snowboard"],
        "languages": ["German"],
    },
]


class SeedCommand:
    """Idempotent seeding: rows that already exist are left alone."""

    def __init__(self, db: Session):
        self.db = db

    def seed_day_slots(self) -> int:
        created = 0
        for slot_type in STANDARD_DAY_SLOTS:
            if self.db.get(DaySlot, slot_type.id) is not None:
                continue
            self.db.add(
                DaySlot(
                    id=slot_type.id,
                    name=slot_type.name,
                    default_start_time=slot_type.default_start,
                    default_end_time=slot_type.default_end,
                    duration_hours=slot_type.hours,
                )
            )
            created += 1
        return created

    def seed_disciplines(self) -> Dict[str, Discipline]:
        disciplines = {d.name: d for d in self.db.query(Discipline).all()}
        for name, color_id in DISCIPLINES:
            if name not in disciplines:
                discipline = Discipline(name=name, color_id=color_id)
                self.db.add(discipline)
                disciplines[name] = discipline
        self.db.flush()
        return disciplines

    def seed_resorts(self) -> Dict[str, Resort]:
        resorts = {r.name: r for r in self.db.query(Resort).all()}
        for name, country in RESORTS:
            if name not in resorts:
                resort = Resort(name=name, country=country)
                self.db.add(resort)
                resorts[name] = resort
        self.db.flush()
        return resorts

    def seed_demo(
        self,
        disciplines: Dict[str, Discipline],
        resorts: Dict[str, Resort],
        start: Optional[date] = None,
    ) -> List[Instructor]:
        """Demo instructors, each with one offer, slot configuration and one booking."""
        start = start or date.today() + timedelta(days=7)
        customer = self.db.query(Customer).filter(Customer.email == "guest@example.com").first()
        if customer is None:
            customer = Customer(first_name="Guest", last_name="Skier", email="guest@example.com")
            self.db.add(customer)
            self.db.flush()

        created: List[Instructor] = []
        for index, demo in enumerate(DEMO_INSTRUCTORS):
            if self.db.query(Instructor).filter(Instructor.email == demo["email"]).first():
                continue

            instructor = Instructor(
                first_name=demo["first_name"],
                last_name=demo["last_name"],
                email=demo["email"],
                biography=demo["biography"],
                avatar_url=f"https://images.example.com/avatars/{demo['first_name'].lower()}.jpg",
                profile_status=PROFILE_STATUS_LIVE,
            )
            self.db.add(instructor)
            self.db.flush()

            offer = InstructorOffer(
                instructor_id=instructor.id,
                status=OFFER_STATUS_ACTIVE,
                hourly_rate_weekday=demo["rate"],
                hourly_rate_weekend=demo["rate"] + Decimal("20.00"),
            )
            offer.resort_links = [
                InstructorOfferResort(resort_id=resorts[name].id) for name in demo["resorts"]
            ]
            offer.discipline_links = [
                InstructorOfferDiscipline(discipline_id=disciplines[name].id)
                for name in demo["disciplines"]
            ]
            self.db.add(offer)

            for language in demo["languages"]:
                self.db.add(UserLanguage(user_id=instructor.id, name=language))
            self.db.add(
                InstructorImage(
                    instructor_id=instructor.id,
                    image_url=f"https://images.example.com/gallery/{instructor.id}-1.jpg",
                )
            )

            for weekday in range(1, 6):
                for slot_id in (MORNING_SLOT_ID, AFTERNOON_SLOT_ID):
                    self.db.add(
                        BookingSlot(
                            instructor_id=instructor.id, day_slot_id=slot_id, weekday=weekday
                        )
                    )
            self.db.flush()

            booked_day = start + timedelta(days=index)
            booking = Booking(
                instructor_id=instructor.id,
                customer_id=customer.id,
                start_date=booked_day,
                end_date=booked_day,
                status=BookingStatus.CONFIRMED.value,
            )
            booking.items = [
                BookingItem(
                    day_slot_id=slot_id,
                    date=booked_day,
                    hourly_rate=demo["rate"],
                    offer_id=offer.id,
                )
                for slot_id in (MORNING_SLOT_ID, LUNCH_SLOT_ID)
            ]
            self.db.add(booking)
            created.append(instructor)

        return created

    def run(self, demo: bool = False) -> None:
        slots = self.seed_day_slots()
        disciplines = self.seed_disciplines()
        resorts = self.seed_resorts()
        logger.info(
            f"Seeded {slots} day slots, {len(disciplines)} disciplines, {len(resorts)} resorts"
        )
        if demo:
            instructors = self.seed_demo(disciplines, resorts)
            logger.info(f"Seeded {len(instructors)} demo instructors")
        self.db.commit()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed Raven reference data")
    parser.add_argument(
        "--demo", action="store_true", help="Also create demo instructors, offers and bookings"
    )
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        SeedCommand(db).run(demo=args.demo)
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {str(e)}")
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
