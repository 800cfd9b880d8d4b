"""Tests for the seed command."""

from raven.commands.seed import SeedCommand
from raven.models import Booking, DaySlot, Discipline, Instructor, Resort


def test_seed_is_idempotent(db):
    SeedCommand(db).run()
    SeedCommand(db).run()

    assert db.query(DaySlot).count() == 5
    assert db.query(Discipline).count() == 4
    assert db.query(Resort).count() == 5
    assert db.query(Instructor).count() == 0


def test_demo_data(db):
    SeedCommand(db).run(demo=True)
    SeedCommand(db).run(demo=True)

    assert db.query(Instructor).count() == 3
    assert db.query(Booking).count() == 3
    anna = db.query(Instructor).filter(Instructor.first_name == "Anna").one()
    assert len(anna.offers) == 1
    assert len(anna.offers[0].resort_links) == 2
