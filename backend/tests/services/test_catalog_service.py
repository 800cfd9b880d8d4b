"""Tests for CatalogService reference data."""

from datetime import time
from decimal import Decimal

from raven.models import DaySlot
from raven.services.catalog_service import CatalogService


def test_empty_table_falls_back_to_standard_catalog(db):
    slots = CatalogService(db).list_day_slots()
    assert [slot["name"] for slot in slots] == [
        "Full Day",
        "Morning",
        "Lunch",
        "Afternoon",
        "Evening",
    ]
    assert slots[0]["bookable"] is False
    assert all(slot["bookable"] for slot in slots[1:])


def test_table_rows_override_standard_windows(db):
    db.add(
        DaySlot(
            id=2,
            name="Early Morning",
            default_start_time=time(8, 0),
            default_end_time=time(11, 0),
            duration_hours=Decimal("3"),
        )
    )
    db.commit()

    catalog = CatalogService(db).get_day_slot_catalog()

    assert len(catalog) == 1
    assert catalog.get(2).name == "Early Morning"
    assert catalog.get(2).default_start == time(8, 0)


def test_resorts_and_disciplines_are_ordered(db, make_resort, make_discipline):
    make_resort("Zermatt")
    make_resort("Chamonix", "France")
    make_discipline("Snowboard", 2)
    make_discipline("Ski", 1)

    service = CatalogService(db)

    assert [resort.name for resort in service.list_resorts()] == ["Chamonix", "Zermatt"]
    assert [discipline.name for discipline in service.list_disciplines()] == ["Ski", "Snowboard"]
