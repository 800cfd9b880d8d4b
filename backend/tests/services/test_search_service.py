"""Tests for SearchService filtering and paging."""

from datetime import date
from decimal import Decimal

import pytest

from raven.models import BookingStatus
from raven.services.search_service import SearchService


@pytest.fixture
def catalog(make_resort, make_discipline):
    return {
        "zermatt": make_resort("Zermatt"),
        "chamonix": make_resort("Chamonix", "France"),
        "ski": make_discipline("Ski", 1),
        "snowboard": make_discipline("Snowboard", 2),
    }


@pytest.fixture
def instructors(catalog, make_instructor, make_offer):
    anna = make_instructor(first_name="Anna", languages=["German"], images=["a.jpg"])
    make_offer(anna, rate="100", resorts=[catalog["zermatt"]], disciplines=[catalog["ski"]])
    make_offer(anna, rate="90", resorts=[catalog["zermatt"]], disciplines=[catalog["ski"]])

    louis = make_instructor(first_name="Louis", last_name="Martin")
    make_offer(
        louis, rate="120", resorts=[catalog["chamonix"]], disciplines=[catalog["snowboard"]]
    )

    # Only inactive offers: never listed
    mia = make_instructor(first_name="Mia", last_name="Huber")
    make_offer(mia, rate="70", resorts=[catalog["zermatt"]], status="inactive")
    return {"anna": anna, "louis": louis, "mia": mia}


def _names(result):
    return [entry["first_name"] for entry in result["data"]]


def test_no_filters_lists_instructors_with_active_offers(db, instructors):
    result = SearchService(db).search_instructors()

    assert _names(result) == ["Anna", "Louis"]
    assert result["count"] == 2
    anna = result["data"][0]
    assert anna["min_price"] == Decimal("90")
    assert anna["languages"] == ["German"]
    assert anna["images"] == ["a.jpg"]


def test_location_is_case_insensitive_substring(db, instructors):
    assert _names(SearchService(db).search_instructors(location="cham")) == ["Louis"]
    assert _names(SearchService(db).search_instructors(location="ZERM")) == ["Anna"]
    assert SearchService(db).search_instructors(location="Aspen")["data"] == []


def test_discipline_filter(db, instructors, catalog):
    result = SearchService(db).search_instructors(discipline_ids=[catalog["snowboard"].id])
    assert _names(result) == ["Louis"]
    assert SearchService(db).search_instructors(discipline_ids=[999])["data"] == []


def test_booked_instructors_are_excluded(db, instructors, make_booking):
    make_booking(instructors["anna"], [(date(2025, 2, 12), 2)])
    make_booking(
        instructors["louis"], [(date(2025, 2, 12), 2)], status=BookingStatus.CANCELLED.value
    )

    result = SearchService(db).search_instructors(
        start_date=date(2025, 2, 10), end_date=date(2025, 2, 14)
    )

    assert _names(result) == ["Louis"]


def test_date_filter_needs_both_ends(db, instructors, make_booking):
    make_booking(instructors["anna"], [(date(2025, 2, 12), 2)])
    result = SearchService(db).search_instructors(start_date=date(2025, 2, 10))
    assert _names(result) == ["Anna", "Louis"]


def test_paging_and_limit_clamp(db, instructors):
    service = SearchService(db)
    result = service.search_instructors(limit=1, offset=1)
    assert _names(result) == ["Louis"]
    assert result["params"]["limit"] == 1
    assert result["params"]["offset"] == 1

    assert service.clamp_limit(None) == 20
    assert service.clamp_limit(500) == 100


def test_no_active_offers(db, make_instructor):
    make_instructor()
    assert SearchService(db).search_instructors() == {
        "data": [],
        "count": 0,
        "params": {
            "location": None,
            "start_date": None,
            "end_date": None,
            "discipline_ids": None,
            "limit": 20,
            "offset": 0,
        },
    }
