"""Tests for metric label path normalization."""

import pytest

from raven.middleware.prometheus_middleware import normalize_path

ULID = "01ARZ3NDEKTSV4RRFFQ69G5FAV"


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        (f"/api/v1/instructors/{ULID}/pricing", "/api/v1/instructors/:id/pricing"),
        (f"/api/v1/cart/my-cart/items/cart-{ULID}", "/api/v1/cart/my-cart/items/:id"),
        ("/api/v1/analytics/instructors/42/slots", "/api/v1/analytics/instructors/:id/slots"),
        ("/api/v1/resorts", "/api/v1/resorts"),
    ],
)
def test_normalize_path(raw: str, expected: str) -> None:
    assert normalize_path(raw) == expected
