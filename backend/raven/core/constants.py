"""Application-wide constants for the Raven booking platform."""

from __future__ import annotations

API_TITLE = "Raven Ski Instructor Booking API"
API_VERSION = "1.0.0"
API_DESCRIPTION = (
    "Search ski instructors, browse their calendars, pick day slots and "
    "collect them in a cart for checkout."
)

# Day slot ids as stored in the day_slots table
FULL_DAY_SLOT_ID = 1
MORNING_SLOT_ID = 2
LUNCH_SLOT_ID = 3
AFTERNOON_SLOT_ID = 4
EVENING_SLOT_ID = 5

# Cart
DEFAULT_CART_STORAGE_KEY = "raven-cart-storage"
CART_ITEM_ID_PREFIX = "cart-"
DEFAULT_DISCIPLINE_LABEL = "Ski Instruction"
UNKNOWN_LOCATION_LABEL = "Unknown Location"

# Instructor profile status values
PROFILE_STATUS_APPROVED = 1
PROFILE_STATUS_LIVE = 2

# Offers
OFFER_STATUS_ACTIVE = "active"

# Weekday labels; both 0 and 7 map to Sunday
WEEKDAY_NAMES = {
    0: "Sunday",
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}

# Frontend URLs
DEFAULT_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

# Query limits
DEFAULT_QUERY_LIMIT = 100
