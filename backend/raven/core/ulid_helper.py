"""ULID identifiers for instructors, customers and cart items."""

import ulid

ULID_LENGTH = 26


def generate_ulid() -> str:
    return str(ulid.ULID())


def generate_prefixed_id(prefix: str) -> str:
    """ULID with a readable type prefix, e.g. ``cart-01J...``."""
    return f"{prefix}{generate_ulid()}"


def is_valid_ulid(value: str) -> bool:
    """True for a 26-character Crockford base32 ULID string."""
    if not isinstance(value, str) or len(value) != ULID_LENGTH:
        return False
    try:
        ulid.ULID.from_str(value)
    except ValueError:
        return False
    return True
