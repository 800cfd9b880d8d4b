# backend/raven/core/exceptions.py
"""
Error types for Raven.

Services raise ``DomainException`` subclasses; routes turn them into HTTP
responses with ``to_http_exception()``. The body is always
``{"message", "code", "details"}``.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Error with a stable machine-readable code and an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Bad input that passed schema validation."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Request collides with existing bookings or state."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    status_code = HTTP_422_UNPROCESSABLE


class ServiceException(DomainException):
    """A service could not complete; the message is safe to show."""


class EmptySlotSelectionException(ValidationException):
    """Raised when a cart item is submitted without any selected slots."""

    def __init__(self, instructor_id: Optional[str] = None):
        super().__init__(
            message="At least one slot must be selected before adding to cart",
            code="EMPTY_SLOT_SELECTION",
            details={"instructor_id": instructor_id} if instructor_id else {},
        )


class SlotUnavailableException(ConflictException):
    """Raised when a requested slot is already booked."""

    def __init__(self, slot_date: str, day_slot_id: int, day_slot_name: str):
        super().__init__(
            message=f"{day_slot_name} on {slot_date} is already booked",
            code="SLOT_UNAVAILABLE",
            details={
                "date": slot_date,
                "day_slot_id": day_slot_id,
                "day_slot_name": day_slot_name,
            },
        )


class SlotOutOfRangeException(ValidationException):
    """Raised when a requested slot is not part of the generated grid."""

    def __init__(self, slot_date: str, day_slot_id: int):
        super().__init__(
            message=f"Slot {day_slot_id} on {slot_date} is outside the selected date range",
            code="SLOT_OUT_OF_RANGE",
            details={"date": slot_date, "day_slot_id": day_slot_id},
        )


class CalendarWindowTooLargeException(ValidationException):
    """Raised when a calendar window spans more days than the configured maximum."""

    def __init__(self, start_date: str, end_date: str, max_days: int):
        super().__init__(
            message=f"Calendar window may span at most {max_days} days",
            code="CALENDAR_WINDOW_TOO_LARGE",
            details={"start_date": start_date, "end_date": end_date, "max_days": max_days},
        )


class PricingUnavailableException(BusinessRuleException):
    """Raised when an instructor has no active priced offer."""

    def __init__(self, instructor_id: str):
        super().__init__(
            message="Instructor has no active offer with an hourly rate",
            code="PRICING_UNAVAILABLE",
            details={"instructor_id": instructor_id},
        )


class RepositoryException(Exception):
    """Data access failed. Never shown to clients as-is."""


def is_db_pool_exhaustion(exc: Exception) -> bool:
    """True when every pooled connection was busy and the checkout timed out."""
    text = str(exc).lower()
    if "queuepool" in text:
        return True
    return "timeout" in text and ("connection" in text or "pool" in text)
