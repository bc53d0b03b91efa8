"""Interval overlap checks between a requested stay and existing bookings.

Stays are half-open ``[start, end)``: a booking ending on the day another
begins does not conflict. Cancelled bookings never block anything.
"""

from datetime import date

from stayhub.exceptions import BusinessRuleViolation
from stayhub.repositories.bookings import BookingRepository


def require_ordered(start: date, end: date) -> None:
    """Raise unless ``start`` is strictly before ``end``."""
    if start >= end:
        raise BusinessRuleViolation("End date must be after start date")


async def is_available(
    bookings: BookingRepository,
    apartment_id: int,
    start: date,
    end: date,
    exclude_booking_id: int | None = None,
) -> bool:
    """Return True if no non-cancelled booking of the apartment overlaps ``[start, end)``.

    ``exclude_booking_id`` leaves one booking out of the check, so a booking
    being moved does not conflict with itself.
    """
    require_ordered(start, end)
    conflicts = await bookings.find_conflicting(apartment_id, start, end, exclude_booking_id)
    return not conflicts


async def unavailable_apartments(bookings: BookingRepository, start: date, end: date) -> set[int]:
    """Ids of every apartment with a non-cancelled booking overlapping ``[start, end)``."""
    require_ordered(start, end)
    return await bookings.unavailable_apartment_ids(start, end)
