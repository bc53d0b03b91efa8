"""Booking lifecycle — create, cancel, change dates, and the read paths.

State machine::

    CONFIRMED --cancel--> CANCELLED   (terminal, no way back)

Every mutating operation checks that the caller, identified by email through
the user service, owns the booking. Cost is always ``nights × nightly rate``
using the rate the apartment service reports at the time of the change.
"""

import logging
from collections.abc import Callable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from stayhub.clients.apartments import ApartmentInfo
from stayhub.exceptions import BusinessRuleViolation, OwnershipViolation, ResourceNotFoundError
from stayhub.models.booking import Booking, BookingState
from stayhub.repositories.bookings import BookingRepository
from stayhub.services import availability
from stayhub.services.locks import ApartmentLocks, apartment_locks

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")

UNAVAILABLE_MESSAGE = "The apartment is not available for the selected dates"


class ApartmentLookup(Protocol):
    async def get_apartment(self, apartment_id: int) -> ApartmentInfo | None: ...


class RenterLookup(Protocol):
    async def get_user_id_by_email(self, email: str) -> int | None: ...


def nights(start: date, end: date) -> int:
    """Whole nights in ``[start, end)``."""
    return (end - start).days


def compute_cost(nightly_rate: Decimal, start: date, end: date) -> Decimal:
    """``nights × nightly_rate`` rounded half-up to cents."""
    return (Decimal(nightly_rate) * nights(start, end)).quantize(_CENTS, rounding=ROUND_HALF_UP)


class BookingService:
    """Owns the booking state machine, cost computation and ownership checks."""

    def __init__(
        self,
        bookings: BookingRepository,
        apartments: ApartmentLookup,
        users: RenterLookup,
        locks: ApartmentLocks | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.bookings = bookings
        self.apartments = apartments
        self.users = users
        self.locks = locks or apartment_locks
        self.today = today

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_apartment(self, apartment_id: int) -> ApartmentInfo:
        apartment = await self.apartments.get_apartment(apartment_id)
        if apartment is None:
            raise ResourceNotFoundError("Apartment not found")
        return apartment

    async def _resolve_caller_id(self, caller_email: str) -> int:
        caller_id = await self.users.get_user_id_by_email(caller_email)
        if caller_id is None:
            raise ResourceNotFoundError("User not found")
        return caller_id

    async def _require_owned_booking(self, booking_id: int, caller_email: str) -> Booking:
        booking = await self.bookings.get(booking_id)
        if booking is None:
            raise ResourceNotFoundError("Booking not found")

        caller_id = await self._resolve_caller_id(caller_email)
        if booking.renter_id != caller_id:
            raise OwnershipViolation("User email does not match booking owner")
        return booking

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(
        self,
        renter_id: int,
        apartment_id: int,
        start: date,
        end: date,
        guests: int,
        caller_email: str,
    ) -> Booking:
        """Create a CONFIRMED booking after checking ownership and availability.

        Raises:
            ResourceNotFoundError: Unknown apartment or caller.
            OwnershipViolation: ``renter_id`` is not the caller's id.
            BusinessRuleViolation: Dates out of order, or the apartment is taken.
        """
        apartment = await self._require_apartment(apartment_id)

        caller_id = await self._resolve_caller_id(caller_email)
        if caller_id != renter_id:
            raise OwnershipViolation("User email does not match user ID")

        availability.require_ordered(start, end)

        async with self.locks.hold(apartment_id):
            await self.bookings.lock_apartment(apartment_id)
            if not await availability.is_available(self.bookings, apartment_id, start, end):
                raise BusinessRuleViolation(UNAVAILABLE_MESSAGE)

            booking = await self.bookings.add(
                Booking(
                    renter_id=renter_id,
                    apartment_id=apartment_id,
                    start_date=start,
                    end_date=end,
                    cost=compute_cost(apartment.nightly_rate, start, end),
                    state=BookingState.CONFIRMED.value,
                    guests=guests,
                )
            )
            await self.bookings.commit()

        logger.info(
            "Created booking %s for renter %s on apartment %s (%s..%s, cost=%s)",
            booking.id,
            renter_id,
            apartment_id,
            start,
            end,
            booking.cost,
        )
        return booking

    async def cancel(self, booking_id: int, caller_email: str) -> Booking:
        """Move a CONFIRMED booking to CANCELLED. Cancelling twice is refused."""
        booking = await self._require_owned_booking(booking_id, caller_email)

        async with self.locks.hold(booking.apartment_id):
            await self.bookings.lock_apartment(booking.apartment_id)
            # State may have changed while the caller was being resolved.
            await self.bookings.reload(booking)
            if booking.is_cancelled:
                raise BusinessRuleViolation("Booking is already cancelled")

            booking.state = BookingState.CANCELLED.value
            await self.bookings.save(booking)
            await self.bookings.commit()

        logger.info("Cancelled booking %s (apartment %s)", booking.id, booking.apartment_id)
        return booking

    async def change_dates(
        self,
        booking_id: int,
        new_start: date,
        new_end: date,
        caller_email: str,
    ) -> Booking:
        """Move a CONFIRMED booking to ``[new_start, new_end)`` and recompute its cost.

        The booking's own current dates are ignored by the overlap check.
        """
        booking = await self._require_owned_booking(booking_id, caller_email)

        if booking.is_cancelled:
            raise BusinessRuleViolation("Cannot modify a cancelled booking")

        availability.require_ordered(new_start, new_end)

        apartment = await self._require_apartment(booking.apartment_id)

        async with self.locks.hold(booking.apartment_id):
            await self.bookings.lock_apartment(booking.apartment_id)
            await self.bookings.reload(booking)
            if booking.is_cancelled:
                raise BusinessRuleViolation("Cannot modify a cancelled booking")

            available = await availability.is_available(
                self.bookings,
                booking.apartment_id,
                new_start,
                new_end,
                exclude_booking_id=booking.id,
            )
            if not available:
                raise BusinessRuleViolation(UNAVAILABLE_MESSAGE)

            booking.start_date = new_start
            booking.end_date = new_end
            booking.cost = compute_cost(apartment.nightly_rate, new_start, new_end)
            await self.bookings.save(booking)
            await self.bookings.commit()

        logger.info(
            "Moved booking %s to %s..%s (cost=%s)",
            booking.id,
            new_start,
            new_end,
            booking.cost,
        )
        return booking

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_by_renter(
        self,
        renter_id: int,
        caller_email: str,
        page: int,
        page_size: int,
    ) -> list[Booking]:
        """A page of the renter's bookings, latest start first. Only the renter may ask."""
        caller_id = await self._resolve_caller_id(caller_email)
        if caller_id != renter_id:
            raise OwnershipViolation("User email does not match user ID")
        return await self.bookings.list_by_renter(renter_id, page * page_size, page_size)

    async def list_by_apartment(self, apartment_id: int, page: int, page_size: int) -> list[Booking]:
        """A page of the apartment's bookings, latest start first."""
        await self._require_apartment(apartment_id)
        return await self.bookings.list_by_apartment(apartment_id, page * page_size, page_size)

    async def unavailable_apartments(self, start: date, end: date) -> set[int]:
        return await availability.unavailable_apartments(self.bookings, start, end)

    async def has_bookings(self, apartment_id: int) -> bool:
        return await self.bookings.exists_for_apartment(apartment_id)

    async def finished_stays(self, renter_id: int, apartment_id: int) -> list[Booking]:
        """CONFIRMED stays of the renter at the apartment that have already ended."""
        return await self.bookings.list_finished(renter_id, apartment_id, self.today())
