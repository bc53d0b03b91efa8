"""Booking store — every booking query the services need, behind one class."""

from datetime import date

from sqlalchemy import exists, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.booking import Booking, BookingState


class BookingRepository:
    """Async SQLAlchemy access to the ``bookings`` table.

    The services only talk to this class, so a test can hand them any
    session (an in-memory SQLite database in the test suite).
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, booking_id: int) -> Booking | None:
        return await self.db.get(Booking, booking_id)

    async def add(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.flush()
        await self.db.refresh(booking)
        return booking

    async def save(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.flush()
        return booking

    async def reload(self, booking: Booking) -> Booking:
        """Re-read ``booking`` from the database, discarding the loaded state."""
        await self.db.refresh(booking)
        return booking

    async def commit(self) -> None:
        await self.db.commit()

    async def lock_apartment(self, apartment_id: int) -> None:
        """Take a transaction-scoped advisory lock on PostgreSQL; no-op elsewhere."""
        if self.db.get_bind().dialect.name == "postgresql":
            await self.db.execute(text("SELECT pg_advisory_xact_lock(:key)"), {"key": apartment_id})

    async def find_conflicting(
        self,
        apartment_id: int,
        start: date,
        end: date,
        exclude_booking_id: int | None = None,
    ) -> list[Booking]:
        """Non-cancelled bookings of the apartment overlapping ``[start, end)``."""
        query = select(Booking).where(
            Booking.apartment_id == apartment_id,
            Booking.state != BookingState.CANCELLED.value,
            Booking.start_date < end,
            Booking.end_date > start,
        )
        if exclude_booking_id is not None:
            query = query.where(Booking.id != exclude_booking_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def unavailable_apartment_ids(self, start: date, end: date) -> set[int]:
        """Apartment ids with at least one non-cancelled booking overlapping ``[start, end)``."""
        result = await self.db.execute(
            select(Booking.apartment_id)
            .where(
                Booking.state != BookingState.CANCELLED.value,
                Booking.start_date < end,
                Booking.end_date > start,
            )
            .distinct()
        )
        return set(result.scalars().all())

    async def list_by_renter(self, renter_id: int, offset: int, limit: int) -> list[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.renter_id == renter_id)
            .order_by(Booking.start_date.desc(), Booking.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_by_apartment(self, apartment_id: int, offset: int, limit: int) -> list[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.apartment_id == apartment_id)
            .order_by(Booking.start_date.desc(), Booking.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def exists_for_apartment(self, apartment_id: int) -> bool:
        result = await self.db.execute(select(exists().where(Booking.apartment_id == apartment_id)))
        return bool(result.scalar())

    async def list_finished(self, renter_id: int, apartment_id: int, today: date) -> list[Booking]:
        """Confirmed bookings of the renter for the apartment whose stay has ended."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.renter_id == renter_id,
                Booking.apartment_id == apartment_id,
                Booking.state == BookingState.CONFIRMED.value,
                Booking.end_date <= today,
            )
            .order_by(Booking.start_date.desc())
        )
        return list(result.scalars().all())
