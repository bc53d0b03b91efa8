"""Booking model — a renter's reservation of one apartment for a run of nights."""

import enum
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from stayhub.database import Base, IntegerPrimaryKeyMixin


class BookingState(str, enum.Enum):
    """Lifecycle state of a booking. The only transition is CONFIRMED -> CANCELLED."""

    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Booking(IntegerPrimaryKeyMixin, Base):
    """A reservation linking a renter to an apartment for ``[start_date, end_date)``.

    ``renter_id`` and ``apartment_id`` point at records owned by the user and
    apartment services, so there are no foreign keys here.
    """

    __tablename__ = "bookings"

    renter_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    apartment_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)  # exclusive: the check-out day
    cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    state: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookingState.CONFIRMED.value,
        index=True,
    )
    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_bookings_dates_ordered"),
        CheckConstraint("cost >= 0", name="ck_bookings_cost_non_negative"),
        CheckConstraint("guests BETWEEN 1 AND 10", name="ck_bookings_guests_range"),
        Index("ix_bookings_apartment_dates", "apartment_id", "start_date", "end_date"),
    )

    @property
    def is_cancelled(self) -> bool:
        return self.state == BookingState.CANCELLED.value

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, apartment_id={self.apartment_id}, renter_id={self.renter_id}, "
            f"{self.start_date}..{self.end_date}, state={self.state})>"
        )
