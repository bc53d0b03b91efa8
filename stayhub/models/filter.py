"""Filter model — a date- and condition-scoped pricing rule (surcharge or discount)."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from stayhub.database import Base, IntegerPrimaryKeyMixin, TimestampMixin


class DateType(str, enum.Enum):
    """Which dates a filter applies to."""

    EVERY_DAY = "EVERY_DAY"
    DATE_RANGE = "DATE_RANGE"
    WEEK_DAYS = "WEEK_DAYS"
    DATE_RANGE_WEEK_DAYS = "DATE_RANGE_WEEK_DAYS"


class ConditionType(str, enum.Enum):
    """Whole-stay qualifier a filter requires."""

    NONE = "NONE"
    LAST_MINUTE = "LAST_MINUTE"
    LONG_STAY = "LONG_STAY"


class Filter(IntegerPrimaryKeyMixin, TimestampMixin, Base):
    """Global pricing rule. Not tied to any apartment or booking.

    Kind-specific parameters (``start_date``/``end_date``, ``week_days``,
    ``anticipation_hours``, ``min_days``) are stored flat; the ones the chosen
    kinds do not use are kept but ignored.
    """

    __tablename__ = "filters"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    activated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    increment: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # True = surcharge
    value: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)  # percentage 0..100
    date_type: Mapped[str] = mapped_column(String(30), nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    week_days: Mapped[str | None] = mapped_column(String(20), nullable=True)  # e.g. "5,6,7"
    condition_type: Mapped[str] = mapped_column(String(20), nullable=False, default=ConditionType.NONE.value)
    anticipation_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    min_days: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Filter(id={self.id}, name={self.name!r}, date_type={self.date_type}, activated={self.activated})>"
