"""Seed the database with the default catalogue of pricing filters.

Every filter goes through the same validation as the API, so the seed can
never store a filter the service would reject.

Run inside Docker:
    docker compose exec bookings python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add the project root to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from stayhub.database import async_session_factory
from stayhub.models.filter import ConditionType, DateType, Filter
from stayhub.pricing.validation import validate_filter
from stayhub.schemas.filter import FilterPayload


def _filters(year: int) -> list[FilterPayload]:
    """Default filters; seasonal ranges are placed in ``year``."""
    return [
        FilterPayload(
            name="Weekend Premium",
            description="Price increase for Friday, Saturday and Sunday nights",
            increment=True,
            value=Decimal("20.00"),
            date_type=DateType.WEEK_DAYS,
            week_days="5,6,7",
        ),
        FilterPayload(
            name="Last Minute Deal",
            description="Discount for bookings made within 48 hours of check-in",
            value=Decimal("15.00"),
            date_type=DateType.EVERY_DAY,
            condition_type=ConditionType.LAST_MINUTE,
            anticipation_hours=48,
        ),
        FilterPayload(
            name="Long Stay Discount",
            description="Discount for reservations of 7 nights or more",
            value=Decimal("10.00"),
            date_type=DateType.EVERY_DAY,
            condition_type=ConditionType.LONG_STAY,
            min_days=7,
        ),
        FilterPayload(
            name="Summer High Season",
            description="Price increase during summer vacation period",
            increment=True,
            value=Decimal("30.00"),
            date_type=DateType.DATE_RANGE,
            start_date=date(year, 7, 1),
            end_date=date(year, 8, 31),
        ),
        FilterPayload(
            name="Christmas & New Year Premium",
            description="Special pricing for holiday season",
            increment=True,
            value=Decimal("40.00"),
            date_type=DateType.DATE_RANGE,
            start_date=date(year, 12, 20),
            end_date=date(year + 1, 1, 6),
        ),
        FilterPayload(
            name="Summer Weekends",
            description="Extra surcharge on summer Saturdays and Sundays",
            increment=True,
            value=Decimal("5.00"),
            date_type=DateType.DATE_RANGE_WEEK_DAYS,
            start_date=date(year, 6, 1),
            end_date=date(year, 9, 30),
            week_days="6,7",
        ),
        FilterPayload(
            name="Midweek Special",
            description="Small discount for Monday through Thursday stays",
            activated=False,
            value=Decimal("5.00"),
            date_type=DateType.WEEK_DAYS,
            week_days="1,2,3,4",
        ),
        FilterPayload(
            name="Early Bird Discount",
            description="Discount for bookings made up to 30 days before check-in",
            activated=False,
            value=Decimal("12.00"),
            date_type=DateType.EVERY_DAY,
            condition_type=ConditionType.LAST_MINUTE,
            anticipation_hours=720,
        ),
        FilterPayload(
            name="Monthly Stay Discount",
            description="Special discount for stays of 30 days or more",
            value=Decimal("18.00"),
            date_type=DateType.EVERY_DAY,
            condition_type=ConditionType.LONG_STAY,
            min_days=30,
        ),
    ]


async def seed() -> None:
    """Replace all filters with the default catalogue."""
    payloads = _filters(date.today().year)

    async with async_session_factory() as session:
        await session.execute(delete(Filter))
        await session.flush()

        for payload in payloads:
            row = Filter(**validate_filter(payload))
            session.add(row)
            await session.flush()
            state = "on" if row.activated else "off"
            sign = "+" if row.increment else "-"
            print(f"   {row.id:>3} {row.name} ({sign}{row.value}%, {row.date_type}, {state})")

        await session.commit()

    print(f"Created {len(payloads)} filters")


if __name__ == "__main__":
    asyncio.run(seed())
