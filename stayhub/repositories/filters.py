"""Filter store — persistence for pricing rules."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.filter import Filter


class FilterRepository:
    """Async SQLAlchemy access to the ``filters`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, filter_id: int) -> Filter | None:
        return await self.db.get(Filter, filter_id)

    async def list_page(self, offset: int, limit: int) -> list[Filter]:
        result = await self.db.execute(select(Filter).order_by(Filter.id.asc()).offset(offset).limit(limit))
        return list(result.scalars().all())

    async def list_active(self) -> list[Filter]:
        """Activated filters in ascending id order."""
        result = await self.db.execute(select(Filter).where(Filter.activated.is_(True)).order_by(Filter.id.asc()))
        return list(result.scalars().all())

    async def create(self, values: dict[str, Any]) -> Filter:
        row = Filter(**values)
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return row

    async def update(self, row: Filter, values: dict[str, Any]) -> Filter:
        for field, value in values.items():
            setattr(row, field, value)
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return row

    async def delete(self, row: Filter) -> None:
        await self.db.delete(row)
        await self.db.flush()
