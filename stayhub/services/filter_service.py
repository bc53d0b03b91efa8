"""Filter service — CRUD for pricing rules and the per-night expansion."""

import logging
from datetime import date, datetime

from stayhub.exceptions import ResourceNotFoundError
from stayhub.models.filter import Filter
from stayhub.pricing.engine import applicable_rules_by_night, total_nights
from stayhub.pricing.rules import rule_from_filter
from stayhub.pricing.validation import validate_filter
from stayhub.repositories.filters import FilterRepository
from stayhub.schemas.filter import FilterPayload, FilterResponse, FiltersByDateResponse

logger = logging.getLogger(__name__)


class FilterService:
    """Validates and stores filters; evaluates the active ones against a stay."""

    def __init__(self, filters: FilterRepository) -> None:
        self.filters = filters

    async def list_page(self, page: int, page_size: int) -> list[Filter]:
        return await self.filters.list_page(page * page_size, page_size)

    async def get(self, filter_id: int) -> Filter:
        row = await self.filters.get(filter_id)
        if row is None:
            raise ResourceNotFoundError(f"Filter not found with id: {filter_id}")
        return row

    async def create(self, payload: FilterPayload) -> Filter:
        values = validate_filter(payload)
        row = await self.filters.create(values)
        logger.info("Created filter %s (%s)", row.id, row.name)
        return row

    async def update(self, filter_id: int, payload: FilterPayload) -> Filter:
        """Replace every field of an existing filter."""
        row = await self.get(filter_id)
        values = validate_filter(payload)
        row = await self.filters.update(row, values)
        logger.info("Updated filter %s (%s)", row.id, row.name)
        return row

    async def delete(self, filter_id: int) -> None:
        row = await self.get(filter_id)
        await self.filters.delete(row)
        logger.info("Deleted filter %s", filter_id)

    async def applicable_filters_by_date(
        self,
        check_in: date,
        check_out: date,
        now: datetime | None = None,
    ) -> FiltersByDateResponse:
        """Active filters that apply on each night of ``[check_in, check_out)``.

        Expects ``check_in < check_out``; the router rejects anything else.
        """
        rows = await self.filters.list_active()
        by_id = {row.id: FilterResponse.model_validate(row) for row in rows}

        per_night = applicable_rules_by_night(
            check_in,
            check_out,
            [rule_from_filter(row) for row in rows],
            now=now,
        )

        return FiltersByDateResponse(
            check_in_date=check_in,
            check_out_date=check_out,
            total_nights=total_nights(check_in, check_out),
            filters_by_date={night: [by_id[rule.id] for rule in rules] for night, rules in per_night.items()},
        )
