"""Pydantic v2 request/response schemas for filter (pricing rule) endpoints.

Field-level checks are deliberately loose here: the ordered domain checks
in :mod:`stayhub.pricing.validation` own the error messages for filters.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stayhub.models.filter import ConditionType, DateType

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class FilterPayload(BaseModel):
    """Body for creating or fully replacing a filter."""

    name: str | None = None
    description: str | None = None
    activated: bool | None = None
    increment: bool | None = None
    value: Decimal | None = None
    date_type: DateType | None = None
    start_date: date | None = None
    end_date: date | None = None
    week_days: str | None = None
    condition_type: ConditionType | None = None
    anticipation_hours: int | None = None
    min_days: int | None = None

    model_config = _CAMEL


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class FilterResponse(BaseModel):
    """A stored filter."""

    id: int
    name: str
    description: str | None = None
    activated: bool
    increment: bool
    value: Decimal
    date_type: DateType
    start_date: date | None = None
    end_date: date | None = None
    week_days: str | None = None
    condition_type: ConditionType
    anticipation_hours: int | None = None
    min_days: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class FiltersByDateResponse(BaseModel):
    """Filters that apply on each night of a prospective stay."""

    check_in_date: date
    check_out_date: date
    total_nights: int
    filters_by_date: dict[date, list[FilterResponse]]

    model_config = _CAMEL
