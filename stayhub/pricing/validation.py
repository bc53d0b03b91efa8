"""Structural checks a filter must pass before it is stored."""

import re
from decimal import Decimal
from typing import Any

from stayhub.exceptions import BusinessRuleViolation
from stayhub.models.filter import ConditionType, DateType
from stayhub.schemas.filter import FilterPayload

_RANGE_TYPES = {DateType.DATE_RANGE, DateType.DATE_RANGE_WEEK_DAYS}
_WEEK_DAY_TYPES = {DateType.WEEK_DAYS, DateType.DATE_RANGE_WEEK_DAYS}
_INTEGER = re.compile(r"[+-]?[0-9]+")


def validate_week_days(week_days: str) -> None:
    """Reject the whole list if any token is not an integer in [1, 7].

    Empty tokens at the end are dropped first, so ``"5,6,"`` is accepted.
    """
    tokens = week_days.split(",")
    while tokens and tokens[-1] == "":
        tokens.pop()

    for token in tokens:
        token = token.strip()
        if not _INTEGER.fullmatch(token):
            raise BusinessRuleViolation("Invalid week days format. Use comma-separated numbers (e.g., '5,6,7')")
        if not 1 <= int(token) <= 7:
            raise BusinessRuleViolation("Week days must be between 1 (Monday) and 7 (Sunday)")


def validate_filter(payload: FilterPayload) -> dict[str, Any]:
    """Validate ``payload`` and return the column values to store.

    Checks run in a fixed order and stop at the first failure. Missing
    ``condition_type``, ``activated`` and ``increment`` get their defaults
    (NONE, True, False) in the returned values.

    Raises:
        BusinessRuleViolation: describing the first rule the payload breaks.
    """
    if payload.name is None or not payload.name.strip():
        raise BusinessRuleViolation("Filter name is required")

    if payload.value is None:
        raise BusinessRuleViolation("Filter value is required")
    if payload.value < Decimal(0) or payload.value > Decimal(100):
        raise BusinessRuleViolation("Value must be between 0 and 100")

    date_type = payload.date_type
    if date_type is None:
        raise BusinessRuleViolation("Date type is required")

    if date_type in _RANGE_TYPES:
        if payload.start_date is None or payload.end_date is None:
            raise BusinessRuleViolation(f"Start date and end date are required for {date_type.value} type")
        if payload.start_date > payload.end_date:
            raise BusinessRuleViolation("Start date must be before end date")

    if date_type in _WEEK_DAY_TYPES:
        if payload.week_days is None or not payload.week_days.strip():
            raise BusinessRuleViolation(f"Week days are required for {date_type.value} type")
        validate_week_days(payload.week_days)

    condition_type = payload.condition_type or ConditionType.NONE

    if condition_type is ConditionType.LAST_MINUTE:
        if payload.anticipation_hours is None or payload.anticipation_hours <= 0:
            raise BusinessRuleViolation("Anticipation hours must be greater than 0 for LAST_MINUTE type")

    if condition_type is ConditionType.LONG_STAY:
        if payload.min_days is None or payload.min_days <= 0:
            raise BusinessRuleViolation("Min days must be greater than 0 for LONG_STAY type")

    return {
        "name": payload.name,
        "description": payload.description,
        "activated": True if payload.activated is None else payload.activated,
        "increment": False if payload.increment is None else payload.increment,
        "value": payload.value,
        "date_type": date_type.value,
        "start_date": payload.start_date,
        "end_date": payload.end_date,
        "week_days": payload.week_days,
        "condition_type": condition_type.value,
        "anticipation_hours": payload.anticipation_hours,
        "min_days": payload.min_days,
    }
