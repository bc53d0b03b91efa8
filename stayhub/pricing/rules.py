"""Pricing rule values and the predicates that decide when a rule applies.

A :class:`Rule` is an immutable snapshot of a stored :class:`~stayhub.models.filter.Filter`.
Its date applicability and its condition are tagged variants, one dataclass
per kind, so each kind only carries the parameters it needs::

    rule = rule_from_filter(row)
    is_applicable_on_date(rule, date(2025, 7, 5))
    meets_condition(rule, check_in, check_out)
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from stayhub.models.filter import ConditionType, DateType, Filter

# ---------------------------------------------------------------------------
# Date applicability variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EveryDay:
    """Applies to every date."""


@dataclass(frozen=True)
class DateRange:
    """Applies to dates within ``[start, end]`` (both inclusive)."""

    start: date
    end: date


@dataclass(frozen=True)
class WeekDays:
    """Applies to dates whose ISO weekday (1=Monday … 7=Sunday) is in ``days``."""

    days: frozenset[int]


@dataclass(frozen=True)
class DateRangeWeekDays:
    """Applies only when both the range and the weekday set match."""

    start: date
    end: date
    days: frozenset[int]


# ---------------------------------------------------------------------------
# Condition variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoCondition:
    """Always satisfied."""


@dataclass(frozen=True)
class LastMinute:
    """Satisfied when check-in starts within ``anticipation_hours`` of now."""

    anticipation_hours: int


@dataclass(frozen=True)
class LongStay:
    """Satisfied when the stay lasts at least ``min_days`` nights."""

    min_days: int


@dataclass(frozen=True)
class Incomplete:
    """Stored parameters are missing for the chosen kind. Never matches."""

    reason: str


Applicability = EveryDay | DateRange | WeekDays | DateRangeWeekDays | Incomplete
Condition = NoCondition | LastMinute | LongStay | Incomplete


@dataclass(frozen=True)
class Rule:
    """A pricing adjustment: ``value`` percent up (``increment``) or down."""

    id: int
    name: str
    value: Decimal
    increment: bool
    activated: bool
    applicability: Applicability
    condition: Condition
    description: str | None = None


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_applicable_on_date(rule: Rule, day: date) -> bool:
    """Return True if ``rule`` is active and its date kind matches ``day``."""
    if not rule.activated:
        return False

    match rule.applicability:
        case EveryDay():
            return True
        case DateRange(start=start, end=end):
            return start <= day <= end
        case WeekDays(days=days):
            return day.isoweekday() in days
        case DateRangeWeekDays(start=start, end=end, days=days):
            return start <= day <= end and day.isoweekday() in days
        case _:
            return False


def hours_until_check_in(check_in: date, now: datetime) -> int:
    """Whole hours from ``now`` to the start of ``check_in``, truncated toward zero.

    Negative once check-in day has started.
    """
    delta = datetime.combine(check_in, time.min) - now
    return int(delta.total_seconds() / 3600)


def meets_condition(
    rule: Rule,
    check_in: date,
    check_out: date,
    now: datetime | None = None,
) -> bool:
    """Return True if the whole stay ``[check_in, check_out)`` satisfies the rule's condition.

    The result depends only on the stay, never on an individual night.
    """
    match rule.condition:
        case NoCondition():
            return True
        case LastMinute(anticipation_hours=anticipation_hours):
            current = now if now is not None else datetime.now()
            # A check-in that already began gives a negative delta and still qualifies.
            return hours_until_check_in(check_in, current) <= anticipation_hours
        case LongStay(min_days=min_days):
            return (check_out - check_in).days >= min_days
        case _:
            return False


# ---------------------------------------------------------------------------
# Conversion from the stored row
# ---------------------------------------------------------------------------


def parse_week_days(raw: str | None) -> frozenset[int]:
    """Parse a stored ``"5,6,7"`` list, skipping tokens that are not integers."""
    if raw is None:
        return frozenset()
    days = set()
    for token in raw.split(","):
        try:
            days.add(int(token.strip()))
        except ValueError:
            continue
    return frozenset(days)


def _applicability_for(row: Filter) -> Applicability:
    date_type = DateType(row.date_type)
    has_range = row.start_date is not None and row.end_date is not None
    has_days = bool(row.week_days and row.week_days.strip())

    if date_type is DateType.EVERY_DAY:
        return EveryDay()
    if date_type is DateType.DATE_RANGE:
        if not has_range:
            return Incomplete("date range without start/end date")
        return DateRange(row.start_date, row.end_date)
    if date_type is DateType.WEEK_DAYS:
        if not has_days:
            return Incomplete("week days missing")
        return WeekDays(parse_week_days(row.week_days))
    if not has_range:
        return Incomplete("date range without start/end date")
    if not has_days:
        return Incomplete("week days missing")
    return DateRangeWeekDays(row.start_date, row.end_date, parse_week_days(row.week_days))


def _condition_for(row: Filter) -> Condition:
    condition_type = ConditionType(row.condition_type or ConditionType.NONE.value)

    if condition_type is ConditionType.LAST_MINUTE:
        if row.anticipation_hours is None:
            return Incomplete("anticipation hours missing")
        return LastMinute(row.anticipation_hours)
    if condition_type is ConditionType.LONG_STAY:
        if row.min_days is None:
            return Incomplete("min days missing")
        return LongStay(row.min_days)
    return NoCondition()


def rule_from_filter(row: Filter) -> Rule:
    """Build an immutable :class:`Rule` from a persisted filter row."""
    return Rule(
        id=row.id,
        name=row.name,
        value=row.value,
        increment=bool(row.increment),
        activated=bool(row.activated),
        applicability=_applicability_for(row),
        condition=_condition_for(row),
        description=row.description,
    )
