"""Per-night expansion of the pricing rules that apply to a stay."""

from collections.abc import Iterable, Iterator
from datetime import date, datetime, timedelta

from stayhub.pricing.rules import Rule, is_applicable_on_date, meets_condition


def total_nights(check_in: date, check_out: date) -> int:
    """Number of nights in ``[check_in, check_out)``."""
    return (check_out - check_in).days


def stay_nights(check_in: date, check_out: date) -> Iterator[date]:
    """Yield each night of the stay, from ``check_in`` up to but excluding ``check_out``."""
    night = check_in
    while night < check_out:
        yield night
        night += timedelta(days=1)


def applicable_rules_by_night(
    check_in: date,
    check_out: date,
    rules: Iterable[Rule],
    now: datetime | None = None,
) -> dict[date, list[Rule]]:
    """Map every night of the stay to the rules that apply on it.

    Only activated rules are considered, in ascending id order, and each
    night's list keeps that order. The condition is evaluated once for the
    whole stay, so a LONG_STAY or LAST_MINUTE rule covers either every night
    or none. Callers must ensure ``check_in < check_out``.

    Returns an insertion-ordered dict with exactly ``total_nights`` keys.
    """
    current = now if now is not None else datetime.now()
    active = sorted((rule for rule in rules if rule.activated), key=lambda rule: rule.id)
    qualifying = [rule for rule in active if meets_condition(rule, check_in, check_out, current)]

    return {
        night: [rule for rule in qualifying if is_applicable_on_date(rule, night)]
        for night in stay_nights(check_in, check_out)
    }
