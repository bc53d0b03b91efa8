"""Tests for the per-night rule expansion."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from stayhub.pricing.engine import applicable_rules_by_night, stay_nights, total_nights
from stayhub.pricing.rules import (
    DateRange,
    EveryDay,
    LastMinute,
    LongStay,
    NoCondition,
    Rule,
    WeekDays,
)

FRIDAY = date(2025, 1, 10)
SATURDAY = date(2025, 1, 11)
SUNDAY = date(2025, 1, 12)
NOW = datetime(2025, 1, 1, 9, 0)


def _rule(rule_id, applicability=EveryDay(), condition=NoCondition(), activated=True) -> Rule:
    return Rule(
        id=rule_id,
        name=f"rule-{rule_id}",
        value=Decimal("10.00"),
        increment=False,
        activated=activated,
        applicability=applicability,
        condition=condition,
    )


def test_total_nights():
    assert total_nights(FRIDAY, SUNDAY) == 2
    assert total_nights(date(2025, 12, 30), date(2026, 1, 2)) == 3


def test_stay_nights_excludes_check_out():
    assert list(stay_nights(FRIDAY, SUNDAY)) == [FRIDAY, SATURDAY]


def test_every_day_and_weekend_rule_over_friday_and_saturday():
    every_day = _rule(1)
    weekend = _rule(2, WeekDays(frozenset({6, 7})))

    result = applicable_rules_by_night(FRIDAY, SUNDAY, [weekend, every_day], now=NOW)

    assert list(result) == [FRIDAY, SATURDAY]
    assert result[FRIDAY] == [every_day]
    assert result[SATURDAY] == [every_day, weekend]


def test_every_night_has_a_key_even_without_rules():
    result = applicable_rules_by_night(FRIDAY, FRIDAY + timedelta(days=4), [], now=NOW)
    assert len(result) == 4
    assert all(rules == [] for rules in result.values())


def test_inactive_rules_are_ignored():
    result = applicable_rules_by_night(FRIDAY, SATURDAY, [_rule(1, activated=False)], now=NOW)
    assert result == {FRIDAY: []}


def test_rules_keep_ascending_id_order():
    rules = [_rule(5), _rule(2), _rule(9)]
    result = applicable_rules_by_night(FRIDAY, SATURDAY, rules, now=NOW)
    assert [rule.id for rule in result[FRIDAY]] == [2, 5, 9]


def test_long_stay_covers_every_night_or_none():
    long_stay = _rule(1, condition=LongStay(7))

    week = applicable_rules_by_night(FRIDAY, FRIDAY + timedelta(days=7), [long_stay], now=NOW)
    assert all(rules == [long_stay] for rules in week.values())

    six_nights = applicable_rules_by_night(FRIDAY, FRIDAY + timedelta(days=6), [long_stay], now=NOW)
    assert all(rules == [] for rules in six_nights.values())


def test_last_minute_uses_the_supplied_clock():
    last_minute = _rule(1, condition=LastMinute(48))

    close = applicable_rules_by_night(FRIDAY, SUNDAY, [last_minute], now=datetime(2025, 1, 9, 8, 0))
    assert close[FRIDAY] == [last_minute]
    assert close[SATURDAY] == [last_minute]

    far = applicable_rules_by_night(FRIDAY, SUNDAY, [last_minute], now=NOW)
    assert far[FRIDAY] == []


def test_date_range_only_on_covered_nights():
    season = _rule(1, DateRange(SATURDAY, date(2025, 1, 20)))
    result = applicable_rules_by_night(FRIDAY, date(2025, 1, 13), [season], now=NOW)
    assert result[FRIDAY] == []
    assert result[SATURDAY] == [season]
    assert result[SUNDAY] == [season]
