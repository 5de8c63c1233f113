"""Unit tests for the pure pricing engine (no database)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from apps.pricing.domain import PricedPeriod, SeasonRate, calculate, min_nights_required
from shared.domain.value_objects import DateRange

FALLBACK = Decimal("100")

LOW = SeasonRate(id=1, name="Basse saison", price_per_night=Decimal("80"), min_nights=3)
MID = SeasonRate(id=2, name="Moyenne saison", price_per_night=Decimal("120"), min_nights=3)
HIGH = SeasonRate(
    id=3,
    name="Haute saison",
    price_per_night=Decimal("150"),
    weekly_night_rate=Decimal("100"),
    min_nights=7,
)


def _period(start: date, end: date, season: SeasonRate) -> PricedPeriod:
    return PricedPeriod(dates=DateRange(start, end), season=season)


LOW_Q1 = _period(date(2025, 1, 1), date(2025, 4, 1), LOW)
MID_Q2 = _period(date(2025, 4, 1), date(2025, 7, 1), MID)


def test_stay_crossing_two_seasons_produces_two_rows() -> None:
    result = calculate(DateRange(date(2025, 3, 30), date(2025, 4, 3)), (LOW_Q1, MID_Q2), FALLBACK)

    assert result.total_price == Decimal("400")
    assert result.total_nights == 4
    assert result.uncovered_days == 0
    assert not result.has_uncovered_days
    assert [(d.season_name, d.nights, d.subtotal) for d in result.details] == [
        ("Basse saison", 2, Decimal("160")),
        ("Moyenne saison", 2, Decimal("240")),
    ]
    assert result.details[0].end_date == date(2025, 4, 1)
    assert result.details[1].start_date == date(2025, 4, 1)


def test_no_periods_falls_back_to_default_price() -> None:
    result = calculate(DateRange(date(2025, 6, 1), date(2025, 6, 4)), (), FALLBACK)

    assert result.total_price == Decimal("300")
    assert result.uncovered_days == 3
    assert result.has_uncovered_days
    assert result.details == ()
    assert result.min_nights_required == 3
    assert result.default_price_per_night == FALLBACK


def test_weekly_rate_applies_to_whole_week_stay() -> None:
    summer = _period(date(2025, 7, 1), date(2025, 8, 16), HIGH)

    result = calculate(DateRange(date(2025, 7, 5), date(2025, 7, 12)), (summer,), FALLBACK)

    assert result.is_weekly_rate
    assert len(result.details) == 1
    assert result.details[0].price_per_night == Decimal("100")
    assert result.details[0].subtotal == Decimal("700")
    assert result.total_price == Decimal("700")
    assert result.min_nights_required == 7


def test_short_stay_uses_nightly_rate_even_when_weekly_is_defined() -> None:
    summer = _period(date(2025, 7, 1), date(2025, 8, 16), HIGH)

    result = calculate(DateRange(date(2025, 7, 5), date(2025, 7, 8)), (summer,), FALLBACK)

    assert not result.is_weekly_rate
    assert result.total_price == Decimal("450")


def test_weekly_rate_is_decided_on_the_whole_stay() -> None:
    # 3 nights in the high season and 4 in the mid season: each sub-span is
    # shorter than a week, the stay is not.
    summer = _period(date(2025, 6, 28), date(2025, 7, 1), HIGH)
    spring = _period(date(2025, 6, 1), date(2025, 6, 28), MID)

    result = calculate(DateRange(date(2025, 6, 24), date(2025, 7, 1)), (spring, summer), FALLBACK)

    assert result.is_weekly_rate
    mid_row, high_row = result.details
    assert mid_row.nights == 4
    assert mid_row.price_per_night == Decimal("120")
    assert high_row.nights == 3
    assert high_row.price_per_night == Decimal("100")
    assert result.total_price == Decimal("780")


def test_adjacent_periods_of_same_season_are_merged() -> None:
    first = _period(date(2025, 1, 1), date(2025, 2, 1), LOW)
    second = _period(date(2025, 2, 1), date(2025, 3, 1), LOW)

    result = calculate(DateRange(date(2025, 1, 30), date(2025, 2, 3)), (first, second), FALLBACK)

    assert len(result.details) == 1
    row = result.details[0]
    assert row.start_date == date(2025, 1, 30)
    assert row.end_date == date(2025, 2, 3)
    assert row.nights == 4
    assert row.subtotal == Decimal("320")


def test_gap_between_periods_is_priced_at_fallback() -> None:
    first = _period(date(2025, 1, 1), date(2025, 1, 10), LOW)
    second = _period(date(2025, 1, 12), date(2025, 2, 1), LOW)

    result = calculate(DateRange(date(2025, 1, 8), date(2025, 1, 14)), (first, second), FALLBACK)

    assert result.uncovered_days == 2
    assert len(result.details) == 2
    assert result.total_price == Decimal("80") * 4 + FALLBACK * 2
    assert result.total_nights == sum(d.nights for d in result.details) + result.uncovered_days


def test_period_end_date_belongs_to_next_period() -> None:
    result = calculate(DateRange(date(2025, 4, 1), date(2025, 4, 2)), (LOW_Q1, MID_Q2), FALLBACK)

    assert [d.season_name for d in result.details] == ["Moyenne saison"]
    assert result.total_price == Decimal("120")


def test_min_nights_only_counts_touched_seasons() -> None:
    summer = _period(date(2025, 7, 1), date(2025, 8, 16), HIGH)

    result = calculate(DateRange(date(2025, 6, 20), date(2025, 6, 25)), (MID_Q2, summer), FALLBACK)

    assert result.min_nights_required == 3


def test_min_nights_is_the_highest_of_two_seasons() -> None:
    summer = _period(date(2025, 7, 1), date(2025, 8, 16), HIGH)

    result = calculate(DateRange(date(2025, 6, 28), date(2025, 7, 3)), (MID_Q2, summer), FALLBACK)

    assert [(d.season_name, d.nights) for d in result.details] == [
        ("Moyenne saison", 3),
        ("Haute saison", 2),
    ]
    assert result.total_price == Decimal("660")
    assert result.min_nights_required == 7
    assert min_nights_required((MID_Q2, summer)) == 7


def test_min_nights_floor_is_three() -> None:
    relaxed = SeasonRate(id=9, name="Hors saison", price_per_night=Decimal("60"), min_nights=1)
    period = _period(date(2025, 11, 1), date(2026, 1, 1), relaxed)

    assert min_nights_required((period,)) == 3
    assert min_nights_required(()) == 3


@pytest.mark.parametrize(
    "start,end",
    [
        (date(2025, 3, 1), date(2025, 3, 2)),
        (date(2025, 3, 25), date(2025, 4, 10)),
        (date(2024, 12, 20), date(2025, 1, 5)),
        (date(2025, 6, 25), date(2025, 7, 20)),
    ],
)
def test_nights_are_fully_accounted_for(start: date, end: date) -> None:
    result = calculate(DateRange(start, end), (LOW_Q1, MID_Q2), FALLBACK)

    assert result.total_nights == (end - start).days
    assert result.total_nights == sum(d.nights for d in result.details) + result.uncovered_days
    assert result.total_price == sum((d.subtotal for d in result.details), Decimal("0")) + FALLBACK * result.uncovered_days
