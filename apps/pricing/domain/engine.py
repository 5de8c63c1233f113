"""
Pricing Engine

Partitions a stay into sub-ranges governed by seasonal rate periods and
prices each of them.

Rules:
1. Nights are counted on calendar dates, departure day excluded.
2. A stay of 7 nights or more switches every season that defines a weekly
   per-night rate to that rate. The decision is taken once for the whole
   stay, never per season segment.
3. Consecutive segments of the same season collapse into one detail row.
4. Nights outside every period are charged the fallback price and reported
   as uncovered. They produce no detail row.
5. The binding minimum stay is the largest min_nights among the seasons
   actually touched, never below DEFAULT_MIN_NIGHTS.

Everything here is pure: periods come in as an immutable, start-sorted
tuple and results go out as frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Tuple

from shared.domain.base import ValueObject
from shared.domain.value_objects import DateRange

DEFAULT_MIN_NIGHTS = 3
WEEKLY_RATE_THRESHOLD = 7


@dataclass(frozen=True)
class SeasonRate(ValueObject):
    """Rates of one season, detached from the ORM."""
    id: int
    name: str
    price_per_night: Decimal
    weekly_night_rate: Optional[Decimal] = None
    min_nights: int = DEFAULT_MIN_NIGHTS

    def rate_for(self, is_weekly_rate: bool) -> Decimal:
        if is_weekly_rate and self.weekly_night_rate is not None:
            return self.weekly_night_rate
        return self.price_per_night


@dataclass(frozen=True)
class PricedPeriod(ValueObject):
    """A date period of the catalog joined with its season."""
    dates: DateRange
    season: SeasonRate

    def contains(self, day: date) -> bool:
        return self.dates.contains(day)


@dataclass(frozen=True)
class PriceDetail(ValueObject):
    start_date: date
    end_date: date
    nights: int
    season_id: int
    season_name: str
    price_per_night: Decimal
    subtotal: Decimal

    def extended(self, end_date: date, nights: int, subtotal: Decimal) -> 'PriceDetail':
        """Copy of this row grown by a contiguous segment of the same season."""
        return replace(
            self,
            end_date=end_date,
            nights=self.nights + nights,
            subtotal=self.subtotal + subtotal,
        )


@dataclass(frozen=True)
class PriceCalculation(ValueObject):
    total_price: Decimal
    total_nights: int
    is_weekly_rate: bool
    min_nights_required: int
    details: Tuple[PriceDetail, ...]
    has_uncovered_days: bool
    uncovered_days: int
    default_price_per_night: Decimal


def _find_period(periods: Sequence[PricedPeriod], day: date) -> Optional[PricedPeriod]:
    for period in periods:
        if period.contains(day):
            return period
    return None


def min_nights_required(periods: Iterable[PricedPeriod]) -> int:
    """Largest min_nights among the given periods' seasons, floored at the default."""
    required = DEFAULT_MIN_NIGHTS
    for period in periods:
        required = max(required, period.season.min_nights)
    return required


def calculate(
    stay: DateRange,
    periods: Sequence[PricedPeriod],
    default_price_per_night: Decimal,
) -> PriceCalculation:
    """
    Price a stay against the catalog periods overlapping it.

    Args:
        stay: Arrival (inclusive) to departure (exclusive)
        periods: Periods overlapping the stay, sorted by start date
        default_price_per_night: Fallback for nights outside every period

    Returns:
        PriceCalculation with per-season detail rows
    """
    total_nights = len(stay)
    is_weekly_rate = total_nights >= WEEKLY_RATE_THRESHOLD

    details: list[PriceDetail] = []
    touched: list[PricedPeriod] = []
    total = Decimal('0')
    uncovered_days = 0

    cursor = stay.start_date
    while cursor < stay.end_date:
        period = _find_period(periods, cursor)
        if period is None:
            uncovered_days += 1
            total += default_price_per_night
            cursor += timedelta(days=1)
            continue

        span_end = min(period.dates.end_date, stay.end_date)
        nights = (span_end - cursor).days
        rate = period.season.rate_for(is_weekly_rate)
        subtotal = rate * nights

        last = details[-1] if details else None
        if last is not None and last.end_date == cursor and last.season_id == period.season.id:
            details[-1] = last.extended(span_end, nights, subtotal)
        else:
            details.append(
                PriceDetail(
                    start_date=cursor,
                    end_date=span_end,
                    nights=nights,
                    season_id=period.season.id,
                    season_name=period.season.name,
                    price_per_night=rate,
                    subtotal=subtotal,
                )
            )

        total += subtotal
        touched.append(period)
        cursor = span_end

    return PriceCalculation(
        total_price=total,
        total_nights=total_nights,
        is_weekly_rate=is_weekly_rate,
        min_nights_required=min_nights_required(touched),
        details=tuple(details),
        has_uncovered_days=uncovered_days > 0,
        uncovered_days=uncovered_days,
        default_price_per_night=default_price_per_night,
    )
