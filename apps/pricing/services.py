"""Catalog access and orchestration around the pricing engine."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from django.db import transaction  # type: ignore

from shared.domain.value_objects import DateRange, overlap_q

from .domain import PriceCalculation, PricedPeriod, calculate, min_nights_required
from .models import DatePeriod, PricingSettings, Season

logger = logging.getLogger(__name__)


class PeriodOverlapError(Exception):
    """Raised when a date period overlaps another period of the same year."""


class CopyYearError(Exception):
    """Raised when the periods of a year cannot be copied."""


class SourceYearEmptyError(CopyYearError):
    """Raised when the source year has no period to copy."""


def _query_years(stay: DateRange) -> range:
    # Periods are filed under a single year and only overlap-checked within it,
    # so only the years holding the nights of the stay are read.
    return stay.years()


def find_periods_overlapping(years: Iterable[int], start_date: date, end_date: date) -> tuple[PricedPeriod, ...]:
    """Periods of the given years overlapping [start_date, end_date), joined with their season."""

    queryset = (
        DatePeriod.objects.select_related("season")
        .filter(year__in=list(years))
        .filter(overlap_q(start_date, end_date))
        .order_by("start_date")
    )
    return tuple(period.to_priced_period() for period in queryset)


def get_default_price_per_night() -> Decimal:
    return PricingSettings.load().default_price_per_night


def calculate_price(start_date: date, end_date: date) -> PriceCalculation:
    """
    Calcule le prix d'un séjour [start_date, end_date).

    Raises:
        ValueError: si start_date >= end_date
    """
    stay = DateRange(start_date, end_date)
    periods = find_periods_overlapping(_query_years(stay), stay.start_date, stay.end_date)
    result = calculate(stay, periods, get_default_price_per_night())
    logger.debug(
        "Price calculated for %s: total=%s nights=%s uncovered=%s",
        stay,
        result.total_price,
        result.total_nights,
        result.uncovered_days,
    )
    return result


def get_min_nights_for_period(start_date: date, end_date: date) -> int:
    """Minimum stay imposed by the seasons overlapping [start_date, end_date)."""

    stay = DateRange(start_date, end_date)
    periods = find_periods_overlapping(_query_years(stay), stay.start_date, stay.end_date)
    return min_nights_required(periods)


def get_season_for_date(day: date) -> Optional[Season]:
    """Season governing a single night, if any."""

    period = (
        DatePeriod.objects.select_related("season")
        .filter(year=day.year)
        .filter(start_date__lte=day, end_date__gt=day)
        .order_by("start_date")
        .first()
    )
    return period.season if period else None


def get_public_grid(year: int) -> dict[str, Any]:
    """Public price grid of a year, ordered by season display order then start date."""

    periods = (
        DatePeriod.objects.select_related("season")
        .filter(year=year)
        .order_by("season__order", "start_date")
    )
    rows = []
    for period in periods:
        season = period.season
        weekly_base = season.weekly_night_rate if season.weekly_night_rate is not None else season.price_per_night
        rows.append(
            {
                "season_name": season.name,
                "start_date": period.start_date,
                "end_date": period.end_date,
                "price_per_night": season.price_per_night,
                "weekly_price": weekly_base * 7,
                "min_nights": season.min_nights,
                "color": season.color or None,
            }
        )
    return {"year": year, "periods": rows}


def validate_no_overlap(
    start_date: date,
    end_date: date,
    year: int,
    *,
    exclude_period_id: Optional[int] = None,
) -> None:
    """Ensure [start_date, end_date) does not overlap another period filed under `year`."""

    queryset = DatePeriod.objects.filter(year=year).filter(overlap_q(start_date, end_date))
    if exclude_period_id is not None:
        queryset = queryset.exclude(pk=exclude_period_id)
    if queryset.exists():
        logger.info("Rejected overlapping period %s - %s for year %s", start_date, end_date, year)
        raise PeriodOverlapError("Cette plage de dates chevauche une plage existante pour cette année.")


def available_years() -> list[int]:
    return list(DatePeriod.objects.order_by("year").values_list("year", flat=True).distinct())


def _shift_year(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year + years, day=28)


@transaction.atomic
def copy_periods_from_year(source_year: int, target_year: int) -> int:
    """Copy every period of source_year into target_year, shifting dates. Returns the count."""

    if source_year == target_year:
        raise CopyYearError("L'année source et l'année cible doivent être différentes.")

    existing = DatePeriod.objects.filter(year=target_year).count()
    if existing:
        raise CopyYearError(
            f"L'année {target_year} contient déjà {existing} plage(s). Supprimez-les d'abord."
        )

    source_periods = list(DatePeriod.objects.filter(year=source_year).order_by("start_date"))
    if not source_periods:
        raise SourceYearEmptyError(f"Aucune plage de dates trouvée pour l'année {source_year}.")

    shift = target_year - source_year
    DatePeriod.objects.bulk_create(
        [
            DatePeriod(
                season_id=period.season_id,
                start_date=_shift_year(period.start_date, shift),
                end_date=_shift_year(period.end_date, shift),
                year=target_year,
            )
            for period in source_periods
        ]
    )
    logger.info("Copied %s periods from %s to %s", len(source_periods), source_year, target_year)
    return len(source_periods)


@transaction.atomic
def delete_season(season: Season) -> int:
    """Delete a season with its periods. Returns how many periods went with it."""

    deleted_periods = season.date_periods.count()
    season.delete()
    logger.info("Season %s deleted with %s periods", season.name, deleted_periods)
    return deleted_periods
