"""FilterSet definitions for date period listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import MAX_PERIOD_YEAR, MIN_PERIOD_YEAR, DatePeriod


class DatePeriodFilterSet(django_filters.FilterSet):
    """Out-of-range or non-numeric years are rejected with HTTP 400."""

    year = django_filters.NumberFilter(
        field_name="year",
        lookup_expr="exact",
        min_value=MIN_PERIOD_YEAR,
        max_value=MAX_PERIOD_YEAR,
    )
    season = django_filters.NumberFilter(field_name="season_id", lookup_expr="exact")

    class Meta:
        model = DatePeriod
        fields = ["year", "season"]
