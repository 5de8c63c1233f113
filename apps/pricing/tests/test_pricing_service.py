from datetime import date, datetime
from decimal import Decimal

import pytest

from apps.pricing.models import DatePeriod, PricingSettings, Season
from apps.pricing.services import (
    CopyYearError,
    PeriodOverlapError,
    SourceYearEmptyError,
    available_years,
    calculate_price,
    copy_periods_from_year,
    delete_season,
    find_periods_overlapping,
    get_default_price_per_night,
    get_min_nights_for_period,
    get_public_grid,
    get_season_for_date,
    validate_no_overlap,
)


@pytest.fixture
def seasons():
    low = Season.objects.create(name="Basse saison", price_per_night=Decimal("80"), color="#10B981", order=1)
    mid = Season.objects.create(name="Moyenne saison", price_per_night=Decimal("120"), color="#F59E0B", order=2)
    high = Season.objects.create(
        name="Haute saison",
        price_per_night=Decimal("150"),
        weekly_night_rate=Decimal("100"),
        min_nights=7,
        color="#F97316",
        order=3,
    )
    DatePeriod.objects.create(season=low, start_date=date(2025, 1, 1), end_date=date(2025, 4, 1), year=2025)
    DatePeriod.objects.create(season=mid, start_date=date(2025, 4, 1), end_date=date(2025, 7, 1), year=2025)
    DatePeriod.objects.create(season=high, start_date=date(2025, 7, 1), end_date=date(2025, 9, 1), year=2025)
    DatePeriod.objects.create(season=low, start_date=date(2025, 11, 1), end_date=date(2026, 1, 1), year=2025)
    return {"low": low, "mid": mid, "high": high}


@pytest.mark.django_db
def test_default_price_settings_created_lazily():
    assert not PricingSettings.objects.exists()

    assert get_default_price_per_night() == Decimal("100")
    assert PricingSettings.objects.count() == 1


@pytest.mark.django_db
def test_calculate_price_across_two_seasons(seasons):
    result = calculate_price(date(2025, 3, 30), date(2025, 4, 3))

    assert result.total_price == Decimal("400")
    assert [(d.season_name, d.nights) for d in result.details] == [
        ("Basse saison", 2),
        ("Moyenne saison", 2),
    ]
    assert result.details[0].season_id == seasons["low"].id


@pytest.mark.django_db
def test_calculate_price_without_catalog_uses_fallback():
    settings_obj = PricingSettings.load()
    settings_obj.default_price_per_night = Decimal("90")
    settings_obj.save()

    result = calculate_price(date(2025, 6, 1), date(2025, 6, 4))

    assert result.total_price == Decimal("270")
    assert result.uncovered_days == 3
    assert result.details == ()
    assert result.min_nights_required == 3


@pytest.mark.django_db
def test_calculate_price_ignores_time_of_day(seasons):
    result = calculate_price(datetime(2025, 3, 30, 23, 30), datetime(2025, 4, 3, 0, 15))

    assert result.total_nights == 4
    assert result.total_price == Decimal("400")


@pytest.mark.django_db
def test_period_filed_under_previous_year_is_found(seasons):
    # 1 Nov 2025 -> 1 Jan 2026 is filed under 2025
    result = calculate_price(date(2025, 12, 28), date(2026, 1, 2))

    assert result.details[0].season_name == "Basse saison"
    assert result.details[0].nights == 4
    assert result.uncovered_days == 1


@pytest.mark.django_db
def test_period_of_an_earlier_year_is_ignored(seasons):
    winter = Season.objects.create(name="Hiver", price_per_night=Decimal("200"), min_nights=7, order=4)
    DatePeriod.objects.create(season=winter, start_date=date(2024, 11, 1), end_date=date(2025, 1, 15), year=2024)

    result = calculate_price(date(2025, 1, 5), date(2025, 1, 8))

    assert [d.season_name for d in result.details] == ["Basse saison"]
    assert result.total_price == Decimal("240")
    assert result.min_nights_required == 3
    assert get_min_nights_for_period(date(2025, 1, 5), date(2025, 1, 8)) == 3
    assert get_season_for_date(date(2025, 1, 5)) == seasons["low"]


@pytest.mark.django_db
def test_min_nights_is_the_highest_of_the_seasons_crossed(seasons):
    result = calculate_price(date(2025, 6, 28), date(2025, 7, 3))

    assert [(d.season_name, d.nights) for d in result.details] == [
        ("Moyenne saison", 3),
        ("Haute saison", 2),
    ]
    assert result.min_nights_required == 7
    assert get_min_nights_for_period(date(2025, 6, 28), date(2025, 7, 3)) == 7


@pytest.mark.django_db
def test_weekly_stay_in_high_season(seasons):
    result = calculate_price(date(2025, 7, 5), date(2025, 7, 12))

    assert result.is_weekly_rate
    assert result.total_price == Decimal("700")
    assert result.min_nights_required == 7


@pytest.mark.django_db
def test_min_nights_for_period(seasons):
    assert get_min_nights_for_period(date(2025, 7, 10), date(2025, 7, 12)) == 7
    assert get_min_nights_for_period(date(2025, 5, 1), date(2025, 5, 3)) == 3
    assert get_min_nights_for_period(date(2030, 5, 1), date(2030, 5, 3)) == 3


@pytest.mark.django_db
def test_find_periods_overlapping_is_sorted_and_half_open(seasons):
    periods = find_periods_overlapping([2025], date(2025, 4, 1), date(2025, 7, 2))

    assert [p.season.name for p in periods] == ["Moyenne saison", "Haute saison"]


@pytest.mark.django_db
def test_season_for_date(seasons):
    assert get_season_for_date(date(2025, 7, 1)) == seasons["high"]
    assert get_season_for_date(date(2025, 10, 1)) is None


@pytest.mark.django_db
def test_public_grid_orders_by_season_then_start(seasons):
    grid = get_public_grid(2025)

    assert grid["year"] == 2025
    names = [row["season_name"] for row in grid["periods"]]
    assert names == ["Basse saison", "Basse saison", "Moyenne saison", "Haute saison"]
    assert grid["periods"][0]["start_date"] == date(2025, 1, 1)
    assert grid["periods"][1]["start_date"] == date(2025, 11, 1)
    high_row = grid["periods"][3]
    assert high_row["weekly_price"] == Decimal("700")
    assert grid["periods"][0]["weekly_price"] == Decimal("560")
    assert high_row["min_nights"] == 7
    assert high_row["color"] == "#F97316"


@pytest.mark.django_db
def test_validate_no_overlap_rules(seasons):
    # Adjacent ranges are fine
    validate_no_overlap(date(2025, 9, 1), date(2025, 11, 1), 2025)
    # Same interval in another year is fine
    validate_no_overlap(date(2025, 1, 1), date(2025, 4, 1), 2026)

    with pytest.raises(PeriodOverlapError):
        validate_no_overlap(date(2025, 3, 15), date(2025, 4, 15), 2025)
    with pytest.raises(PeriodOverlapError):
        validate_no_overlap(date(2025, 2, 1), date(2025, 3, 1), 2025)
    with pytest.raises(PeriodOverlapError):
        validate_no_overlap(date(2024, 12, 1), date(2025, 12, 31), 2025)


@pytest.mark.django_db
def test_validate_no_overlap_excludes_edited_period(seasons):
    period = DatePeriod.objects.get(year=2025, start_date=date(2025, 4, 1))

    validate_no_overlap(date(2025, 4, 1), date(2025, 6, 15), 2025, exclude_period_id=period.id)


@pytest.mark.django_db
def test_copy_periods_from_year_shifts_dates(seasons):
    copied = copy_periods_from_year(2025, 2026)

    assert copied == 4
    shifted = list(DatePeriod.objects.filter(year=2026).order_by("start_date"))
    assert [(p.start_date, p.end_date) for p in shifted] == [
        (date(2026, 1, 1), date(2026, 4, 1)),
        (date(2026, 4, 1), date(2026, 7, 1)),
        (date(2026, 7, 1), date(2026, 9, 1)),
        (date(2026, 11, 1), date(2027, 1, 1)),
    ]
    assert available_years() == [2025, 2026]


@pytest.mark.django_db
def test_copy_periods_handles_leap_day():
    season = Season.objects.create(name="Hiver", price_per_night=Decimal("70"))
    DatePeriod.objects.create(season=season, start_date=date(2024, 2, 1), end_date=date(2024, 2, 29), year=2024)

    copy_periods_from_year(2024, 2025)

    period = DatePeriod.objects.get(year=2025)
    assert period.end_date == date(2025, 2, 28)


@pytest.mark.django_db
def test_copy_periods_errors(seasons):
    with pytest.raises(CopyYearError):
        copy_periods_from_year(2025, 2025)
    with pytest.raises(SourceYearEmptyError):
        copy_periods_from_year(2030, 2031)

    copy_periods_from_year(2025, 2026)
    with pytest.raises(CopyYearError):
        copy_periods_from_year(2025, 2026)


@pytest.mark.django_db
def test_delete_season_reports_removed_periods(seasons):
    deleted = delete_season(seasons["low"])

    assert deleted == 2
    assert not DatePeriod.objects.filter(season_id=seasons["low"].id).exists()


@pytest.mark.django_db
def test_period_year_defaults_to_start_year():
    season = Season.objects.create(name="Printemps", price_per_night=Decimal("110"))
    period = DatePeriod.objects.create(season=season, start_date=date(2027, 4, 1), end_date=date(2027, 5, 1))

    assert period.year == 2027
