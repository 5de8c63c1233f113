from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.billing import compute_booking_prices
from apps.bookings.models import Booking
from apps.pricing.models import DatePeriod, Season


@pytest.fixture
def rates(settings):
    settings.RENTAL_RATES = {
        "cleaning": "80",
        "linen_per_person": "15",
        "tourist_tax_per_adult_night": "0.80",
        "security_deposit": "500",
        "deposit_percent": "30",
    }
    return settings.RENTAL_RATES


@pytest.mark.django_db
def test_options_are_added_to_rental(rates):
    booking = Booking.objects.create(
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 8),
        occupants_count=4,
        adults_count=2,
        rental_price=Decimal("700"),
        cleaning_included=True,
        linen_included=True,
        tourist_tax_included=True,
    )

    prices = compute_booking_prices(booking)

    assert prices.nights_count == 7
    assert prices.cleaning_price == Decimal("80")
    assert prices.linen_price == Decimal("60")
    assert prices.tourist_tax_price == Decimal("11.20")
    assert prices.total_price == Decimal("851.20")
    assert prices.deposit_amount == Decimal("255")
    assert prices.balance_amount == Decimal("596.20")
    assert prices.price_details == ()


@pytest.mark.django_db
def test_offered_options_cost_nothing(rates):
    booking = Booking.objects.create(
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 4),
        occupants_count=2,
        rental_price=Decimal("300"),
        cleaning_included=True,
        cleaning_offered=True,
        linen_included=True,
        linen_offered=True,
    )

    prices = compute_booking_prices(booking)

    assert prices.cleaning_price == Decimal("0")
    assert prices.linen_price == Decimal("0")
    assert prices.total_price == Decimal("300")
    assert prices.deposit_amount == Decimal("90")


@pytest.mark.django_db
def test_season_breakdown_only_when_several_seasons(rates):
    low = Season.objects.create(name="Basse saison", price_per_night=Decimal("80"))
    high = Season.objects.create(name="Haute saison", price_per_night=Decimal("150"))
    DatePeriod.objects.create(season=low, start_date=date(2025, 6, 1), end_date=date(2025, 7, 1), year=2025)
    DatePeriod.objects.create(season=high, start_date=date(2025, 7, 1), end_date=date(2025, 9, 1), year=2025)
    across = Booking.objects.create(start_date=date(2025, 6, 28), end_date=date(2025, 7, 3))
    inside = Booking.objects.create(start_date=date(2025, 6, 10), end_date=date(2025, 6, 14))

    across_prices = compute_booking_prices(across, include_price_details=True)
    inside_prices = compute_booking_prices(inside, include_price_details=True)

    assert [d.season_name for d in across_prices.price_details] == ["Basse saison", "Haute saison"]
    assert across_prices.has_season_breakdown
    assert not inside_prices.has_season_breakdown
