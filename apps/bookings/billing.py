"""
Booking billing

Turns a booking's rental price and options into the amounts printed on the
contract and the invoice:

- cleaning: flat fee when included, zero when offered
- linen: per occupant when included, zero when offered
- tourist tax: per adult and per night when included
- deposit: a percentage of the total, rounded to the unit; the rest is the balance
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

from django.conf import settings  # type: ignore

from apps.pricing.domain import PriceDetail

from .models import Booking
from .services import recalculate_booking_price


def rental_rates() -> dict[str, Decimal]:
    return {key: Decimal(str(value)) for key, value in settings.RENTAL_RATES.items()}


@dataclass(frozen=True)
class BookingPrices:
    rental_price: Decimal
    nights_count: int
    cleaning_price: Decimal
    linen_price: Decimal
    tourist_tax_price: Decimal
    total_price: Decimal
    deposit_amount: Decimal
    balance_amount: Decimal
    price_details: Tuple[PriceDetail, ...] = field(default_factory=tuple)

    @property
    def has_season_breakdown(self) -> bool:
        return len(self.price_details) > 1


def compute_booking_prices(booking: Booking, *, include_price_details: bool = False) -> BookingPrices:
    rates = rental_rates()
    nights = booking.nights
    rental_price = Decimal(booking.rental_price)

    cleaning_price = Decimal("0")
    if booking.cleaning_included and not booking.cleaning_offered:
        cleaning_price = rates["cleaning"]

    linen_price = Decimal("0")
    if booking.linen_included and not booking.linen_offered:
        linen_price = rates["linen_per_person"] * booking.occupants_count

    tourist_tax_price = Decimal("0")
    if booking.tourist_tax_included:
        tourist_tax_price = rates["tourist_tax_per_adult_night"] * booking.adults_count * nights

    total_price = rental_price + cleaning_price + linen_price + tourist_tax_price
    deposit_amount = (total_price * rates["deposit_percent"] / Decimal("100")).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )

    price_details: Tuple[PriceDetail, ...] = ()
    if include_price_details:
        price_details = recalculate_booking_price(booking).details

    return BookingPrices(
        rental_price=rental_price,
        nights_count=nights,
        cleaning_price=cleaning_price,
        linen_price=linen_price,
        tourist_tax_price=tourist_tax_price,
        total_price=total_price,
        deposit_amount=deposit_amount,
        balance_amount=total_price - deposit_amount,
        price_details=price_details,
    )
