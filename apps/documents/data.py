"""
Document data

Flat, immutable views of a booking as printed on the contract and the
invoice. The same values feed the PDF generators and the snapshots stored
when documents are e-mailed, so a resent document can be traced back to
exactly what the client received.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Tuple

from apps.bookings.billing import BookingPrices, compute_booking_prices
from apps.bookings.models import Booking

from .formatting import invoice_number


class MissingClientError(Exception):
    """Raised when a document is requested for a booking without a primary client."""

    def __init__(self, booking_id: int) -> None:
        super().__init__("La réservation n'a pas de client principal.")
        self.booking_id = booking_id


@dataclass(frozen=True)
class ClientIdentity:
    first_name: str
    last_name: str
    address: str
    city: str
    postal_code: str
    country: str
    phone: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class InvoiceDetailLine:
    nights: int
    season_name: str
    price_per_night: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class ContractData:
    client: ClientIdentity
    start_date: date
    end_date: date
    occupants_count: int
    rental_price: Decimal
    total_price: Decimal
    deposit_amount: Decimal
    balance_amount: Decimal
    cleaning_price: Decimal
    linen_price: Decimal
    tourist_tax_price: Decimal
    cleaning_offered: bool
    linen_offered: bool


@dataclass(frozen=True)
class InvoiceData:
    client: ClientIdentity
    invoice_number: str
    start_date: date
    end_date: date
    nights_count: int
    rental_price: Decimal
    total_price: Decimal
    deposit_amount: Decimal
    balance_amount: Decimal
    cleaning_price: Decimal
    linen_price: Decimal
    tourist_tax_price: Decimal
    price_details: Tuple[InvoiceDetailLine, ...] = ()

    @property
    def has_season_breakdown(self) -> bool:
        return len(self.price_details) > 1


def _client_identity(booking: Booking) -> ClientIdentity:
    client = booking.primary_client
    if client is None:
        raise MissingClientError(booking.pk)
    return ClientIdentity(
        first_name=client.first_name,
        last_name=client.last_name,
        address=client.address,
        city=client.city,
        postal_code=client.postal_code,
        country=client.country,
        phone=client.phone,
    )


def build_contract_data(booking: Booking, prices: BookingPrices | None = None) -> ContractData:
    client = _client_identity(booking)
    prices = prices or compute_booking_prices(booking)
    return ContractData(
        client=client,
        start_date=booking.start_date,
        end_date=booking.end_date,
        occupants_count=booking.occupants_count,
        rental_price=prices.rental_price,
        total_price=prices.total_price,
        deposit_amount=prices.deposit_amount,
        balance_amount=prices.balance_amount,
        cleaning_price=prices.cleaning_price,
        linen_price=prices.linen_price,
        tourist_tax_price=prices.tourist_tax_price,
        cleaning_offered=booking.cleaning_offered,
        linen_offered=booking.linen_offered,
    )


def build_invoice_data(booking: Booking, prices: BookingPrices | None = None) -> InvoiceData:
    client = _client_identity(booking)
    prices = prices or compute_booking_prices(booking, include_price_details=True)
    return InvoiceData(
        client=client,
        invoice_number=invoice_number(booking.start_date, client.last_name),
        start_date=booking.start_date,
        end_date=booking.end_date,
        nights_count=prices.nights_count,
        rental_price=prices.rental_price,
        total_price=prices.total_price,
        deposit_amount=prices.deposit_amount,
        balance_amount=prices.balance_amount,
        cleaning_price=prices.cleaning_price,
        linen_price=prices.linen_price,
        tourist_tax_price=prices.tourist_tax_price,
        price_details=tuple(
            InvoiceDetailLine(
                nights=detail.nights,
                season_name=detail.season_name,
                price_per_night=detail.price_per_night,
                subtotal=detail.subtotal,
            )
            for detail in prices.price_details
        ),
    )


def as_json(value: Any) -> Any:
    """JSON-ready copy of a document dataclass (dates in ISO, decimals as strings)."""

    def convert(item: Any) -> Any:
        if isinstance(item, dict):
            return {key: convert(val) for key, val in item.items()}
        if isinstance(item, (list, tuple)):
            return [convert(val) for val in item]
        if isinstance(item, date):
            return item.isoformat()
        if isinstance(item, Decimal):
            return str(item)
        return item

    return convert(asdict(value))
