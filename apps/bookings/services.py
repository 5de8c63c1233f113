"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Optional

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.pricing.domain import PriceCalculation
from apps.pricing.services import calculate_price, get_min_nights_for_period
from shared.domain.value_objects import DateRange

from .models import Booking, Client

logger = logging.getLogger(__name__)

SOURCE_BOOKING_TYPES = {
    Booking.Source.ABRITEL: Booking.BookingType.EXTERNAL,
    Booking.Source.AIRBNB: Booking.BookingType.EXTERNAL,
    Booking.Source.BOOKING_COM: Booking.BookingType.EXTERNAL,
    Booking.Source.OTHER: Booking.BookingType.EXTERNAL,
    Booking.Source.PERSONNEL: Booking.BookingType.PERSONAL,
    Booking.Source.FAMILLE: Booking.BookingType.PERSONAL,
}


class BookingConflictError(Exception):
    """Raised when the requested dates overlap a non-cancelled booking."""

    def __init__(self, message: str, conflicting: Optional[Booking] = None) -> None:
        super().__init__(message)
        self.conflicting = conflicting


class MinimumStayError(Exception):
    """Raised when a stay is shorter than the seasons it touches allow."""

    def __init__(self, min_nights: int) -> None:
        super().__init__(f"Cette période nécessite un minimum de {min_nights} nuits.")
        self.min_nights = min_nights


class BookingStateError(Exception):
    """Raised when a booking is not in a state allowing the operation."""


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def booking_overlap_q(start_date: date, end_date: date) -> Q:
    """Bookings holding any day of [start_date, end_date], both ends included."""

    # A departure day is still held: the next arrival must come a day later.
    return Q(start_date__lte=end_date, end_date__gte=start_date)


def booking_type_for_source(source: str) -> str:
    return SOURCE_BOOKING_TYPES[source]


def find_conflicting_booking(
    start_date: date,
    end_date: date,
    *,
    exclude_booking_id: Optional[int] = None,
) -> Optional[Booking]:
    """First non-cancelled booking sharing a day with [start_date, end_date]."""

    queryset = (
        Booking.objects.exclude(status=Booking.Status.CANCELLED)
        .filter(booking_overlap_q(start_date, end_date))
        .order_by("start_date")
    )
    if exclude_booking_id is not None:
        queryset = queryset.exclude(pk=exclude_booking_id)

    queryset = _lock_queryset_if_possible(queryset)
    return queryset.first()


def ensure_dates_available(
    start_date: date,
    end_date: date,
    *,
    exclude_booking_id: Optional[int] = None,
) -> None:
    conflicting = find_conflicting_booking(start_date, end_date, exclude_booking_id=exclude_booking_id)
    if conflicting is not None:
        raise BookingConflictError("Ces dates sont déjà réservées ou indisponibles.", conflicting)


def ensure_minimum_stay(start_date: date, end_date: date) -> int:
    """Raise MinimumStayError when the stay is too short. Returns the requirement."""

    required = get_min_nights_for_period(start_date, end_date)
    nights = len(DateRange(start_date, end_date))
    if nights < required:
        logger.info("Stay %s - %s rejected: %s nights < %s", start_date, end_date, nights, required)
        raise MinimumStayError(required)
    return required


def conflict_summary(booking: Booking) -> dict[str, Any]:
    client = booking.primary_client
    return {
        "id": booking.pk,
        "source": booking.source or None,
        "label": booking.label or None,
        "client_name": client.full_name if client else None,
        "start_date": booking.start_date,
        "end_date": booking.end_date,
    }


def check_conflicts(
    start_date: date,
    end_date: date,
    *,
    exclude_booking_id: Optional[int] = None,
) -> dict[str, Any]:
    """Availability and minimum stay of a candidate stay, for the booking form."""

    conflicting = find_conflicting_booking(start_date, end_date, exclude_booking_id=exclude_booking_id)
    result: dict[str, Any] = {
        "has_conflict": conflicting is not None,
        "min_nights_required": get_min_nights_for_period(start_date, end_date),
    }
    if conflicting is not None:
        result["conflict_detail"] = conflict_summary(conflicting)
    return result


def _upsert_client(current: Optional[Client], data: Optional[dict[str, Any]]) -> Optional[Client]:
    if not data:
        return current
    if current is None:
        return Client.objects.create(**data)
    for field, value in data.items():
        setattr(current, field, value)
    current.save()
    return current


@transaction.atomic
def create_booking(*, user, data: dict[str, Any]) -> Booking:
    """
    Crée une réservation directe.

    Raises:
        BookingConflictError: dates déjà prises
        MinimumStayError: séjour trop court pour les saisons traversées
    """
    data = dict(data)
    start_date = data.pop("start_date")
    end_date = data.pop("end_date")

    ensure_dates_available(start_date, end_date)
    ensure_minimum_stay(start_date, end_date)

    primary_client = _upsert_client(None, data.pop("primary_client", None))
    secondary_client = _upsert_client(None, data.pop("secondary_client", None))

    if data.get("rental_price") is None:
        data["rental_price"] = calculate_price(start_date, end_date).total_price

    booking = Booking.objects.create(
        start_date=start_date,
        end_date=end_date,
        user=user,
        booking_type=Booking.BookingType.DIRECT,
        primary_client=primary_client,
        secondary_client=secondary_client,
        **data,
    )
    logger.info("Booking %s created for %s", booking.pk, booking.as_range())
    return booking


@transaction.atomic
def create_quick_booking(*, user, data: dict[str, Any]) -> Booking:
    """Blocks dates for an external platform or personal stay."""

    data = dict(data)
    start_date = data.pop("start_date")
    end_date = data.pop("end_date")

    ensure_dates_available(start_date, end_date)

    booking = Booking.objects.create(
        start_date=start_date,
        end_date=end_date,
        user=user,
        booking_type=booking_type_for_source(data["source"]),
        **data,
    )
    logger.info("Quick booking %s created from %s", booking.pk, booking.source)
    return booking


@transaction.atomic
def update_booking(booking: Booking, data: dict[str, Any]) -> Booking:
    """
    Met à jour une réservation en attente.

    Date changes re-run the availability and minimum stay checks; the
    `recalculate_price` flag replaces the rental price by the engine total.
    """
    if not booking.is_editable:
        raise BookingStateError("Seules les réservations en attente peuvent être modifiées.")

    data = dict(data)
    recalculate = data.pop("recalculate_price", False)
    start_date = data.pop("start_date", booking.start_date)
    end_date = data.pop("end_date", booking.end_date)
    if (start_date, end_date) != (booking.start_date, booking.end_date):
        ensure_dates_available(start_date, end_date, exclude_booking_id=booking.pk)
        ensure_minimum_stay(start_date, end_date)

    booking.start_date = start_date
    booking.end_date = end_date
    booking.primary_client = _upsert_client(booking.primary_client, data.pop("primary_client", None))
    booking.secondary_client = _upsert_client(booking.secondary_client, data.pop("secondary_client", None))

    for field, value in data.items():
        setattr(booking, field, value)

    if recalculate:
        booking.rental_price = calculate_price(start_date, end_date).total_price

    booking.save()
    return booking


def recalculate_booking_price(booking: Booking) -> PriceCalculation:
    return calculate_price(booking.start_date, booking.end_date)


def confirm_booking(booking: Booking) -> Booking:
    if booking.status == Booking.Status.CANCELLED:
        raise BookingStateError("Une réservation annulée ne peut pas être confirmée.")
    booking.mark_confirmed()
    logger.info("Booking %s confirmed", booking.pk)
    return booking


def cancel_booking(booking: Booking) -> Booking:
    booking.mark_cancelled()
    logger.info("Booking %s cancelled", booking.pk)
    return booking


def booked_dates() -> list[str]:
    """ISO dates held by non-cancelled bookings, departure day included, sorted."""

    days: set[date] = set()
    bookings = Booking.objects.exclude(status=Booking.Status.CANCELLED).only("start_date", "end_date")
    for booking in bookings:
        current = booking.start_date
        while current <= booking.end_date:
            days.add(current)
            current += timedelta(days=1)
    return [day.isoformat() for day in sorted(days)]
