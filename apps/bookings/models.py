"""Booking domain models: guests (clients) and stays."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange

MAX_OCCUPANTS = 6


class Client(models.Model):
    """Locataire figurant sur le contrat et la facture."""

    first_name = models.CharField(_("Prénom"), max_length=100)
    last_name = models.CharField(_("Nom"), max_length=100)
    email = models.EmailField(_("Email"), blank=True)
    address = models.CharField(_("Adresse"), max_length=255)
    city = models.CharField(_("Ville"), max_length=100)
    postal_code = models.CharField(_("Code postal"), max_length=20)
    country = models.CharField(_("Pays"), max_length=100, default="France")
    phone = models.CharField(_("Téléphone"), max_length=30)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Client")
        verbose_name_plural = _("Clients")
        ordering = ["last_name", "first_name"]

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Booking(models.Model):
    """Réservation du logement."""

    class Status(models.TextChoices):
        PENDING = "pending", _("En attente")
        CONFIRMED = "confirmed", _("Confirmée")
        CANCELLED = "cancelled", _("Annulée")

    class BookingType(models.TextChoices):
        DIRECT = "direct", _("Directe")
        EXTERNAL = "external", _("Plateforme externe")
        PERSONAL = "personal", _("Personnelle")

    class Source(models.TextChoices):
        ABRITEL = "abritel", _("Abritel")
        AIRBNB = "airbnb", _("Airbnb")
        BOOKING_COM = "booking_com", _("Booking.com")
        PERSONNEL = "personnel", _("Personnel")
        FAMILLE = "famille", _("Famille")
        OTHER = "other", _("Autre")

    start_date = models.DateField(_("Arrivée"))
    end_date = models.DateField(_("Départ"))
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    booking_type = models.CharField(
        max_length=16,
        choices=BookingType.choices,
        default=BookingType.DIRECT,
    )
    source = models.CharField(max_length=16, choices=Source.choices, blank=True)
    source_custom_name = models.CharField(
        max_length=100,
        blank=True,
        help_text=_("Nom de la plateforme quand la source est « Autre »."),
    )
    label = models.CharField(max_length=255, blank=True)
    external_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Montant encaissé par la plateforme externe."),
    )
    notes = models.TextField(blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    primary_client = models.ForeignKey(
        Client,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="primary_bookings",
    )
    secondary_client = models.ForeignKey(
        Client,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="secondary_bookings",
    )
    occupants_count = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_OCCUPANTS)],
    )
    adults_count = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_OCCUPANTS)],
    )
    rental_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    tourist_tax_included = models.BooleanField(default=False)
    cleaning_included = models.BooleanField(default=False)
    cleaning_offered = models.BooleanField(default=False)
    linen_included = models.BooleanField(default=False)
    linen_offered = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Réservation")
        verbose_name_plural = _("Réservations")
        ordering = ["-start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["start_date", "end_date"], name="booking_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.as_range()}"

    def as_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def is_editable(self) -> bool:
        return self.status == self.Status.PENDING

    def mark_confirmed(self) -> None:
        self.status = self.Status.CONFIRMED
        self.save(update_fields=["status", "updated_at"])

    def mark_cancelled(self) -> None:
        self.status = self.Status.CANCELLED
        self.save(update_fields=["status", "updated_at"])
