"""Seasonal pricing catalog: seasons, their date periods and the fallback rate."""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange

from .domain import DEFAULT_MIN_NIGHTS, PricedPeriod, SeasonRate

DEFAULT_PRICE_PER_NIGHT = Decimal("100.00")
MIN_PERIOD_YEAR = 2020
MAX_PERIOD_YEAR = 2100

HEX_COLOR_VALIDATOR = RegexValidator(
    regex=r"^#[0-9A-Fa-f]{6}$",
    message=_("La couleur doit être au format hexadécimal (#RRGGBB)."),
)


class Season(models.Model):
    """Saison tarifaire (basse, moyenne, haute...)."""

    name = models.CharField(_("Nom"), max_length=100)
    price_per_night = models.DecimalField(
        _("Prix par nuit"),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    weekly_night_rate = models.DecimalField(
        _("Prix par nuit à la semaine"),
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Appliqué à chaque nuit des séjours de 7 nuits ou plus."),
    )
    min_nights = models.PositiveSmallIntegerField(
        _("Nuits minimum"),
        default=DEFAULT_MIN_NIGHTS,
        validators=[MinValueValidator(1)],
    )
    color = models.CharField(
        _("Couleur"),
        max_length=7,
        blank=True,
        validators=[HEX_COLOR_VALIDATOR],
    )
    order = models.PositiveSmallIntegerField(_("Ordre d'affichage"), default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Saison")
        verbose_name_plural = _("Saisons")
        ordering = ["order", "name"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(weekly_night_rate__isnull=True)
                    | models.Q(weekly_night_rate__lte=models.F("price_per_night"))
                ),
                name="season_weekly_rate_not_above_nightly",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        if (
            self.weekly_night_rate is not None
            and self.price_per_night is not None
            and self.weekly_night_rate > self.price_per_night
        ):
            raise ValidationError(
                {"weekly_night_rate": _("Le tarif semaine ne peut pas dépasser le prix par nuit.")}
            )

    def to_rate(self) -> SeasonRate:
        return SeasonRate(
            id=self.pk,
            name=self.name,
            price_per_night=self.price_per_night,
            weekly_night_rate=self.weekly_night_rate,
            min_nights=self.min_nights,
        )


class DatePeriod(models.Model):
    """Plage de dates [début, fin) rattachée à une saison pour une année."""

    season = models.ForeignKey(
        Season,
        on_delete=models.CASCADE,
        related_name="date_periods",
    )
    start_date = models.DateField(_("Début (inclus)"))
    end_date = models.DateField(_("Fin (exclue)"))
    year = models.PositiveSmallIntegerField(
        _("Année"),
        validators=[MinValueValidator(MIN_PERIOD_YEAR), MaxValueValidator(MAX_PERIOD_YEAR)],
        help_text=_("Année de rattachement, par défaut celle de la date de début."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Plage de dates")
        verbose_name_plural = _("Plages de dates")
        ordering = ["year", "start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="date_period_valid_range",
            ),
        ]
        indexes = [
            models.Index(fields=["year", "start_date", "end_date"], name="date_period_year_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.season}: {self.as_range()}"

    def save(self, *args, **kwargs):  # type: ignore
        if not self.year and self.start_date:
            self.year = self.start_date.year
        super().save(*args, **kwargs)

    def as_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    def to_priced_period(self) -> PricedPeriod:
        return PricedPeriod(dates=self.as_range(), season=self.season.to_rate())


class PricingSettings(models.Model):
    """Paramètres de tarification (singleton)."""

    SINGLETON_PK = 1

    default_price_per_night = models.DecimalField(
        _("Prix par défaut par nuit"),
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_PRICE_PER_NIGHT,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text=_("Appliqué aux nuits qui ne tombent dans aucune plage de dates."),
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Paramètres de tarification")
        verbose_name_plural = _("Paramètres de tarification")

    def __str__(self) -> str:
        return f"Prix par défaut: {self.default_price_per_night}"

    def save(self, *args, **kwargs):  # type: ignore
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> "PricingSettings":
        obj, _created = cls.objects.get_or_create(pk=cls.SINGLETON_PK)
        return obj
