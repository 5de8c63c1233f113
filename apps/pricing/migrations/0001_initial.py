from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PricingSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "default_price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("100.00"),
                        help_text="Appliqué aux nuits qui ne tombent dans aucune plage de dates.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                        verbose_name="Prix par défaut par nuit",
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Paramètres de tarification",
                "verbose_name_plural": "Paramètres de tarification",
            },
        ),
        migrations.CreateModel(
            name="Season",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="Nom")),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="Prix par nuit",
                    ),
                ),
                (
                    "weekly_night_rate",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Appliqué à chaque nuit des séjours de 7 nuits ou plus.",
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="Prix par nuit à la semaine",
                    ),
                ),
                (
                    "min_nights",
                    models.PositiveSmallIntegerField(
                        default=3,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Nuits minimum",
                    ),
                ),
                (
                    "color",
                    models.CharField(
                        blank=True,
                        max_length=7,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="La couleur doit être au format hexadécimal (#RRGGBB).",
                                regex="^#[0-9A-Fa-f]{6}$",
                            )
                        ],
                        verbose_name="Couleur",
                    ),
                ),
                ("order", models.PositiveSmallIntegerField(default=0, verbose_name="Ordre d'affichage")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Saison",
                "verbose_name_plural": "Saisons",
                "ordering": ["order", "name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("weekly_night_rate__isnull", True),
                            ("weekly_night_rate__lte", models.F("price_per_night")),
                            _connector="OR",
                        ),
                        name="season_weekly_rate_not_above_nightly",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="DatePeriod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField(verbose_name="Début (inclus)")),
                ("end_date", models.DateField(verbose_name="Fin (exclue)")),
                (
                    "year",
                    models.PositiveSmallIntegerField(
                        help_text="Année de rattachement, par défaut celle de la date de début.",
                        validators=[
                            django.core.validators.MinValueValidator(2020),
                            django.core.validators.MaxValueValidator(2100),
                        ],
                        verbose_name="Année",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "season",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="date_periods",
                        to="pricing.season",
                    ),
                ),
            ],
            options={
                "verbose_name": "Plage de dates",
                "verbose_name_plural": "Plages de dates",
                "ordering": ["year", "start_date"],
                "indexes": [
                    models.Index(fields=["year", "start_date", "end_date"], name="date_period_year_dates_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gt", models.F("start_date"))),
                        name="date_period_valid_range",
                    )
                ],
            },
        ),
    ]
