from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Client",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100, verbose_name="Prénom")),
                ("last_name", models.CharField(max_length=100, verbose_name="Nom")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                ("address", models.CharField(max_length=255, verbose_name="Adresse")),
                ("city", models.CharField(max_length=100, verbose_name="Ville")),
                ("postal_code", models.CharField(max_length=20, verbose_name="Code postal")),
                ("country", models.CharField(default="France", max_length=100, verbose_name="Pays")),
                ("phone", models.CharField(max_length=30, verbose_name="Téléphone")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Client",
                "verbose_name_plural": "Clients",
                "ordering": ["last_name", "first_name"],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField(verbose_name="Arrivée")),
                ("end_date", models.DateField(verbose_name="Départ")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "En attente"), ("confirmed", "Confirmée"), ("cancelled", "Annulée")],
                        default="pending",
                        max_length=16,
                    ),
                ),
                (
                    "booking_type",
                    models.CharField(
                        choices=[("direct", "Directe"), ("external", "Plateforme externe"), ("personal", "Personnelle")],
                        default="direct",
                        max_length=16,
                    ),
                ),
                (
                    "source",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("abritel", "Abritel"),
                            ("airbnb", "Airbnb"),
                            ("booking_com", "Booking.com"),
                            ("personnel", "Personnel"),
                            ("famille", "Famille"),
                            ("other", "Autre"),
                        ],
                        max_length=16,
                    ),
                ),
                (
                    "source_custom_name",
                    models.CharField(
                        blank=True,
                        help_text="Nom de la plateforme quand la source est « Autre ».",
                        max_length=100,
                    ),
                ),
                ("label", models.CharField(blank=True, max_length=255)),
                (
                    "external_amount",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Montant encaissé par la plateforme externe.",
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                (
                    "occupants_count",
                    models.PositiveSmallIntegerField(
                        default=1,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(6),
                        ],
                    ),
                ),
                (
                    "adults_count",
                    models.PositiveSmallIntegerField(
                        default=1,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(6),
                        ],
                    ),
                ),
                (
                    "rental_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("tourist_tax_included", models.BooleanField(default=False)),
                ("cleaning_included", models.BooleanField(default=False)),
                ("cleaning_offered", models.BooleanField(default=False)),
                ("linen_included", models.BooleanField(default=False)),
                ("linen_offered", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "primary_client",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="primary_bookings",
                        to="bookings.client",
                    ),
                ),
                (
                    "secondary_client",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="secondary_bookings",
                        to="bookings.client",
                    ),
                ),
            ],
            options={
                "verbose_name": "Réservation",
                "verbose_name_plural": "Réservations",
                "ordering": ["-start_date"],
                "indexes": [
                    models.Index(fields=["start_date", "end_date"], name="booking_dates_idx"),
                    models.Index(fields=["status"], name="booking_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gt", models.F("start_date"))),
                        name="booking_valid_dates",
                    ),
                ],
            },
        ),
    ]
