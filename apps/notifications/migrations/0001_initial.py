import django.db.models.deletion
from django.db import migrations, models


def _snapshot_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("client_first_name", models.CharField(max_length=100)),
        ("client_last_name", models.CharField(max_length=100)),
        ("client_address", models.CharField(max_length=255)),
        ("client_city", models.CharField(max_length=100)),
        ("client_postal_code", models.CharField(max_length=20)),
        ("client_country", models.CharField(max_length=100)),
        ("start_date", models.DateField()),
        ("end_date", models.DateField()),
        ("rental_price", models.DecimalField(decimal_places=2, max_digits=10)),
        ("total_price", models.DecimalField(decimal_places=2, max_digits=10)),
        ("deposit_amount", models.DecimalField(decimal_places=2, max_digits=10)),
        ("balance_amount", models.DecimalField(decimal_places=2, max_digits=10)),
        ("cleaning_price", models.DecimalField(decimal_places=2, max_digits=10)),
        ("linen_price", models.DecimalField(decimal_places=2, max_digits=10)),
        ("tourist_tax_price", models.DecimalField(decimal_places=2, max_digits=10)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        (
            "booking",
            models.ForeignKey(
                on_delete=django.db.models.deletion.CASCADE,
                related_name="+",
                to="bookings.booking",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ContractSnapshot",
            fields=_snapshot_fields()
            + [
                ("client_phone", models.CharField(blank=True, max_length=30)),
                ("occupants_count", models.PositiveSmallIntegerField()),
                ("cleaning_offered", models.BooleanField(default=False)),
                ("linen_offered", models.BooleanField(default=False)),
            ],
            options={
                "verbose_name": "Contrat envoyé",
                "verbose_name_plural": "Contrats envoyés",
            },
        ),
        migrations.CreateModel(
            name="InvoiceSnapshot",
            fields=_snapshot_fields()
            + [
                ("invoice_number", models.CharField(max_length=64)),
                ("nights_count", models.PositiveIntegerField()),
                ("price_details", models.JSONField(blank=True, default=list)),
            ],
            options={
                "verbose_name": "Facture envoyée",
                "verbose_name_plural": "Factures envoyées",
            },
        ),
        migrations.CreateModel(
            name="EmailLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("recipient_email", models.EmailField(max_length=254)),
                ("recipient_name", models.CharField(max_length=200)),
                ("document_types", models.JSONField(default=list)),
                ("subject", models.CharField(max_length=255)),
                ("personal_message", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(choices=[("SENT", "Envoyé"), ("FAILED", "Échec")], max_length=8),
                ),
                ("failure_reason", models.TextField(blank=True)),
                ("sent_at", models.DateTimeField(auto_now_add=True)),
                ("failed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="email_logs",
                        to="bookings.booking",
                    ),
                ),
                (
                    "contract_snapshot",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="email_log",
                        to="notifications.contractsnapshot",
                    ),
                ),
                (
                    "invoice_snapshot",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="email_log",
                        to="notifications.invoicesnapshot",
                    ),
                ),
            ],
            options={
                "verbose_name": "Envoi d'e-mail",
                "verbose_name_plural": "Envois d'e-mails",
                "ordering": ["-sent_at"],
            },
        ),
    ]
