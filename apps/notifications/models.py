"""E-mail delivery of booking documents.

Every attempt to send a contract and/or an invoice to a client leaves an
``EmailLog``. The values printed on each document are frozen in a
``ContractSnapshot`` / ``InvoiceSnapshot`` so later edits of the booking do
not change what the log says was sent.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class DocumentType(models.TextChoices):
    CONTRACT = "contract", _("Contrat")
    INVOICE = "invoice", _("Facture")


class SnapshotBase(models.Model):
    booking = models.ForeignKey("bookings.Booking", on_delete=models.CASCADE, related_name="+")
    client_first_name = models.CharField(max_length=100)
    client_last_name = models.CharField(max_length=100)
    client_address = models.CharField(max_length=255)
    client_city = models.CharField(max_length=100)
    client_postal_code = models.CharField(max_length=20)
    client_country = models.CharField(max_length=100)
    start_date = models.DateField()
    end_date = models.DateField()
    rental_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    deposit_amount = models.DecimalField(max_digits=10, decimal_places=2)
    balance_amount = models.DecimalField(max_digits=10, decimal_places=2)
    cleaning_price = models.DecimalField(max_digits=10, decimal_places=2)
    linen_price = models.DecimalField(max_digits=10, decimal_places=2)
    tourist_tax_price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True


class ContractSnapshot(SnapshotBase):
    client_phone = models.CharField(max_length=30, blank=True)
    occupants_count = models.PositiveSmallIntegerField()
    cleaning_offered = models.BooleanField(default=False)
    linen_offered = models.BooleanField(default=False)

    class Meta:
        verbose_name = _("Contrat envoyé")
        verbose_name_plural = _("Contrats envoyés")

    def __str__(self) -> str:
        return f"Contract snapshot #{self.pk} (booking {self.booking_id})"


class InvoiceSnapshot(SnapshotBase):
    invoice_number = models.CharField(max_length=64)
    nights_count = models.PositiveIntegerField()
    price_details = models.JSONField(default=list, blank=True)

    class Meta:
        verbose_name = _("Facture envoyée")
        verbose_name_plural = _("Factures envoyées")

    def __str__(self) -> str:
        return f"Invoice {self.invoice_number}"


class EmailLog(models.Model):
    """Trace d'un envoi de documents par e-mail."""

    class Status(models.TextChoices):
        SENT = "SENT", _("Envoyé")
        FAILED = "FAILED", _("Échec")

    booking = models.ForeignKey("bookings.Booking", on_delete=models.CASCADE, related_name="email_logs")
    recipient_email = models.EmailField()
    recipient_name = models.CharField(max_length=200)
    document_types = models.JSONField(default=list)
    subject = models.CharField(max_length=255)
    personal_message = models.TextField(blank=True)
    status = models.CharField(max_length=8, choices=Status.choices)
    failure_reason = models.TextField(blank=True)
    contract_snapshot = models.OneToOneField(
        ContractSnapshot,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="email_log",
    )
    invoice_snapshot = models.OneToOneField(
        InvoiceSnapshot,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="email_log",
    )
    sent_at = models.DateTimeField(auto_now_add=True)
    failed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-sent_at"]
        verbose_name = _("Envoi d'e-mail")
        verbose_name_plural = _("Envois d'e-mails")

    def __str__(self) -> str:
        return f"{self.subject} -> {self.recipient_email} ({self.status})"
