"""Sending contracts and invoices to clients by e-mail."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import structlog
from django.conf import settings  # type: ignore
from django.core.mail import EmailMessage  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.billing import compute_booking_prices
from apps.bookings.models import Booking
from apps.documents.data import ContractData, InvoiceData, as_json, build_contract_data, build_invoice_data
from apps.documents.formatting import format_date
from apps.documents.services import RenderedDocument, render_contract, render_invoice

from .models import ContractSnapshot, DocumentType, EmailLog, InvoiceSnapshot

logger = structlog.get_logger(__name__)


class DocumentEmailError(Exception):
    """Raised when documents cannot be sent for a booking."""


class EmailDeliveryError(Exception):
    """Raised after a failed attempt; the FAILED log is attached."""

    def __init__(self, message: str, email_log: EmailLog) -> None:
        super().__init__(message)
        self.email_log = email_log


def build_email_subject(document_types: Iterable[str]) -> str:
    types = list(document_types)
    name = settings.RENTAL_PROPERTY["name"]
    if DocumentType.CONTRACT in types and DocumentType.INVOICE in types:
        return f"Votre contrat de location et votre facture - {name}"
    if DocumentType.CONTRACT in types:
        return f"Votre contrat de location - {name}"
    return f"Votre facture - {name}"


def build_email_body(booking: Booking, recipient_name: str, personal_message: str = "") -> str:
    landlord = settings.LANDLORD
    lines = [
        f"Bonjour {recipient_name},",
        "",
        f"Veuillez trouver ci-joint les documents relatifs à votre séjour du "
        f"{format_date(booking.start_date)} au {format_date(booking.end_date)} "
        f"à {settings.RENTAL_PROPERTY['name']}.",
    ]
    if personal_message:
        lines += ["", personal_message]
    lines += ["", "Cordialement,", landlord["name"], landlord["phone"]]
    return "\n".join(lines)


def _client_fields(data: ContractData | InvoiceData) -> dict:
    client = data.client
    return {
        "client_first_name": client.first_name,
        "client_last_name": client.last_name,
        "client_address": client.address,
        "client_city": client.city,
        "client_postal_code": client.postal_code,
        "client_country": client.country,
    }


def _amount_fields(data: ContractData | InvoiceData) -> dict:
    return {
        "start_date": data.start_date,
        "end_date": data.end_date,
        "rental_price": data.rental_price,
        "total_price": data.total_price,
        "deposit_amount": data.deposit_amount,
        "balance_amount": data.balance_amount,
        "cleaning_price": data.cleaning_price,
        "linen_price": data.linen_price,
        "tourist_tax_price": data.tourist_tax_price,
    }


def create_contract_snapshot(booking: Booking, data: ContractData) -> ContractSnapshot:
    return ContractSnapshot.objects.create(
        booking=booking,
        client_phone=data.client.phone,
        occupants_count=data.occupants_count,
        cleaning_offered=data.cleaning_offered,
        linen_offered=data.linen_offered,
        **_client_fields(data),
        **_amount_fields(data),
    )


def create_invoice_snapshot(booking: Booking, data: InvoiceData) -> InvoiceSnapshot:
    return InvoiceSnapshot.objects.create(
        booking=booking,
        invoice_number=data.invoice_number,
        nights_count=data.nights_count,
        price_details=as_json(data)["price_details"],
        **_client_fields(data),
        **_amount_fields(data),
    )


def _deliver(
    *,
    subject: str,
    body: str,
    recipient_email: str,
    attachments: Sequence[RenderedDocument],
) -> None:
    message = EmailMessage(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[recipient_email],
        reply_to=[settings.LANDLORD["email"]],
    )
    for document in attachments:
        message.attach(document.filename, document.content, document.content_type)
    message.send(fail_silently=False)


def send_document_email(
    *,
    booking: Booking,
    document_types: Sequence[str],
    recipient_email: str,
    recipient_name: str,
    personal_message: str = "",
) -> EmailLog:
    """
    Sends the requested documents of a booking in a single e-mail.

    Raises:
        DocumentEmailError: booking cancelled or without primary client
        EmailDeliveryError: rendering or sending failed (a FAILED log is kept)
    """
    if booking.status == Booking.Status.CANCELLED:
        raise DocumentEmailError("Impossible d'envoyer des documents pour une réservation annulée.")
    if booking.primary_client_id is None:
        raise DocumentEmailError("Aucun client principal associé à cette réservation.")

    wants_contract = DocumentType.CONTRACT in document_types
    wants_invoice = DocumentType.INVOICE in document_types
    prices = compute_booking_prices(booking, include_price_details=wants_invoice)
    contract_data = build_contract_data(booking, prices) if wants_contract else None
    invoice_data = build_invoice_data(booking, prices) if wants_invoice else None

    with transaction.atomic():
        contract_snapshot = create_contract_snapshot(booking, contract_data) if contract_data else None
        invoice_snapshot = create_invoice_snapshot(booking, invoice_data) if invoice_data else None

    subject = build_email_subject(document_types)
    log_fields = {
        "booking": booking,
        "recipient_email": recipient_email,
        "recipient_name": recipient_name,
        "document_types": list(document_types),
        "subject": subject,
        "personal_message": personal_message,
        "contract_snapshot": contract_snapshot,
        "invoice_snapshot": invoice_snapshot,
    }

    failure_reason: Optional[str] = None
    try:
        attachments = []
        if contract_data is not None:
            attachments.append(render_contract(booking, contract_data))
        if invoice_data is not None:
            attachments.append(render_invoice(booking, invoice_data))
    except Exception as exc:
        logger.error("document_render_failed", booking_id=booking.pk, error=str(exc), exc_info=True)
        failure_reason = f"Erreur de génération PDF : {exc}"
    else:
        try:
            _deliver(
                subject=subject,
                body=build_email_body(booking, recipient_name, personal_message),
                recipient_email=recipient_email,
                attachments=attachments,
            )
        except Exception as exc:
            logger.error("document_email_failed", booking_id=booking.pk, error=str(exc), exc_info=True)
            failure_reason = f"Erreur d'envoi : {exc}"

    if failure_reason is not None:
        email_log = EmailLog.objects.create(
            status=EmailLog.Status.FAILED,
            failure_reason=failure_reason,
            failed_at=timezone.now(),
            **log_fields,
        )
        raise EmailDeliveryError("L'envoi de l'email a échoué.", email_log)

    email_log = EmailLog.objects.create(status=EmailLog.Status.SENT, **log_fields)
    logger.info(
        "document_email_sent",
        booking_id=booking.pk,
        recipient=recipient_email,
        document_types=list(document_types),
    )
    return email_log
