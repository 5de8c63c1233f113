"""Rendering of booking documents to downloadable PDF files."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from django.utils.text import slugify  # type: ignore

from apps.bookings.models import Booking

from .contract import generate_contract
from .data import ContractData, InvoiceData, build_contract_data, build_invoice_data
from .invoice import generate_invoice

logger = structlog.get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class RenderedDocument:
    filename: str
    content: bytes
    content_type: str = PDF_CONTENT_TYPE


def contract_filename(data: ContractData) -> str:
    return f"contrat-{slugify(data.client.last_name)}-{data.start_date.isoformat()}.pdf"


def invoice_filename(data: InvoiceData) -> str:
    return f"facture-{data.invoice_number}.pdf"


def render_contract(booking: Booking, data: ContractData | None = None) -> RenderedDocument:
    """
    Builds the lease contract of a booking.

    Raises:
        MissingClientError: the booking has no primary client
    """
    data = data or build_contract_data(booking)
    document = RenderedDocument(filename=contract_filename(data), content=generate_contract(data))
    logger.info("contract_rendered", booking_id=booking.pk, size=len(document.content))
    return document


def render_invoice(booking: Booking, data: InvoiceData | None = None) -> RenderedDocument:
    """
    Builds the invoice of a booking.

    Raises:
        MissingClientError: the booking has no primary client
    """
    data = data or build_invoice_data(booking)
    document = RenderedDocument(filename=invoice_filename(data), content=generate_invoice(data))
    logger.info(
        "invoice_rendered",
        booking_id=booking.pk,
        invoice_number=data.invoice_number,
        size=len(document.content),
    )
    return document
