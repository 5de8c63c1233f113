"""PDF download endpoints for the back office."""

from __future__ import annotations

from django.http import HttpResponse  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from apps.users.api.permissions import IsAdmin

from .data import MissingClientError
from .services import RenderedDocument, render_contract, render_invoice


def _attachment(document: RenderedDocument) -> HttpResponse:
    response = HttpResponse(document.content, content_type=document.content_type)
    response["Content-Disposition"] = f'attachment; filename="{document.filename}"'
    response["Content-Length"] = str(len(document.content))
    return response


class BookingDocumentView(APIView):
    """Base des téléchargements de documents d'une réservation."""

    permission_classes = [IsAdmin]
    render_document = None

    def get(self, request, booking_id: int):  # type: ignore
        booking = get_object_or_404(Booking.objects.select_related("primary_client"), pk=booking_id)
        try:
            document = self.render_document(booking)
        except MissingClientError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return _attachment(document)


class ContractDownloadView(BookingDocumentView):
    render_document = staticmethod(render_contract)


class InvoiceDownloadView(BookingDocumentView):
    render_document = staticmethod(render_invoice)
