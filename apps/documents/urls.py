"""URL routing for booking documents."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import ContractDownloadView, InvoiceDownloadView

urlpatterns = [
    path("bookings/<int:booking_id>/contract/", ContractDownloadView.as_view(), name="document-contract"),
    path("bookings/<int:booking_id>/invoice/", InvoiceDownloadView.as_view(), name="document-invoice"),
]
