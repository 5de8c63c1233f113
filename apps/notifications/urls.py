"""URL routing for document e-mails."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import BookingEmailLogView, SendDocumentEmailView

urlpatterns = [
    path("send/", SendDocumentEmailView.as_view(), name="email-send"),
    path("booking/<int:booking_id>/", BookingEmailLogView.as_view(), name="email-booking-logs"),
]
