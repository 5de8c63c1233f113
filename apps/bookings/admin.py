"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("last_name", "first_name", "email", "phone", "city")
    search_fields = ("last_name", "first_name", "email")


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "start_date",
        "end_date",
        "status",
        "booking_type",
        "source",
        "primary_client",
        "rental_price",
        "created_at",
    )
    list_filter = ("status", "booking_type", "source", "start_date")
    search_fields = ("label", "primary_client__last_name", "primary_client__email")
    readonly_fields = ("created_at", "updated_at")
