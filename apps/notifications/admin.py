"""Admin registration for document e-mails."""

from __future__ import annotations

from django.contrib import admin

from .models import ContractSnapshot, EmailLog, InvoiceSnapshot


@admin.register(EmailLog)
class EmailLogAdmin(admin.ModelAdmin):
    list_display = ("subject", "recipient_email", "booking", "status", "sent_at")
    list_filter = ("status",)
    search_fields = ("recipient_email", "recipient_name", "subject")
    readonly_fields = ("sent_at", "failed_at")


@admin.register(ContractSnapshot)
class ContractSnapshotAdmin(admin.ModelAdmin):
    list_display = ("booking", "client_last_name", "start_date", "total_price", "created_at")


@admin.register(InvoiceSnapshot)
class InvoiceSnapshotAdmin(admin.ModelAdmin):
    list_display = ("invoice_number", "booking", "total_price", "created_at")
    search_fields = ("invoice_number", "client_last_name")
