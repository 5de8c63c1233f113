"""Serializers for document e-mails."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import ContractSnapshot, DocumentType, EmailLog, InvoiceSnapshot


class SendDocumentEmailSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    document_types = serializers.ListField(
        child=serializers.ChoiceField(choices=DocumentType.choices),
        min_length=1,
    )
    recipient_email = serializers.EmailField()
    recipient_name = serializers.CharField(max_length=200)
    personal_message = serializers.CharField(max_length=2000, required=False, allow_blank=True, default="")

    def validate_document_types(self, value):  # type: ignore
        return list(dict.fromkeys(value))


class ContractSnapshotSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContractSnapshot
        exclude = ["booking"]


class InvoiceSnapshotSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceSnapshot
        exclude = ["booking"]


class EmailLogSerializer(serializers.ModelSerializer):
    booking_id = serializers.ReadOnlyField()
    contract_snapshot = ContractSnapshotSerializer(read_only=True)
    invoice_snapshot = InvoiceSnapshotSerializer(read_only=True)

    class Meta:
        model = EmailLog
        fields = [
            "id",
            "booking_id",
            "recipient_email",
            "recipient_name",
            "document_types",
            "subject",
            "personal_message",
            "status",
            "failure_reason",
            "sent_at",
            "failed_at",
            "contract_snapshot",
            "invoice_snapshot",
        ]
        read_only_fields = fields
