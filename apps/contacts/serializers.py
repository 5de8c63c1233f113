"""Serializers for contact messages."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import ContactMessage


class ContactMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactMessage
        fields = ["id", "name", "email", "phone", "subject", "message", "status", "created_at"]
        read_only_fields = ["id", "status", "created_at"]
        extra_kwargs = {
            "email": {"error_messages": {"invalid": "Email invalide"}},
            "phone": {"required": False, "allow_blank": True},
        }
