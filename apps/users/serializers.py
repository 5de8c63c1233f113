"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profil minimal renvoyé après connexion."""

    class Meta:
        model = User
        fields = ["id", "email", "role"]
        read_only_fields = fields
