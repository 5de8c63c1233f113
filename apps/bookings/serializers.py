"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import date

from rest_framework import serializers  # type: ignore

from .models import MAX_OCCUPANTS, Booking, Client


def _validate_stay(start_date: date, end_date: date) -> None:
    if start_date >= end_date:
        raise serializers.ValidationError("La date de départ doit être postérieure à la date d'arrivée.")


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = [
            "id",
            "first_name",
            "last_name",
            "email",
            "address",
            "city",
            "postal_code",
            "country",
            "phone",
        ]
        read_only_fields = ["id"]
        extra_kwargs = {
            "email": {"required": False, "allow_blank": True},
            "country": {"required": False},
        }


class BookingSerializer(serializers.ModelSerializer):
    """Détail d'une réservation avec ses clients."""

    user_email = serializers.ReadOnlyField(source="user.email")
    primary_client = ClientSerializer(read_only=True)
    secondary_client = ClientSerializer(read_only=True)
    nights = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "start_date",
            "end_date",
            "nights",
            "status",
            "booking_type",
            "source",
            "source_custom_name",
            "label",
            "external_amount",
            "notes",
            "user_email",
            "primary_client",
            "secondary_client",
            "occupants_count",
            "adults_count",
            "rental_price",
            "tourist_tax_included",
            "cleaning_included",
            "cleaning_offered",
            "linen_included",
            "linen_offered",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.ModelSerializer):
    """Réservation directe saisie depuis le formulaire."""

    primary_client = ClientSerializer(required=False)
    secondary_client = ClientSerializer(required=False)
    rental_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Booking
        fields = [
            "start_date",
            "end_date",
            "primary_client",
            "secondary_client",
            "occupants_count",
            "adults_count",
            "rental_price",
            "tourist_tax_included",
            "cleaning_included",
            "cleaning_offered",
            "linen_included",
            "linen_offered",
            "notes",
        ]
        extra_kwargs = {"notes": {"required": False, "allow_blank": True}}

    def validate(self, attrs):  # type: ignore
        _validate_stay(attrs["start_date"], attrs["end_date"])
        if attrs.get("adults_count", 1) > attrs.get("occupants_count", 1):
            raise serializers.ValidationError({"adults_count": "Plus d'adultes que d'occupants."})
        return attrs


class BookingUpdateSerializer(serializers.ModelSerializer):
    primary_client = ClientSerializer(required=False)
    secondary_client = ClientSerializer(required=False)
    recalculate_price = serializers.BooleanField(required=False, default=False)

    class Meta:
        model = Booking
        fields = [
            "start_date",
            "end_date",
            "primary_client",
            "secondary_client",
            "occupants_count",
            "adults_count",
            "rental_price",
            "recalculate_price",
            "tourist_tax_included",
            "cleaning_included",
            "cleaning_offered",
            "linen_included",
            "linen_offered",
            "label",
            "notes",
        ]
        extra_kwargs = {
            "label": {"required": False, "allow_blank": True},
            "notes": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        instance = self.instance
        _validate_stay(
            attrs.get("start_date", getattr(instance, "start_date", None)),
            attrs.get("end_date", getattr(instance, "end_date", None)),
        )
        return attrs


class QuickBookingSerializer(serializers.ModelSerializer):
    """Blocage rapide de dates (plateforme externe, usage personnel)."""

    source = serializers.ChoiceField(choices=Booking.Source.choices)
    occupants_count = serializers.IntegerField(min_value=1, max_value=MAX_OCCUPANTS, required=False)
    adults_count = serializers.IntegerField(min_value=1, max_value=MAX_OCCUPANTS, required=False, default=1)

    class Meta:
        model = Booking
        fields = [
            "start_date",
            "end_date",
            "source",
            "source_custom_name",
            "label",
            "external_amount",
            "occupants_count",
            "adults_count",
            "notes",
        ]
        extra_kwargs = {
            "source_custom_name": {"required": False, "allow_blank": True},
            "label": {"required": False, "allow_blank": True},
            "notes": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        _validate_stay(attrs["start_date"], attrs["end_date"])
        if attrs["source"] == Booking.Source.OTHER and not attrs.get("source_custom_name"):
            raise serializers.ValidationError(
                {"source_custom_name": "Précisez le nom de la source."}
            )
        return attrs


class CheckConflictsSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    booking_id = serializers.IntegerField(required=False)

    def validate(self, attrs):  # type: ignore
        _validate_stay(attrs["start_date"], attrs["end_date"])
        return attrs


class ConflictDetailSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    source = serializers.CharField(allow_null=True)
    label = serializers.CharField(allow_null=True)
    client_name = serializers.CharField(allow_null=True)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
