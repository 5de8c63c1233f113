"""Serializers for seasons, date periods, settings and price calculations."""

from __future__ import annotations

from typing import Any

from rest_framework import serializers  # type: ignore

from .models import MAX_PERIOD_YEAR, MIN_PERIOD_YEAR, DatePeriod, PricingSettings, Season
from .services import PeriodOverlapError, validate_no_overlap


class SeasonPeriodSerializer(serializers.ModelSerializer):
    class Meta:
        model = DatePeriod
        fields = ["id", "start_date", "end_date", "year"]


class SeasonSerializer(serializers.ModelSerializer):
    """Saison avec le résumé de ses plages de dates."""

    date_periods = SeasonPeriodSerializer(many=True, read_only=True)

    class Meta:
        model = Season
        fields = [
            "id",
            "name",
            "price_per_night",
            "weekly_night_rate",
            "min_nights",
            "color",
            "order",
            "date_periods",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "date_periods", "created_at", "updated_at"]


class SeasonWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Season
        fields = [
            "name",
            "price_per_night",
            "weekly_night_rate",
            "min_nights",
            "color",
            "order",
        ]
        extra_kwargs = {
            "color": {"required": False, "allow_blank": True},
            "weekly_night_rate": {"required": False},
        }

    def validate(self, attrs):  # type: ignore
        instance = self.instance
        price = attrs.get("price_per_night", getattr(instance, "price_per_night", None))
        weekly = attrs.get("weekly_night_rate", getattr(instance, "weekly_night_rate", None))
        if weekly is not None and price is not None and weekly > price:
            raise serializers.ValidationError(
                {"weekly_night_rate": "Le tarif semaine ne peut pas dépasser le prix par nuit."}
            )
        return attrs


class DatePeriodSeasonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Season
        fields = ["id", "name", "price_per_night", "color"]


class DatePeriodSerializer(serializers.ModelSerializer):
    season = DatePeriodSeasonSerializer(read_only=True)

    class Meta:
        model = DatePeriod
        fields = ["id", "start_date", "end_date", "year", "season", "created_at", "updated_at"]
        read_only_fields = fields


class DatePeriodWriteSerializer(serializers.ModelSerializer):
    """Création / modification d'une plage de dates avec contrôle de chevauchement."""

    season_id = serializers.PrimaryKeyRelatedField(source="season", queryset=Season.objects.all())
    year = serializers.IntegerField(min_value=MIN_PERIOD_YEAR, max_value=MAX_PERIOD_YEAR, required=False)

    class Meta:
        model = DatePeriod
        fields = ["start_date", "end_date", "year", "season_id"]

    def validate(self, attrs):  # type: ignore
        instance = self.instance
        start = attrs.get("start_date", getattr(instance, "start_date", None))
        end = attrs.get("end_date", getattr(instance, "end_date", None))
        if start is None or end is None:
            raise serializers.ValidationError("Les dates de début et de fin sont obligatoires.")
        if start >= end:
            raise serializers.ValidationError("La date de début doit être antérieure à la date de fin.")

        year = attrs.get("year")
        if year is None:
            year = instance.year if instance is not None else start.year
        attrs["year"] = year

        try:
            validate_no_overlap(
                start,
                end,
                year,
                exclude_period_id=instance.pk if instance is not None else None,
            )
        except PeriodOverlapError as exc:
            raise serializers.ValidationError({"non_field_errors": [str(exc)]})
        return attrs


class CopyYearSerializer(serializers.Serializer):
    source_year = serializers.IntegerField(min_value=MIN_PERIOD_YEAR, max_value=MAX_PERIOD_YEAR)
    target_year = serializers.IntegerField(min_value=MIN_PERIOD_YEAR, max_value=MAX_PERIOD_YEAR)


class PricingSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = PricingSettings
        fields = ["default_price_per_night", "updated_at"]
        read_only_fields = ["updated_at"]


class StayPeriodSerializer(serializers.Serializer):
    """Validates an arrival/departure pair before it reaches the pricing engine."""

    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["start_date"] >= attrs["end_date"]:
            raise serializers.ValidationError("La date de fin doit être postérieure à la date de début.")
        return attrs


class PriceDetailSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    nights = serializers.IntegerField()
    season_id = serializers.IntegerField()
    season_name = serializers.CharField()
    price_per_night = serializers.DecimalField(max_digits=12, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class PriceCalculationSerializer(serializers.Serializer):
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_nights = serializers.IntegerField()
    is_weekly_rate = serializers.BooleanField()
    min_nights_required = serializers.IntegerField()
    details = PriceDetailSerializer(many=True)
    has_uncovered_days = serializers.BooleanField()
    uncovered_days = serializers.IntegerField()
    default_price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2)


class PublicGridPeriodSerializer(serializers.Serializer):
    season_name = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2)
    weekly_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    min_nights = serializers.IntegerField()
    color = serializers.CharField(allow_null=True)


class PublicGridSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    periods = PublicGridPeriodSerializer(many=True)
