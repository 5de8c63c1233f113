"""Admin registration for the pricing catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import DatePeriod, PricingSettings, Season


class DatePeriodInline(admin.TabularInline):
    model = DatePeriod
    extra = 0
    fields = ("start_date", "end_date", "year")


@admin.register(Season)
class SeasonAdmin(admin.ModelAdmin):
    list_display = ("name", "price_per_night", "weekly_night_rate", "min_nights", "color", "order")
    ordering = ("order", "name")
    inlines = [DatePeriodInline]


@admin.register(DatePeriod)
class DatePeriodAdmin(admin.ModelAdmin):
    list_display = ("season", "start_date", "end_date", "year")
    list_filter = ("year", "season")
    ordering = ("year", "start_date")


@admin.register(PricingSettings)
class PricingSettingsAdmin(admin.ModelAdmin):
    list_display = ("default_price_per_night", "updated_at")
    readonly_fields = ("updated_at",)
