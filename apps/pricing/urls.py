"""URL routing for the pricing domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import (
    CalculatePriceView,
    DatePeriodViewSet,
    MinNightsView,
    PricingSettingsView,
    PublicGridView,
    SeasonViewSet,
)

router = DefaultRouter()
router.register(r"seasons", SeasonViewSet, basename="season")
router.register(r"date-periods", DatePeriodViewSet, basename="date-period")

urlpatterns = [
    path("pricing/calculate/", CalculatePriceView.as_view(), name="pricing-calculate"),
    path("pricing/public-grid/", PublicGridView.as_view(), name="pricing-public-grid"),
    path("pricing/min-nights/", MinNightsView.as_view(), name="pricing-min-nights"),
    path("settings/", PricingSettingsView.as_view(), name="pricing-settings"),
    path("", include(router.urls)),
]
