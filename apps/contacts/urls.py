"""URL routing for the contact inbox."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import ContactMessageViewSet

router = DefaultRouter()
router.register(r"", ContactMessageViewSet, basename="contact")

urlpatterns = [
    path("", include(router.urls)),
]
