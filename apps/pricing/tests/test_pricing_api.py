"""Integration tests for the pricing catalog and calculator endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.pricing.models import DatePeriod, PricingSettings, Season
from apps.users.models import User


class PricingAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.user = User.objects.create_user(email="user@example.com", password="UserPass123")
        self.low = Season.objects.create(name="Basse saison", price_per_night=Decimal("80"), order=1)
        self.mid = Season.objects.create(name="Moyenne saison", price_per_night=Decimal("120"), order=2)
        DatePeriod.objects.create(season=self.low, start_date=date(2025, 1, 1), end_date=date(2025, 4, 1), year=2025)
        DatePeriod.objects.create(season=self.mid, start_date=date(2025, 4, 1), end_date=date(2025, 7, 1), year=2025)


class PriceCalculatorAPITests(PricingAPITestCase):
    def test_calculate_price(self) -> None:
        response = self.client.post(
            reverse("pricing-calculate"),
            {"start_date": "2025-03-30", "end_date": "2025-04-03"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(Decimal(response.data["total_price"]), Decimal("400"))
        self.assertEqual(response.data["total_nights"], 4)
        self.assertFalse(response.data["is_weekly_rate"])
        self.assertEqual(len(response.data["details"]), 2)
        self.assertEqual(response.data["details"][0]["season_name"], "Basse saison")
        self.assertEqual(Decimal(response.data["details"][1]["subtotal"]), Decimal("240"))

    def test_calculate_rejects_inverted_dates(self) -> None:
        response = self.client.post(
            reverse("pricing-calculate"),
            {"start_date": "2025-04-03", "end_date": "2025-04-03"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_min_nights(self) -> None:
        self.mid.min_nights = 5
        self.mid.save()

        response = self.client.get(
            reverse("pricing-min-nights"),
            {"start_date": "2025-05-01", "end_date": "2025-05-03"},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["min_nights"], 5)

    def test_public_grid(self) -> None:
        response = self.client.get(reverse("pricing-public-grid"), {"year": 2025})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["year"], 2025)
        self.assertEqual(
            [row["season_name"] for row in response.data["periods"]],
            ["Basse saison", "Moyenne saison"],
        )
        self.assertEqual(Decimal(response.data["periods"][1]["weekly_price"]), Decimal("840"))

    def test_public_grid_requires_year(self) -> None:
        response = self.client.get(reverse("pricing-public-grid"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class SeasonAPITests(PricingAPITestCase):
    def test_anyone_can_list_seasons(self) -> None:
        response = self.client.get(reverse("season-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([s["name"] for s in response.data], ["Basse saison", "Moyenne saison"])
        self.assertEqual(len(response.data[0]["date_periods"]), 1)

    def test_non_admin_cannot_create_season(self) -> None:
        self.client.force_authenticate(self.user)

        response = self.client.post(
            reverse("season-list"),
            {"name": "Haute saison", "price_per_night": "150.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_creates_season(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("season-list"),
            {
                "name": "Haute saison",
                "price_per_night": "150.00",
                "weekly_night_rate": "130.00",
                "min_nights": 7,
                "color": "#F97316",
                "order": 3,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["min_nights"], 7)
        self.assertEqual(response.data["date_periods"], [])

    def test_weekly_rate_above_nightly_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("season-list"),
            {"name": "Erreur", "price_per_night": "100.00", "weekly_night_rate": "120.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("weekly_night_rate", response.data)

    def test_invalid_color_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("season-list"),
            {"name": "Couleur", "price_per_night": "100.00", "color": "red"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("color", response.data)

    def test_delete_season_reports_periods(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("season-detail", args=[self.low.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["deleted_periods"], 1)
        self.assertFalse(Season.objects.filter(id=self.low.id).exists())


class DatePeriodAPITests(PricingAPITestCase):
    def test_list_by_year(self) -> None:
        DatePeriod.objects.create(season=self.low, start_date=date(2026, 1, 1), end_date=date(2026, 4, 1), year=2026)

        response = self.client.get(reverse("date-period-list"), {"year": 2026})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["season"]["name"], "Basse saison")

    def test_invalid_year_filter(self) -> None:
        response = self.client.get(reverse("date-period-list"), {"year": "abc"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_years(self) -> None:
        DatePeriod.objects.create(season=self.low, start_date=date(2024, 1, 1), end_date=date(2024, 4, 1), year=2024)

        response = self.client.get(reverse("date-period-years"))

        self.assertEqual(response.data, [2024, 2025])

    def test_create_period_defaults_year(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("date-period-list"),
            {"start_date": "2025-07-01", "end_date": "2025-09-01", "season_id": self.mid.id},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["year"], 2025)

    def test_create_overlapping_period_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("date-period-list"),
            {"start_date": "2025-03-15", "end_date": "2025-04-15", "year": 2025, "season_id": self.mid.id},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("chevauche", response.data["non_field_errors"][0])

    def test_update_period_does_not_collide_with_itself(self) -> None:
        self.client.force_authenticate(self.admin)
        period = DatePeriod.objects.get(season=self.mid)

        response = self.client.patch(
            reverse("date-period-detail", args=[period.id]),
            {"end_date": "2025-06-15"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        period.refresh_from_db()
        self.assertEqual(period.end_date, date(2025, 6, 15))

    def test_create_period_with_inverted_dates(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("date-period-list"),
            {"start_date": "2025-09-01", "end_date": "2025-08-01", "season_id": self.mid.id},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_copy_year(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("date-period-copy"),
            {"source_year": 2025, "target_year": 2026},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["copied_count"], 2)
        self.assertEqual(DatePeriod.objects.filter(year=2026).count(), 2)

    def test_copy_from_empty_year_is_not_found(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("date-period-copy"),
            {"source_year": 2030, "target_year": 2031},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_copy_into_same_year_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("date-period-copy"),
            {"source_year": 2025, "target_year": 2025},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class PricingSettingsAPITests(PricingAPITestCase):
    def test_read_settings_creates_default(self) -> None:
        response = self.client.get(reverse("pricing-settings"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["default_price_per_night"]), Decimal("100"))

    def test_admin_updates_default_price(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("pricing-settings"),
            {"default_price_per_night": "95.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(PricingSettings.load().default_price_per_night, Decimal("95.00"))

    def test_zero_default_price_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("pricing-settings"),
            {"default_price_per_night": "0"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
