"""Integration tests for the contract and invoice downloads."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking, Client
from apps.documents.data import build_invoice_data
from apps.documents.invoice import invoice_lines
from apps.pricing.models import DatePeriod, Season
from apps.users.models import User


class DocumentAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        low = Season.objects.create(name="Moyenne saison", price_per_night=Decimal("90"))
        high = Season.objects.create(name="Haute saison", price_per_night=Decimal("150"))
        DatePeriod.objects.create(season=low, start_date=date(2025, 6, 1), end_date=date(2025, 7, 5), year=2025)
        DatePeriod.objects.create(season=high, start_date=date(2025, 7, 5), end_date=date(2025, 9, 1), year=2025)
        self.client_record = Client.objects.create(
            first_name="Amélie",
            last_name="Lefèvre",
            address="3 rue des Lilas",
            city="Nancy",
            postal_code="54000",
            phone="0612345678",
        )
        self.booking = Booking.objects.create(
            start_date=date(2025, 7, 1),
            end_date=date(2025, 7, 8),
            primary_client=self.client_record,
            occupants_count=3,
            adults_count=2,
            rental_price=Decimal("810"),
            cleaning_included=True,
            tourist_tax_included=True,
        )

    def test_contract_download(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("document-contract", args=[self.booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response["Content-Type"], "application/pdf")
        self.assertIn('filename="contrat-lefevre-2025-07-01.pdf"', response["Content-Disposition"])
        self.assertTrue(response.content.startswith(b"%PDF"))

    def test_invoice_download(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("document-invoice", args=[self.booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("facture-2025-07-01-LEFEVRE.pdf", response["Content-Disposition"])
        self.assertTrue(response.content.startswith(b"%PDF"))

    def test_invoice_lists_season_breakdown(self) -> None:
        data = build_invoice_data(self.booking)

        designation = invoice_lines(data)[0][0]

        self.assertTrue(data.has_season_breakdown)
        self.assertIn("4 nuits Moyenne saison x 90,00 EUR", designation)
        self.assertIn("3 nuits Haute saison x 150,00 EUR", designation)
        self.assertEqual(data.total_price, Decimal("901.20"))

    def test_booking_without_client_is_rejected(self) -> None:
        self.booking.primary_client = None
        self.booking.save()
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("document-invoice", args=[self.booking.id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_documents_are_admin_only(self) -> None:
        user = User.objects.create_user(email="user@example.com", password="UserPass123")
        self.client.force_authenticate(user)

        response = self.client.get(reverse("document-contract", args=[self.booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_booking(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("document-contract", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
