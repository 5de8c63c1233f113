"""API tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )

    def test_login_returns_tokens(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "admin@example.com", "password": "AdminPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["user"]["role"], User.RoleChoices.ADMIN)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])

    def test_wrong_password(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "admin@example.com", "password": "nope"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.admin.refresh_from_db()
        self.assertEqual(self.admin.failed_login_attempts, 1)

    def test_login_limited_attempts(self) -> None:
        url = reverse("auth:login")
        for _ in range(5):
            response = self.client.post(url, {"email": self.admin.email, "password": "wrong"}, format="json")

        self.admin.refresh_from_db()
        self.assertTrue(self.admin.is_locked)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        locked = self.client.post(url, {"email": self.admin.email, "password": "AdminPass123"}, format="json")
        self.assertEqual(locked.status_code, status.HTTP_400_BAD_REQUEST)

        # After lock expires user can login again
        self.admin.locked_until = timezone.now() - timedelta(minutes=1)
        self.admin.save(update_fields=["locked_until"])
        response = self.client.post(url, {"email": self.admin.email, "password": "AdminPass123"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_token_unlocks_admin_endpoints(self) -> None:
        login = self.client.post(
            reverse("auth:login"),
            {"email": "admin@example.com", "password": "AdminPass123"},
            format="json",
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['tokens']['access']}")

        me = self.client.get(reverse("auth:me"))
        bookings = self.client.get(reverse("booking-list"))

        self.assertEqual(me.data["email"], "admin@example.com")
        self.assertEqual(bookings.status_code, status.HTTP_200_OK)

    def test_refresh_token(self) -> None:
        login = self.client.post(
            reverse("auth:login"),
            {"email": "admin@example.com", "password": "AdminPass123"},
            format="json",
        )

        response = self.client.post(
            reverse("auth:token_refresh"),
            {"refresh": login.data["tokens"]["refresh"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
