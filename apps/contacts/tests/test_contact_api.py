"""Integration tests for the contact inbox."""

from __future__ import annotations

from unittest import mock

from django.core import mail
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.contacts.models import ContactMessage
from apps.users.models import User


@override_settings(CONTACT_EMAIL="owner@example.com")
class ContactAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.payload = {
            "name": "Claire Petit",
            "email": "claire@example.com",
            "phone": "0700000000",
            "subject": "Disponibilités en août",
            "message": "Bonjour,\nLa maison est-elle libre la première semaine d'août ?",
        }

    def test_visitor_message_is_forwarded(self) -> None:
        response = self.client.post(reverse("contact-list"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        contact = ContactMessage.objects.get()
        self.assertEqual(contact.status, ContactMessage.Status.SENT)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["owner@example.com"])
        self.assertEqual(mail.outbox[0].reply_to, ["claire@example.com"])
        self.assertIn("Disponibilités en août", mail.outbox[0].subject)

    def test_failed_forward_keeps_message_pending(self) -> None:
        with mock.patch("django.core.mail.EmailMessage.send", side_effect=ConnectionRefusedError()):
            response = self.client.post(reverse("contact-list"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(ContactMessage.objects.get().status, ContactMessage.Status.PENDING)

    def test_invalid_email(self) -> None:
        response = self.client.post(
            reverse("contact-list"),
            {**self.payload, "email": "not-an-email"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["email"][0], "Email invalide")

    def test_inbox_is_admin_only(self) -> None:
        response = self.client.get(reverse("contact-list"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_marks_message_read(self) -> None:
        contact = ContactMessage.objects.create(**self.payload)
        self.client.force_authenticate(self.admin)

        listing = self.client.get(reverse("contact-list"))
        response = self.client.patch(reverse("contact-read", args=[contact.id]))

        self.assertEqual(len(listing.data), 1)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], ContactMessage.Status.READ)
