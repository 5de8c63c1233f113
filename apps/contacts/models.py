"""Contact form messages."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ContactMessage(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", _("En attente")
        SENT = "sent", _("Transmis")
        READ = "read", _("Lu")

    name = models.CharField(_("Nom"), max_length=200)
    email = models.EmailField(_("Email"))
    phone = models.CharField(_("Téléphone"), max_length=30, blank=True)
    subject = models.CharField(_("Sujet"), max_length=255)
    message = models.TextField(_("Message"))
    status = models.CharField(max_length=8, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = _("Message de contact")
        verbose_name_plural = _("Messages de contact")

    def __str__(self) -> str:
        return f"{self.name}: {self.subject}"
