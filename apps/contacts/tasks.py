"""Celery tasks for the contact inbox."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.core.mail import EmailMessage  # type: ignore

from .models import ContactMessage

logger = logging.getLogger(__name__)


def _contact_email(contact: ContactMessage) -> EmailMessage:
    lines = [
        f"Nouveau message de contact - {settings.RENTAL_PROPERTY['name']}",
        "",
        f"De : {contact.name} ({contact.email})",
    ]
    if contact.phone:
        lines.append(f"Téléphone : {contact.phone}")
    lines += [f"Sujet : {contact.subject}", "", contact.message]
    return EmailMessage(
        subject=f"[{settings.RENTAL_PROPERTY['name']}] {contact.subject}",
        body="\n".join(lines),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[settings.CONTACT_EMAIL],
        reply_to=[contact.email],
    )


@shared_task(name="contacts.forward_contact_message")
def forward_contact_message(contact_id: int) -> bool:
    """Transmet un message du formulaire de contact au propriétaire."""
    try:
        contact = ContactMessage.objects.get(pk=contact_id)
    except ContactMessage.DoesNotExist:
        logger.error("Contact message %s not found", contact_id)
        return False

    try:
        _contact_email(contact).send(fail_silently=False)
    except Exception as e:
        logger.error("Failed to forward contact message %s: %s", contact_id, e, exc_info=True)
        return False

    ContactMessage.objects.filter(pk=contact.pk, status=ContactMessage.Status.PENDING).update(
        status=ContactMessage.Status.SENT
    )
    logger.info("Contact message %s forwarded to %s", contact_id, settings.CONTACT_EMAIL)
    return True
