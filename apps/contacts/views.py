"""API views for the contact inbox."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsAdmin

from .models import ContactMessage
from .serializers import ContactMessageSerializer
from .tasks import forward_contact_message


class ContactMessageViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Formulaire de contact public, boîte de réception réservée à l'administrateur."""

    queryset = ContactMessage.objects.all()
    serializer_class = ContactMessageSerializer
    pagination_class = None

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [permissions.AllowAny()]
        return [IsAdmin()]

    def perform_create(self, serializer):  # type: ignore
        contact = serializer.save()
        forward_contact_message.delay(contact.pk)

    @action(detail=True, methods=["patch", "post"])
    def read(self, request, pk=None):  # type: ignore
        contact: ContactMessage = self.get_object()  # type: ignore
        contact.status = ContactMessage.Status.READ
        contact.save(update_fields=["status"])
        return Response(self.get_serializer(contact).data, status=status.HTTP_200_OK)
