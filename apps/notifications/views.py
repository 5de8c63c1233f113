"""API views for sending booking documents by e-mail."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from apps.users.api.permissions import IsAdmin

from .models import EmailLog
from .serializers import EmailLogSerializer, SendDocumentEmailSerializer
from .services import DocumentEmailError, EmailDeliveryError, send_document_email


class SendDocumentEmailView(APIView):
    """Envoie le contrat et/ou la facture au client."""

    permission_classes = [IsAdmin]

    def post(self, request):  # type: ignore
        serializer = SendDocumentEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = get_object_or_404(
            Booking.objects.select_related("primary_client"),
            pk=data["booking_id"],
        )
        try:
            email_log = send_document_email(
                booking=booking,
                document_types=data["document_types"],
                recipient_email=data["recipient_email"],
                recipient_name=data["recipient_name"],
                personal_message=data["personal_message"],
            )
        except DocumentEmailError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except EmailDeliveryError as exc:
            return Response(
                {"detail": str(exc), "email_log": EmailLogSerializer(exc.email_log).data},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(EmailLogSerializer(email_log).data, status=status.HTTP_201_CREATED)


class BookingEmailLogView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request, booking_id: int):  # type: ignore
        logs = (
            EmailLog.objects.filter(booking_id=booking_id)
            .select_related("contract_snapshot", "invoice_snapshot")
            .order_by("-sent_at", "-id")
        )
        return Response(EmailLogSerializer(logs, many=True).data)
