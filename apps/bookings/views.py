"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.pricing.serializers import PriceCalculationSerializer
from apps.users.api.permissions import IsAdmin

from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
    CheckConflictsSerializer,
    ConflictDetailSerializer,
    QuickBookingSerializer,
)
from .services import (
    BookingConflictError,
    BookingStateError,
    MinimumStayError,
    booked_dates,
    cancel_booking,
    check_conflicts,
    confirm_booking,
    conflict_summary,
    create_booking,
    create_quick_booking,
    recalculate_booking_price,
    update_booking,
)


def _conflict_response(exc: BookingConflictError) -> Response:
    payload = {"detail": str(exc)}
    if exc.conflicting is not None:
        payload["conflicting_booking"] = ConflictDetailSerializer(conflict_summary(exc.conflicting)).data
    return Response(payload, status=status.HTTP_409_CONFLICT)


class BookingViewSet(viewsets.ModelViewSet):
    """Réservations : calendrier et formulaire publics, gestion réservée à l'administrateur."""

    queryset = Booking.objects.select_related("user", "primary_client", "secondary_client").all()
    pagination_class = None

    def get_permissions(self):  # type: ignore
        if self.action in {"dates", "check_conflicts"}:
            return [permissions.AllowAny()]
        if self.action == "create":
            return [permissions.IsAuthenticated()]
        return [IsAdmin()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action in {"update", "partial_update"}:
            return BookingUpdateSerializer
        if self.action == "quick":
            return QuickBookingSerializer
        return BookingSerializer

    def _read(self, booking: Booking) -> dict:
        return BookingSerializer(booking, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = create_booking(user=request.user, data=serializer.validated_data)
        except BookingConflictError as exc:
            return _conflict_response(exc)
        except MinimumStayError as exc:
            return Response(
                {"detail": str(exc), "min_nights": exc.min_nights},
                status=status.HTTP_400_BAD_REQUEST,
            )
        data = self._read(booking)
        return Response(data, status=status.HTTP_201_CREATED, headers=self.get_success_headers(data))

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        booking = self.get_object()
        serializer = self.get_serializer(booking, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            booking = update_booking(booking, serializer.validated_data)
        except BookingConflictError as exc:
            return _conflict_response(exc)
        except (MinimumStayError, BookingStateError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self._read(booking))

    def destroy(self, request, *args, **kwargs):  # type: ignore
        self.get_object().delete()
        return Response({"message": "Réservation supprimée."}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"])
    def dates(self, request):  # type: ignore
        return Response(booked_dates())

    @action(detail=False, methods=["post"])
    def quick(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = create_quick_booking(user=request.user, data=serializer.validated_data)
        except BookingConflictError as exc:
            return _conflict_response(exc)
        return Response(self._read(booking), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="check-conflicts")
    def check_conflicts(self, request):  # type: ignore
        serializer = CheckConflictsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = check_conflicts(
            serializer.validated_data["start_date"],
            serializer.validated_data["end_date"],
            exclude_booking_id=serializer.validated_data.get("booking_id"),
        )
        if "conflict_detail" in result:
            result["conflict_detail"] = ConflictDetailSerializer(result["conflict_detail"]).data
        return Response(result)

    @action(detail=True, methods=["post"], url_path="recalculate-price")
    def recalculate_price(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        return Response(PriceCalculationSerializer(recalculate_booking_price(booking)).data)

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        try:
            confirm_booking(booking)
        except BookingStateError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self._read(booking))

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        cancel_booking(booking)
        return Response(self._read(booking))
