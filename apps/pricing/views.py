"""API views for the pricing catalog and the price calculator."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import IsAdmin, IsAdminOrReadOnly

from .filters import DatePeriodFilterSet
from .models import DatePeriod, PricingSettings, Season
from .serializers import (
    CopyYearSerializer,
    DatePeriodSerializer,
    DatePeriodWriteSerializer,
    PriceCalculationSerializer,
    PricingSettingsSerializer,
    PublicGridSerializer,
    SeasonSerializer,
    SeasonWriteSerializer,
    StayPeriodSerializer,
)
from .services import (
    CopyYearError,
    SourceYearEmptyError,
    available_years,
    calculate_price,
    copy_periods_from_year,
    delete_season,
    get_min_nights_for_period,
    get_public_grid,
)


class SeasonViewSet(viewsets.ModelViewSet):
    """Saisons tarifaires : lecture publique, écriture réservée à l'administrateur."""

    queryset = Season.objects.prefetch_related("date_periods").all()
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = None

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return SeasonWriteSerializer
        return SeasonSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        season = serializer.save()
        read_serializer = SeasonSerializer(season, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        season = serializer.save()
        return Response(SeasonSerializer(season, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        season = self.get_object()
        deleted_periods = delete_season(season)
        return Response(
            {
                "message": f"Saison supprimée avec {deleted_periods} plage(s) de dates.",
                "deleted_periods": deleted_periods,
            },
            status=status.HTTP_200_OK,
        )


class DatePeriodViewSet(viewsets.ModelViewSet):
    """Plages de dates des saisons, filtrables par année."""

    queryset = DatePeriod.objects.select_related("season").order_by("year", "start_date")
    permission_classes = [IsAdminOrReadOnly]
    filterset_class = DatePeriodFilterSet
    pagination_class = None

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return DatePeriodWriteSerializer
        return DatePeriodSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        period = serializer.save()
        read_serializer = DatePeriodSerializer(period, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        period = serializer.save()
        return Response(DatePeriodSerializer(period, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        self.get_object().delete()
        return Response({"message": "Plage de dates supprimée."}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def years(self, request):  # type: ignore
        return Response(available_years())

    @action(detail=False, methods=["post"], permission_classes=[IsAdmin])
    def copy(self, request):  # type: ignore
        serializer = CopyYearSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            copied = copy_periods_from_year(
                serializer.validated_data["source_year"],
                serializer.validated_data["target_year"],
            )
        except SourceYearEmptyError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except CopyYearError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"copied_count": copied}, status=status.HTTP_201_CREATED)


class PricingSettingsView(APIView):
    """Prix par défaut appliqué hors saison."""

    permission_classes = [IsAdminOrReadOnly]

    def get(self, request):  # type: ignore
        return Response(PricingSettingsSerializer(PricingSettings.load()).data)

    def patch(self, request):  # type: ignore
        settings_obj = PricingSettings.load()
        serializer = PricingSettingsSerializer(settings_obj, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class CalculatePriceView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        serializer = StayPeriodSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = calculate_price(
            serializer.validated_data["start_date"],
            serializer.validated_data["end_date"],
        )
        return Response(PriceCalculationSerializer(result).data)


class PublicGridView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        raw_year = request.query_params.get("year")
        try:
            year = int(raw_year)
        except (TypeError, ValueError):
            return Response({"detail": "Paramètre 'year' invalide."}, status=status.HTTP_400_BAD_REQUEST)
        return Response(PublicGridSerializer(get_public_grid(year)).data)


class MinNightsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        serializer = StayPeriodSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        min_nights = get_min_nights_for_period(
            serializer.validated_data["start_date"],
            serializer.validated_data["end_date"],
        )
        return Response({"min_nights": min_nights})
