"""REST API views for the TAMS backend."""

from __future__ import annotations

import logging

from django.db.models import QuerySet
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view
from rest_framework.request import Request
from rest_framework.response import Response

from . import models, serializers
from .services.inspections import recompute_inspection, repair_threshold
from .services.scoring import InvalidInputError, aggregate

logger = logging.getLogger(__name__)


class AssetTypeViewSet(viewsets.ModelViewSet):
    queryset: QuerySet[models.AssetType] = models.AssetType.objects.all()
    serializer_class = serializers.AssetTypeSerializer


class ComponentTemplateViewSet(viewsets.ModelViewSet):
    queryset = models.ComponentTemplate.objects.select_related("asset_type").prefetch_related("items")
    serializer_class = serializers.ComponentTemplateSerializer

    def get_queryset(self):  # pragma: no cover - trivial filtering logic
        queryset = super().get_queryset()
        asset_type = self.request.query_params.get("asset_type")
        if asset_type:
            queryset = queryset.filter(asset_type_id=asset_type)
        return queryset


class ComponentTemplateItemViewSet(viewsets.ModelViewSet):
    queryset = models.ComponentTemplateItem.objects.select_related("template").all()
    serializer_class = serializers.ComponentTemplateItemSerializer


class AssetViewSet(viewsets.ModelViewSet):
    queryset = models.Asset.objects.select_related("asset_type").all()
    serializer_class = serializers.AssetSerializer


class InspectionViewSet(viewsets.ModelViewSet):
    queryset = models.Inspection.objects.select_related("asset").prefetch_related("component_scores")
    serializer_class = serializers.InspectionSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        asset = self.request.query_params.get("asset")
        if asset:
            queryset = queryset.filter(asset_id=asset)
        return queryset

    def perform_create(self, serializer):
        inspection = serializer.save()
        recompute_inspection(inspection)

    @action(detail=True, methods=["post"])
    def recompute(self, request: Request, pk=None) -> Response:
        inspection = self.get_object()
        recompute_inspection(inspection)
        inspection.refresh_from_db()
        return Response(self.get_serializer(inspection).data)


class InspectionComponentScoreViewSet(viewsets.ModelViewSet):
    queryset = models.InspectionComponentScore.objects.select_related("inspection").all()
    serializer_class = serializers.InspectionComponentScoreSerializer

    def get_queryset(self):  # pragma: no cover - trivial filtering logic
        queryset = super().get_queryset()
        inspection = self.request.query_params.get("inspection")
        if inspection:
            queryset = queryset.filter(inspection_id=inspection)
        return queryset


@api_view(["POST"])
def score_components(request: Request) -> Response:
    """Score a posted component list without storing anything."""

    payload = serializers.ScoreRequestSerializer(data=request.data)
    payload.is_valid(raise_exception=True)

    threshold = payload.validated_data.get("repair_threshold", repair_threshold())
    try:
        result = aggregate(payload.validated_data["components"], threshold)
    except InvalidInputError as exc:
        logger.info("Rejected scoring request: %s", exc)
        return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(serializers.aggregate_payload(result))
