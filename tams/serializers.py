"""Serializers for the TAMS REST API."""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from . import models
from .services.inspections import current_state_for_asset
from .services.scoring import (
    InspectionAggregate,
    ci_badge,
    describe_rubric,
    format_ci,
    resolve_meaning,
    round_ci,
    urgency_badge,
)


class ComponentTemplateItemSerializer(serializers.ModelSerializer):
    degree_rubric_text = serializers.SerializerMethodField()
    extent_rubric_text = serializers.SerializerMethodField()
    relevancy_rubric_text = serializers.SerializerMethodField()

    class Meta:
        model = models.ComponentTemplateItem
        fields = [
            "id",
            "template",
            "component_name",
            "component_order",
            "what_to_inspect",
            "degree_rubric",
            "extent_rubric",
            "relevancy_rubric",
            "degree_rubric_text",
            "extent_rubric_text",
            "relevancy_rubric_text",
            "quantity_unit",
            "condition_category",
        ]

    def get_degree_rubric_text(self, obj):
        return describe_rubric(obj.degree_rubric)

    def get_extent_rubric_text(self, obj):
        return describe_rubric(obj.extent_rubric)

    def get_relevancy_rubric_text(self, obj):
        return describe_rubric(obj.relevancy_rubric)


class ComponentTemplateSerializer(serializers.ModelSerializer):
    items = ComponentTemplateItemSerializer(many=True, read_only=True)
    asset_type_name = serializers.CharField(source="asset_type.name", read_only=True)

    class Meta:
        model = models.ComponentTemplate
        fields = [
            "id",
            "asset_type",
            "asset_type_name",
            "template_name",
            "description",
            "version",
            "is_active",
            "items",
        ]


class AssetTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = models.AssetType
        fields = ["id", "name", "abbreviation", "is_active"]


class InspectionComponentScoreSerializer(serializers.ModelSerializer):
    urgency_badge = serializers.SerializerMethodField()
    ci_badge = serializers.SerializerMethodField()

    class Meta:
        model = models.InspectionComponentScore
        fields = [
            "id",
            "inspection",
            "component_name",
            "position",
            "degree",
            "extent",
            "relevancy",
            "quantity",
            "unit",
            "rate",
            "remedial_work",
            "comments",
            "urgency",
            "conditional_index",
            "cost",
            "urgency_badge",
            "ci_badge",
        ]
        read_only_fields = ("urgency", "conditional_index", "cost")

    def validate(self, attrs):
        instance = models.InspectionComponentScore(**attrs)
        try:
            instance.clean()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict)
        return attrs

    def get_urgency_badge(self, obj):
        return urgency_badge(obj.urgency) if obj.urgency else None

    def get_ci_badge(self, obj):
        return ci_badge(obj.conditional_index)


class InspectionSerializer(serializers.ModelSerializer):
    component_scores = InspectionComponentScoreSerializer(many=True, read_only=True)
    asset_ref = serializers.CharField(source="asset.asset_ref", read_only=True)
    ci_final_display = serializers.SerializerMethodField()
    ci_health_display = serializers.SerializerMethodField()
    ci_safety_display = serializers.SerializerMethodField()
    ci_badge = serializers.SerializerMethodField()
    urgency_badge = serializers.SerializerMethodField()

    class Meta:
        model = models.Inspection
        fields = [
            "id",
            "asset",
            "asset_ref",
            "inspection_date",
            "inspector_name",
            "weather_conditions",
            "comments",
            "ci_health",
            "ci_safety",
            "ci_final",
            "ci_health_display",
            "ci_safety_display",
            "ci_final_display",
            "ci_band",
            "ci_badge",
            "worst_urgency",
            "urgency_badge",
            "deru_value",
            "total_remedial_cost",
            "calculation_metadata",
            "component_scores",
        ]
        read_only_fields = (
            "ci_health",
            "ci_safety",
            "ci_final",
            "ci_band",
            "worst_urgency",
            "deru_value",
            "total_remedial_cost",
            "calculation_metadata",
        )

    def get_ci_final_display(self, obj):
        return format_ci(obj.ci_final)

    def get_ci_health_display(self, obj):
        return format_ci(obj.ci_health)

    def get_ci_safety_display(self, obj):
        return format_ci(obj.ci_safety)

    def get_ci_badge(self, obj):
        return ci_badge(obj.ci_final)

    def get_urgency_badge(self, obj):
        return urgency_badge(obj.worst_urgency) if obj.worst_urgency else None


def _decimal_str(value):
    return str(value) if value is not None else None


def aggregate_payload(result: InspectionAggregate | None) -> dict | None:
    """Presentation view of an engine aggregate (rounded values, bands, badges)."""

    if result is None:
        return None

    components = []
    for scored in result.components:
        assessment = scored.assessment
        components.append(
            {
                "component_name": assessment.component_name,
                "degree": assessment.degree_code,
                "extent": assessment.extent_code,
                "relevancy": assessment.relevancy_code,
                "degree_meaning": resolve_meaning(assessment.degree_rubric, assessment.degree_code),
                "extent_meaning": resolve_meaning(assessment.extent_rubric, assessment.extent_code),
                "relevancy_meaning": resolve_meaning(
                    assessment.relevancy_rubric, assessment.relevancy_code
                ),
                "condition_category": assessment.condition_category,
                "urgency": scored.urgency.urgency,
                "urgency_label": scored.urgency.label,
                "urgency_rationale": scored.urgency.rationale,
                "urgency_rule": scored.urgency.rule,
                "ci": scored.ci,
                "ci_badge": ci_badge(scored.ci),
                "remedial_cost": _decimal_str(scored.remedial_cost),
            }
        )

    return {
        "ci_health": _decimal_str(result.ci_health),
        "ci_safety": _decimal_str(result.ci_safety),
        "ci_final": _decimal_str(result.ci_final),
        "ci_health_rounded": round_ci(result.ci_health),
        "ci_safety_rounded": round_ci(result.ci_safety),
        "ci_final_rounded": round_ci(result.ci_final),
        "ci_final_display": format_ci(result.ci_final),
        "ci_badge": ci_badge(result.ci_final),
        "worst_urgency": result.worst_urgency,
        "urgency_badge": urgency_badge(result.worst_urgency) if result.worst_urgency else None,
        "deru_value": _decimal_str(result.deru_value),
        "total_remedial_cost": str(result.total_remedial_cost),
        "overall_remedial": result.overall_remedial,
        "metadata": result.as_metadata(),
        "components": components,
    }


class AssetSerializer(serializers.ModelSerializer):
    asset_type_name = serializers.CharField(source="asset_type.name", read_only=True)
    current_state = serializers.SerializerMethodField()

    class Meta:
        model = models.Asset
        fields = [
            "id",
            "asset_ref",
            "asset_type",
            "asset_type_name",
            "description",
            "road_name",
            "latest_ci",
            "latest_urgency",
            "last_inspection_date",
            "current_state",
        ]
        read_only_fields = ("latest_ci", "latest_urgency", "last_inspection_date")

    def get_current_state(self, obj):
        return aggregate_payload(current_state_for_asset(obj))


class ScoreRequestSerializer(serializers.Serializer):
    components = serializers.ListField(child=serializers.DictField(), allow_empty=True)
    repair_threshold = serializers.DecimalField(
        max_digits=6, decimal_places=2, required=False, min_value=0, max_value=100
    )
