from __future__ import annotations

from django.contrib import admin, messages

from . import models
from .services.inspections import recompute_inspections


class ComponentTemplateItemInline(admin.TabularInline):
    model = models.ComponentTemplateItem
    extra = 0
    fields = (
        "component_order",
        "component_name",
        "condition_category",
        "quantity_unit",
        "degree_rubric",
        "extent_rubric",
        "relevancy_rubric",
    )


@admin.register(models.AssetType)
class AssetTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "abbreviation", "is_active")
    search_fields = ("name",)


@admin.register(models.ComponentTemplate)
class ComponentTemplateAdmin(admin.ModelAdmin):
    list_display = ("template_name", "asset_type", "version", "is_active")
    list_filter = ("asset_type", "is_active")
    inlines = [ComponentTemplateItemInline]


@admin.register(models.Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ("asset_ref", "asset_type", "road_name", "latest_ci", "latest_urgency", "last_inspection_date")
    list_filter = ("asset_type", "latest_urgency")
    search_fields = ("asset_ref", "description", "road_name")
    readonly_fields = ("latest_ci", "latest_urgency", "last_inspection_date")


class InspectionComponentScoreInline(admin.TabularInline):
    model = models.InspectionComponentScore
    extra = 0
    fields = (
        "position",
        "component_name",
        "degree",
        "extent",
        "relevancy",
        "quantity",
        "unit",
        "rate",
        "remedial_work",
        "urgency",
        "conditional_index",
        "cost",
    )
    readonly_fields = ("urgency", "conditional_index", "cost")


@admin.register(models.Inspection)
class InspectionAdmin(admin.ModelAdmin):
    list_display = ("asset", "inspection_date", "ci_final", "ci_band", "worst_urgency", "total_remedial_cost")
    list_filter = ("ci_band", "worst_urgency")
    search_fields = ("asset__asset_ref", "inspector_name")
    date_hierarchy = "inspection_date"
    inlines = [InspectionComponentScoreInline]
    readonly_fields = (
        "ci_health",
        "ci_safety",
        "ci_final",
        "ci_band",
        "worst_urgency",
        "deru_value",
        "total_remedial_cost",
        "calculation_metadata",
    )
    actions = ["recompute_condition"]

    @admin.action(description="Recompute condition index and urgency")
    def recompute_condition(self, request, queryset):
        processed, scored = recompute_inspections(queryset.select_related("asset__asset_type"))
        self.message_user(
            request,
            f"Recomputed {processed} inspection(s); {scored} scored.",
            level=messages.SUCCESS,
        )
