"""Data models for the TAMS condition backend.

Assets, inspection templates and field inspections. Derived condition values
on :class:`Inspection` and :class:`InspectionComponentScore` are a cache of
the scoring engine output and are rewritten by
:func:`tams.services.inspections.recompute_inspection`.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from .services.scoring.codes import CODES

# ---------------------------------------------------------------------------
# Lookup tables and templates
# ---------------------------------------------------------------------------


class AssetType(models.Model):
    """Asset category (signage, guardrail, traffic signal, ...)."""

    name = models.CharField(max_length=100, unique=True)
    abbreviation = models.CharField(max_length=10, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Asset type"
        verbose_name_plural = "Asset types"

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return self.name


class ComponentTemplate(models.Model):
    asset_type = models.ForeignKey(AssetType, on_delete=models.CASCADE, related_name="templates")
    template_name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    version = models.PositiveIntegerField(default=1)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["asset_type", "-version"]
        unique_together = ("asset_type", "version")
        verbose_name = "Component template"
        verbose_name_plural = "Component templates"

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"{self.template_name} v{self.version}"


class ComponentTemplateItem(models.Model):
    class ConditionCategory(models.TextChoices):
        NONE = "", "Untagged"
        HEALTH = "health", "Health"
        SAFETY = "safety", "Safety"

    template = models.ForeignKey(ComponentTemplate, on_delete=models.CASCADE, related_name="items")
    component_name = models.CharField(max_length=150)
    component_order = models.PositiveSmallIntegerField(default=1)
    what_to_inspect = models.TextField(blank=True)
    degree_rubric = models.JSONField(null=True, blank=True)
    extent_rubric = models.JSONField(null=True, blank=True)
    relevancy_rubric = models.JSONField(null=True, blank=True)
    quantity_unit = models.CharField(max_length=20, blank=True)
    condition_category = models.CharField(
        max_length=10,
        choices=ConditionCategory.choices,
        default=ConditionCategory.NONE,
        blank=True,
        help_text="Health/safety tag used to split CI Health and CI Safety.",
    )

    class Meta:
        ordering = ["template", "component_order", "id"]
        unique_together = ("template", "component_order")
        verbose_name = "Component template item"
        verbose_name_plural = "Component template items"

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"{self.component_order}. {self.component_name}"


# ---------------------------------------------------------------------------
# Inventory and inspections
# ---------------------------------------------------------------------------


class Asset(models.Model):
    asset_ref = models.CharField(max_length=50, unique=True)
    asset_type = models.ForeignKey(AssetType, on_delete=models.PROTECT, related_name="assets")
    description = models.CharField(max_length=255, blank=True)
    road_name = models.CharField(max_length=150, blank=True)
    latest_ci = models.DecimalField(max_digits=8, decimal_places=4, null=True, blank=True)
    latest_urgency = models.CharField(max_length=2, blank=True)
    last_inspection_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["asset_ref"]

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return self.asset_ref


class Inspection(models.Model):
    asset = models.ForeignKey(Asset, on_delete=models.CASCADE, related_name="inspections")
    inspection_date = models.DateField()
    inspector_name = models.CharField(max_length=150, blank=True)
    weather_conditions = models.CharField(max_length=100, blank=True)
    comments = models.TextField(blank=True)

    ci_health = models.DecimalField(max_digits=8, decimal_places=4, null=True, blank=True)
    ci_safety = models.DecimalField(max_digits=8, decimal_places=4, null=True, blank=True)
    ci_final = models.DecimalField(max_digits=8, decimal_places=4, null=True, blank=True)
    worst_urgency = models.CharField(max_length=2, blank=True)
    ci_band = models.CharField(max_length=20, blank=True)
    deru_value = models.DecimalField(max_digits=8, decimal_places=4, null=True, blank=True)
    total_remedial_cost = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    calculation_metadata = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-inspection_date", "-id"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Inspection {self.id} ({self.asset_id}, {self.inspection_date})"


class InspectionComponentScore(models.Model):
    inspection = models.ForeignKey(Inspection, on_delete=models.CASCADE, related_name="component_scores")
    component_name = models.CharField(max_length=150)
    position = models.PositiveSmallIntegerField(
        default=0, help_text="Display order within the inspection (0-based)."
    )
    degree = models.CharField(max_length=50, blank=True)
    extent = models.CharField(max_length=50, blank=True)
    relevancy = models.CharField(max_length=50, blank=True)
    quantity = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    unit = models.CharField(max_length=20, blank=True)
    rate = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    remedial_work = models.TextField(blank=True)
    comments = models.TextField(blank=True)

    urgency = models.CharField(max_length=2, blank=True)
    conditional_index = models.PositiveSmallIntegerField(null=True, blank=True)
    cost = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    class Meta:
        ordering = ["inspection", "position", "id"]
        verbose_name = "Inspection component score"
        verbose_name_plural = "Inspection component scores"

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.component_name} ({self.inspection_id})"

    def clean(self):
        errors = {}
        for field in ("degree", "extent", "relevancy"):
            value = (getattr(self, field) or "").strip()
            if value and value[0].upper() not in CODES:
                errors[field] = f"Code must start with one of {', '.join(CODES)}."
        if errors:
            raise ValidationError(errors)
