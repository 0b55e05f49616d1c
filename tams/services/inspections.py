"""Inspection scoring services.

Bridges stored inspections and the pure scoring engine: loads components,
merges template rubrics and tagging, and writes the aggregate back as a
denormalised cache.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from tams import models
from tams.services import templates
from tams.services.scoring import (
    ComponentAssessment,
    InspectionAggregate,
    InspectionRecord,
    aggregate,
    ci_band,
    project_current_state,
)
from tams.services.scoring.codes import to_decimal
from tams.services.scoring.component_ci import DEFAULT_REPAIR_THRESHOLD

logger = logging.getLogger(__name__)

STORAGE_QUANTUM = Decimal("0.0001")
COST_QUANTUM = Decimal("0.01")


def repair_threshold() -> Decimal:
    value = getattr(settings, "TAMS_REPAIR_THRESHOLD", DEFAULT_REPAIR_THRESHOLD)
    threshold = to_decimal(value)
    if threshold is None:
        logger.warning(
            "Invalid TAMS_REPAIR_THRESHOLD %r; using default %s", value, DEFAULT_REPAIR_THRESHOLD
        )
        return Decimal(DEFAULT_REPAIR_THRESHOLD)
    return threshold


def _stored(value: Optional[Decimal]) -> Optional[Decimal]:
    return value.quantize(STORAGE_QUANTUM) if value is not None else None


def _assessment_from_row(
    row: models.InspectionComponentScore,
    template_item: models.ComponentTemplateItem | None,
) -> ComponentAssessment:
    return ComponentAssessment(
        component_name=row.component_name,
        degree_code=row.degree,
        extent_code=row.extent,
        relevancy_code=row.relevancy,
        quantity=row.quantity,
        rate=row.rate,
        component_cost=row.cost,
        unit=row.unit or (template_item.quantity_unit if template_item else ""),
        remedial_work=row.remedial_work,
        condition_category=template_item.condition_category if template_item else "",
        degree_rubric=template_item.degree_rubric if template_item else None,
        extent_rubric=template_item.extent_rubric if template_item else None,
        relevancy_rubric=template_item.relevancy_rubric if template_item else None,
    )


def component_rows(inspection: models.Inspection) -> list[models.InspectionComponentScore]:
    return list(inspection.component_scores.order_by("position", "id"))


def component_inputs_for_inspection(
    inspection: models.Inspection,
    rows: list[models.InspectionComponentScore] | None = None,
) -> list[ComponentAssessment]:
    """Build engine inputs for every stored component of ``inspection``."""

    rows = component_rows(inspection) if rows is None else rows
    items = templates.active_template_items(inspection.asset.asset_type)
    if rows and not items:
        logger.warning(
            "No active component template for asset type %s; scoring inspection %s untagged",
            inspection.asset.asset_type_id,
            inspection.id,
        )

    assessments = []
    for position, row in enumerate(rows):
        item = templates.match_template_item(row.component_name, position, items)
        if item is None and items:
            logger.warning(
                "Component %r of inspection %s matches no template item",
                row.component_name,
                inspection.id,
            )
        assessments.append(_assessment_from_row(row, item))
    return assessments


def refresh_asset_cache(asset: models.Asset) -> None:
    latest = asset.inspections.order_by("-inspection_date", "-id").first()
    asset.latest_ci = latest.ci_final if latest else None
    asset.latest_urgency = latest.worst_urgency if latest else ""
    asset.last_inspection_date = latest.inspection_date if latest else None
    asset.save(update_fields=["latest_ci", "latest_urgency", "last_inspection_date", "modified_at"])


@transaction.atomic
def recompute_inspection(inspection: models.Inspection) -> InspectionAggregate:
    """Recompute and store the aggregate for a single inspection."""

    rows = component_rows(inspection)
    result = aggregate(component_inputs_for_inspection(inspection, rows), repair_threshold())

    for row, scored in zip(rows, result.components):
        row.urgency = scored.urgency.urgency
        row.conditional_index = scored.ci
        row.cost = (
            scored.remedial_cost.quantize(COST_QUANTUM) if scored.remedial_cost is not None else None
        )
        # Flag read by the post_save receiver so these writes do not recurse.
        row._recomputing = True
        row.save(update_fields=["urgency", "conditional_index", "cost"])

    metadata = result.as_metadata()
    metadata["computed_at"] = timezone.now().isoformat()
    metadata["repair_threshold"] = str(repair_threshold())

    inspection.ci_health = _stored(result.ci_health)
    inspection.ci_safety = _stored(result.ci_safety)
    inspection.ci_final = _stored(result.ci_final)
    inspection.worst_urgency = result.worst_urgency or ""
    inspection.ci_band = ci_band(result.ci_final) or ""
    inspection.deru_value = _stored(result.deru_value)
    inspection.total_remedial_cost = result.total_remedial_cost.quantize(COST_QUANTUM)
    inspection.calculation_metadata = metadata
    inspection.save(
        update_fields=[
            "ci_health",
            "ci_safety",
            "ci_final",
            "worst_urgency",
            "ci_band",
            "deru_value",
            "total_remedial_cost",
            "calculation_metadata",
            "modified_at",
        ]
    )

    refresh_asset_cache(inspection.asset)
    return result


def recompute_inspections(inspections: Iterable[models.Inspection]) -> tuple[int, int]:
    processed = 0
    scored = 0

    for inspection in inspections:
        processed += 1
        if recompute_inspection(inspection).is_scored:
            scored += 1

    return processed, scored


def recompute_all_inspections() -> tuple[int, int]:
    inspections = models.Inspection.objects.select_related("asset__asset_type").order_by("inspection_date", "id")
    return recompute_inspections(inspections)


def current_state_for_asset(asset: models.Asset) -> InspectionAggregate | None:
    """Aggregate of the asset's most recent inspection, recomputed from its components."""

    latest = asset.inspections.order_by("-inspection_date", "-id").first()
    if latest is None:
        return None
    return project_current_state(
        [
            InspectionRecord(
                inspection_date=latest.inspection_date,
                components=tuple(component_inputs_for_inspection(latest)),
                reference=str(latest.pk),
            )
        ],
        repair_threshold(),
    )
