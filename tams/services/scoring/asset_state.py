"""Expose an asset's latest inspection rollup as its current state."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Tuple

from . import component_ci
from .aggregation import InspectionAggregate, aggregate
from .codes import InvalidInputError


@dataclass(frozen=True)
class InspectionRecord:
    inspection_date: Optional[date] = None
    components: Tuple[Any, ...] = field(default_factory=tuple)
    reference: str = ""


def _components_of(inspection: Any) -> Sequence:
    if isinstance(inspection, InspectionRecord):
        return list(inspection.components)
    if isinstance(inspection, Mapping):
        components = inspection.get("components")
        if components is None:
            components = inspection.get("component_scores")
        return components if components is not None else []
    raise InvalidInputError(
        f"Expected an inspection record or mapping, got {type(inspection).__name__}"
    )


def _date_of(inspection: Any) -> Optional[date]:
    if isinstance(inspection, InspectionRecord):
        return inspection.inspection_date
    if isinstance(inspection, Mapping):
        return inspection.get("inspection_date")
    return None


def sort_latest_first(inspections: Sequence) -> list:
    """Order inspections by date, newest first; undated records go last."""

    dated = [item for item in inspections if _date_of(item) is not None]
    undated = [item for item in inspections if _date_of(item) is None]
    dated.sort(key=_date_of, reverse=True)
    return dated + undated


def project_current_state(
    inspections: Any,
    repair_threshold: Any = component_ci.DEFAULT_REPAIR_THRESHOLD,
) -> Optional[InspectionAggregate]:
    """Aggregate of the most recent inspection, or ``None`` without history.

    ``inspections`` must already be sorted by inspection date, descending.
    Older records are not touched.
    """

    if isinstance(inspections, (str, bytes)) or not isinstance(inspections, Sequence):
        raise InvalidInputError(
            f"Inspections must be a sequence, got {type(inspections).__name__}"
        )
    if not inspections:
        return None
    return aggregate(_components_of(inspections[0]), repair_threshold)
