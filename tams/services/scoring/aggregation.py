"""Inspection-level rollup of component scores.

An aggregate is always recomputed from the full component list. Means are
kept as full-precision ``Decimal`` values; rounding belongs to presentation.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from . import component_ci, urgency
from .codes import HEALTH, SAFETY, ComponentAssessment, InvalidInputError
from .urgency import UrgencyResult

RULE_VERSION = "2"


@dataclass(frozen=True)
class ScoredComponent:
    assessment: ComponentAssessment
    urgency: UrgencyResult
    ci: Optional[int]
    remedial_cost: Optional[Decimal]

    @property
    def is_scored(self) -> bool:
        return self.ci is not None


@dataclass(frozen=True)
class InspectionAggregate:
    ci_health: Optional[Decimal]
    ci_safety: Optional[Decimal]
    ci_final: Optional[Decimal]
    worst_urgency: Optional[str]
    components: Tuple[ScoredComponent, ...] = field(default_factory=tuple)
    deru_value: Optional[Decimal] = None
    total_remedial_cost: Decimal = Decimal("0")
    overall_remedial: str = ""
    overall_degree: str = ""
    overall_extent: str = ""
    overall_relevancy: str = ""

    @property
    def total_components(self) -> int:
        return len(self.components)

    @property
    def scored_components(self) -> int:
        return sum(1 for component in self.components if component.is_scored)

    @property
    def excluded_components(self) -> int:
        return self.total_components - self.scored_components

    @property
    def is_scored(self) -> bool:
        return self.ci_final is not None

    def as_metadata(self) -> Dict[str, Any]:
        """Denormalised block persisted next to the inspection record."""

        def _str(value: Optional[Decimal]) -> Optional[str]:
            return str(value) if value is not None else None

        return {
            "rule_version": RULE_VERSION,
            "ci_health": _str(self.ci_health),
            "ci_safety": _str(self.ci_safety),
            "ci_final": _str(self.ci_final),
            "worst_urgency": self.worst_urgency,
            "deru_value": _str(self.deru_value),
            "degree": self.overall_degree,
            "extent": self.overall_extent,
            "relevancy": self.overall_relevancy,
            "total_components": self.total_components,
            "scored_components": self.scored_components,
            "excluded_components": self.excluded_components,
        }


def _mean(values: List[int]) -> Optional[Decimal]:
    if not values:
        return None
    return Decimal(sum(values)) / Decimal(len(values))


def compute_deru(ci: Optional[Decimal]) -> Optional[Decimal]:
    """Deterioration/urgency value: grows as the condition index drops."""

    if ci is None:
        return None
    if ci < 40:
        multiplier = Decimal("2.0")
    elif ci < 60:
        multiplier = Decimal("1.5")
    elif ci < 80:
        multiplier = Decimal("1.0")
    else:
        multiplier = Decimal("0.5")
    return (Decimal("100") - ci) * multiplier


def _coerce_components(components: Any) -> List[ComponentAssessment]:
    if isinstance(components, (str, bytes)) or not isinstance(components, Sequence):
        raise InvalidInputError(
            f"Components must be a sequence, got {type(components).__name__}"
        )
    return [ComponentAssessment.coerce(item) for item in components]


def score_component(
    assessment: ComponentAssessment,
    repair_threshold: Any = component_ci.DEFAULT_REPAIR_THRESHOLD,
) -> ScoredComponent:
    codes = (assessment.degree_code, assessment.extent_code, assessment.relevancy_code)
    ci = component_ci.score(*codes)
    return ScoredComponent(
        assessment=assessment,
        urgency=urgency.classify(*codes),
        ci=ci,
        remedial_cost=component_ci.remedial_cost(
            ci, assessment.quantity, assessment.rate, repair_threshold
        ),
    )


def _worst_component(scored: List[ScoredComponent]) -> Optional[ScoredComponent]:
    worst = None
    for component in scored:
        if worst is None or urgency.severity_rank(component.urgency.urgency) > urgency.severity_rank(
            worst.urgency.urgency
        ):
            worst = component
    return worst


def aggregate(
    components: Any,
    repair_threshold: Any = component_ci.DEFAULT_REPAIR_THRESHOLD,
) -> InspectionAggregate:
    """Roll up one inspection's components into CI health/safety/final and urgency."""

    assessments = _coerce_components(components)
    scored = [score_component(assessment, repair_threshold) for assessment in assessments]

    all_cis = [component.ci for component in scored if component.ci is not None]
    ci_final = _mean(all_cis)

    tagged = any(component.assessment.condition_category for component in scored)
    if tagged:
        ci_health = _mean(
            [
                component.ci
                for component in scored
                if component.ci is not None and component.assessment.condition_category == HEALTH
            ]
        )
        ci_safety = _mean(
            [
                component.ci
                for component in scored
                if component.ci is not None and component.assessment.condition_category == SAFETY
            ]
        )
    else:
        ci_health = ci_final
        ci_safety = ci_final

    total_cost = Decimal("0")
    for component in scored:
        if component.remedial_cost is not None:
            total_cost += component.remedial_cost

    worst = _worst_component(scored)

    return InspectionAggregate(
        ci_health=ci_health,
        ci_safety=ci_safety,
        ci_final=ci_final,
        worst_urgency=urgency.worst_urgency(component.urgency.urgency for component in scored),
        components=tuple(scored),
        deru_value=compute_deru(ci_final),
        total_remedial_cost=total_cost,
        overall_remedial="; ".join(
            component.assessment.remedial_work.strip()
            for component in scored
            if component.assessment.remedial_work.strip()
        ),
        overall_degree=(worst.assessment.degree_code or "") if worst else "",
        overall_extent=(worst.assessment.extent_code or "") if worst else "",
        overall_relevancy=(worst.assessment.relevancy_code or "") if worst else "",
    )
