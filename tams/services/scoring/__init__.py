"""Condition assessment scoring engine.

Pure functions only: no Django imports, no I/O. Rubrics, template tagging and
the repair threshold are passed in by the caller.
"""

from .aggregation import (
    RULE_VERSION,
    InspectionAggregate,
    ScoredComponent,
    aggregate,
    compute_deru,
    score_component,
)
from .asset_state import InspectionRecord, project_current_state, sort_latest_first
from .bands import ci_badge, ci_band, format_ci, round_ci, urgency_badge
from .codes import ComponentAssessment, InvalidInputError, normalize_code
from .component_ci import DEFAULT_REPAIR_THRESHOLD, remedial_cost, score
from .rubrics import describe_rubric, resolve_meaning
from .urgency import UrgencyResult, classify, severity_rank, worst_urgency

__all__ = [
    "RULE_VERSION",
    "DEFAULT_REPAIR_THRESHOLD",
    "ComponentAssessment",
    "InspectionAggregate",
    "InspectionRecord",
    "InvalidInputError",
    "ScoredComponent",
    "UrgencyResult",
    "aggregate",
    "ci_badge",
    "ci_band",
    "classify",
    "compute_deru",
    "describe_rubric",
    "format_ci",
    "normalize_code",
    "project_current_state",
    "remedial_cost",
    "resolve_meaning",
    "round_ci",
    "score",
    "score_component",
    "severity_rank",
    "sort_latest_first",
    "urgency_badge",
    "worst_urgency",
]
