"""Component urgency decision tree.

Sentinels are checked first (``U`` dominates everything, then ``X``/``0``
on degree), after which relevancy drives the tree. Rules are evaluated top
to bottom and the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .codes import NOT_PRESENT, UNABLE_TO_INSPECT, code_to_int, normalize_code

IMMEDIATE = "4"
HIGH = "3"
MEDIUM = "2"
LOW = "1"
MINOR = "0"
RECORD_ONLY = "R"
UNABLE = "U"

URGENCY_LABELS = {
    IMMEDIATE: "Immediate",
    HIGH: "High",
    MEDIUM: "Medium",
    LOW: "Low",
    MINOR: "Minor/Monitor",
    RECORD_ONLY: "Record Only",
    UNABLE: "Unable to Inspect",
}

NUMERIC_URGENCIES = (IMMEDIATE, HIGH, MEDIUM, LOW, MINOR)

_SEVERITY_RANK = {
    IMMEDIATE: 4,
    HIGH: 3,
    MEDIUM: 2,
    LOW: 1,
    MINOR: 0,
    RECORD_ONLY: -1,
    UNABLE: -2,
}


@dataclass(frozen=True)
class UrgencyResult:
    urgency: str
    label: str
    rationale: str
    rule: str


def _result(urgency: str, rule: str, rationale: str) -> UrgencyResult:
    return UrgencyResult(
        urgency=urgency,
        label=URGENCY_LABELS[urgency],
        rationale=rationale,
        rule=rule,
    )


def classify(degree: Any, extent: Any, relevancy: Any) -> UrgencyResult:
    """Classify one component from its raw Degree/Extent/Relevancy codes."""

    d = normalize_code(degree)
    e = normalize_code(extent)
    r = normalize_code(relevancy)

    if UNABLE_TO_INSPECT in (d, e, r):
        return _result(UNABLE, "U", "One or more components could not be assessed")
    if d in (NOT_PRESENT, "0"):
        return _result(RECORD_ONLY, "R.1", "No defect present - record for tracking purposes")

    d_num, e_num, r_num = code_to_int(d), code_to_int(e), code_to_int(r)
    if d_num is None or e_num is None or r_num is None:
        return _result(RECORD_ONLY, "R.2", "Invalid or missing D/E/R values")

    if r_num == 4:
        return _result(IMMEDIATE, "4.1", "Critical relevancy (R=4)")

    if r_num == 3:
        if d_num >= 3 and e_num >= 4:
            return _result(IMMEDIATE, "4.2", "R=3, high degree (D>=3) and extensive (E>=4)")
        if d_num >= 3 or e_num >= 3:
            return _result(HIGH, "3.1", "R=3, high degree or extent")
        return _result(MEDIUM, "2.1", "R=3, moderate degree and extent")

    if r_num == 2:
        if d_num >= 4 and e_num >= 4:
            return _result(HIGH, "3.2", "R=2, very high degree and extent")
        if d_num >= 3 or e_num >= 3:
            return _result(MEDIUM, "2.2", "R=2, high degree or extent")
        return _result(LOW, "1.1", "R=2, low degree and extent")

    if r_num == 1:
        if d_num >= 4 or e_num >= 4:
            return _result(MEDIUM, "2.3", "R=1, very high degree or extent")
        return _result(LOW, "1.2", "R=1, low degree and extent")

    return _result(MINOR, "0.1", "Minimal urgency")


def severity_rank(urgency: Optional[str]) -> int:
    """Ordinal used for rollups; unknown values rank below every sentinel."""

    if urgency is None:
        return -3
    return _SEVERITY_RANK.get(str(urgency).strip().upper(), -3)


def worst_urgency(urgencies: Iterable[Optional[str]]) -> Optional[str]:
    """Most severe urgency on the numeric scale.

    ``R`` and ``U`` sit outside the scale; when nothing numeric is present the
    result is ``R``. An empty input yields ``None``.
    """

    seen = False
    worst: Optional[str] = None
    for urgency in urgencies:
        seen = True
        if urgency in NUMERIC_URGENCIES and severity_rank(urgency) > severity_rank(worst):
            worst = urgency

    if not seen:
        return None
    return worst if worst is not None else RECORD_ONLY


def urgency_label(urgency: Optional[str]) -> str:
    if urgency is None:
        return ""
    return URGENCY_LABELS.get(urgency, "Unknown")
