"""Presentation mapping for condition indices and urgency codes."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from .codes import to_decimal
from .urgency import RECORD_ONLY, UNABLE

NOT_SCORED = "Not Scored"
EMPTY_VALUE = "—"

CI_BANDS = (
    (Decimal("80"), "Excellent", "success"),
    (Decimal("60"), "Good", "info"),
    (Decimal("40"), "Fair", "warning"),
)
POOR = ("Poor", "destructive")

URGENCY_BADGES: Dict[str, Dict[str, str]] = {
    "4": {"label": "Immediate", "color": "destructive"},
    "3": {"label": "High", "color": "warning"},
    "2": {"label": "Medium", "color": "info"},
    "1": {"label": "Low", "color": "slate"},
    "0": {"label": "Minor/Monitor", "color": "success"},
    RECORD_ONLY: {"label": "Record Only", "color": "muted"},
    UNABLE: {"label": "Unable to Inspect", "color": "muted"},
}

# Older inspection rows store the label instead of the code.
LEGACY_URGENCY_LABELS = {
    "immediate": "4",
    "critical": "4",
    "high": "3",
    "medium": "2",
    "low": "1",
    "routine": "0",
    "minor": "0",
    "minor/monitor": "0",
    "record only": RECORD_ONLY,
    "unable to inspect": UNABLE,
}


def round_ci(value: Any) -> Optional[int]:
    number = to_decimal(value)
    if number is None:
        return None
    return int(number.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_ci(value: Any) -> str:
    rounded = round_ci(value)
    return EMPTY_VALUE if rounded is None else str(rounded)


def ci_band(ci: Any) -> Optional[str]:
    number = to_decimal(ci)
    if number is None:
        return None
    for floor, label, _color in CI_BANDS:
        if number >= floor:
            return label
    return POOR[0]


def ci_badge(ci: Any) -> Dict[str, str]:
    number = to_decimal(ci)
    if number is None:
        return {"label": NOT_SCORED, "color": "muted"}
    for floor, label, color in CI_BANDS:
        if number >= floor:
            return {"label": label, "color": color}
    return {"label": POOR[0], "color": POOR[1]}


def normalize_urgency(urgency: Any) -> Optional[str]:
    if urgency is None:
        return None
    text = str(urgency).strip()
    if not text:
        return None
    if text.upper() in URGENCY_BADGES:
        return text.upper()
    return LEGACY_URGENCY_LABELS.get(text.lower())


def urgency_badge(urgency: Any) -> Dict[str, str]:
    code = normalize_urgency(urgency)
    if code is None:
        label = str(urgency).strip() if urgency is not None else ""
        return {"code": "", "label": label or "Unknown", "color": "muted"}
    return {"code": code, **URGENCY_BADGES[code]}
