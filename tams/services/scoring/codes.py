"""Input schema for the condition assessment engine.

Field data arrives as loosely typed records. Everything is converted here,
at the boundary, so the classifier and scorer only ever see a normalised
code or ``None``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

CODES = ("0", "1", "2", "3", "4", "U", "X")
UNABLE_TO_INSPECT = "U"
NOT_PRESENT = "X"

DIGITS = "0123456789"

# Quantities and rates beyond this magnitude are treated as unreadable.
MAX_DECIMAL_EXPONENT = 12

HEALTH = "health"
SAFETY = "safety"
CONDITION_CATEGORIES = (HEALTH, SAFETY)


class InvalidInputError(ValueError):
    """Raised when engine input violates the contract (not for fuzzy field data)."""


def normalize_code(value: Any) -> Optional[str]:
    """Return the significant code character, or ``None`` when missing.

    Only the first non-whitespace character of a string is significant, so
    ``"3 - visible cracking"`` is read as ``"3"``. Any digit is kept; digits
    above 4 fall through to the numeric decision tree.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError(f"Condition code must be a string, got {value!r}")
    if isinstance(value, int):
        if 0 <= value <= 9:
            value = str(value)
        else:
            raise InvalidInputError(f"Condition code out of range: {value!r}")
    if not isinstance(value, str):
        raise InvalidInputError(
            f"Condition code must be a string, got {type(value).__name__}"
        )

    stripped = value.strip()
    if not stripped:
        return None
    char = stripped[0].upper()
    if char in CODES or char in DIGITS:
        return char
    return None


def code_to_int(code: Optional[str]) -> Optional[int]:
    if code is None or not code.isdigit():
        return None
    return int(code)


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite() or result.adjusted() > MAX_DECIMAL_EXPONENT:
        return None
    return result


def normalize_category(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    category = value.strip().lower()
    return category if category in CONDITION_CATEGORIES else ""


def _first_present(record: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


@dataclass(frozen=True)
class ComponentAssessment:
    """One inspected component within one inspection."""

    component_name: str = ""
    degree_code: Optional[str] = None
    extent_code: Optional[str] = None
    relevancy_code: Optional[str] = None
    quantity: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    component_cost: Optional[Decimal] = None
    unit: str = ""
    remedial_work: str = ""
    condition_category: str = ""
    degree_rubric: Any = None
    extent_rubric: Any = None
    relevancy_rubric: Any = None

    def __post_init__(self):
        for field_name in ("degree_code", "extent_code", "relevancy_code"):
            object.__setattr__(self, field_name, normalize_code(getattr(self, field_name)))
        for field_name in ("quantity", "rate", "component_cost"):
            object.__setattr__(self, field_name, to_decimal(getattr(self, field_name)))
        object.__setattr__(self, "condition_category", normalize_category(self.condition_category))

    @classmethod
    def from_record(cls, record: Mapping) -> "ComponentAssessment":
        if not isinstance(record, Mapping):
            raise InvalidInputError(
                f"Component record must be a mapping, got {type(record).__name__}"
            )

        name = _first_present(record, "component_name", "componentName", "name")
        return cls(
            component_name=str(name) if name is not None else "",
            degree_code=_first_present(record, "degree_code", "degreeCode", "degree", "degree_value"),
            extent_code=_first_present(record, "extent_code", "extentCode", "extent", "extent_value"),
            relevancy_code=_first_present(
                record, "relevancy_code", "relevancyCode", "relevancy", "relevancy_value"
            ),
            quantity=record.get("quantity"),
            rate=record.get("rate"),
            component_cost=_first_present(record, "component_cost", "cost"),
            unit=str(record.get("unit") or ""),
            remedial_work=str(record.get("remedial_work") or ""),
            condition_category=record.get("condition_category") or "",
            degree_rubric=record.get("degree_rubric"),
            extent_rubric=record.get("extent_rubric"),
            relevancy_rubric=record.get("relevancy_rubric"),
        )

    @classmethod
    def coerce(cls, item: Any) -> "ComponentAssessment":
        if isinstance(item, cls):
            return item
        if isinstance(item, Mapping):
            return cls.from_record(item)
        raise InvalidInputError(
            f"Expected a component assessment or mapping, got {type(item).__name__}"
        )


def parse_serialized(value: str) -> Any:
    """Parse a JSON-serialised value, returning the raw string on failure."""

    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value
