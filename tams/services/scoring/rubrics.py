"""Rubric lookups: map a raw D/E/R code to its human-readable meaning."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .codes import parse_serialized


def _load_rubric(rubric: Any) -> Any:
    if isinstance(rubric, str):
        return parse_serialized(rubric)
    return rubric


def resolve_meaning(rubric: Any, code: Any) -> str:
    """Return the rubric text for ``code`` or ``""`` when there is none.

    ``rubric`` may be a mapping or its JSON-serialised form. When the string
    cannot be parsed it is returned unchanged.
    """

    if rubric is None or code is None:
        return ""

    rubric = _load_rubric(rubric)
    if isinstance(rubric, str):
        return rubric
    if not isinstance(rubric, Mapping):
        return ""

    key = str(code).strip().upper()[:1]
    if not key:
        return ""

    meaning = rubric.get(key)
    if meaning:
        return str(meaning)

    if key.isdigit():
        number = int(key)
        # JSON round trips turn integer keys into strings, so try both forms.
        for candidate in (number, str(number)):
            meaning = rubric.get(candidate)
            if meaning:
                return str(meaning)

    return ""


def describe_rubric(rubric: Any) -> str:
    """Render a rubric as ``"1: Good; 2: Fair"`` for template listings."""

    if rubric is None or rubric == "":
        return "Not configured"

    rubric = _load_rubric(rubric)
    if isinstance(rubric, str):
        return rubric
    if isinstance(rubric, Mapping):
        if not rubric:
            return "Not configured"
        return "; ".join(f"{key}: {value}" for key, value in rubric.items())
    return "Not configured"
