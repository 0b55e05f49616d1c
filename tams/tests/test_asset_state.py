from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from tams.services.scoring import InspectionRecord, InvalidInputError, project_current_state, sort_latest_first


def _record(day, *triples):
    return InspectionRecord(
        inspection_date=day,
        components=tuple({"degree": d, "extent": e, "relevancy": r} for d, e, r in triples),
        reference=str(day),
    )


def test_no_history_gives_no_state():
    assert project_current_state([]) is None


def test_latest_record_wins():
    history = [
        _record(date(2025, 5, 1), ("1", "1", "1")),
        _record(date(2023, 5, 1), ("4", "4", "4")),
    ]
    state = project_current_state(history)
    assert state.ci_final == Decimal("99")
    assert state.worst_urgency == "1"


def test_mapping_records_are_accepted():
    state = project_current_state(
        [{"inspection_date": date(2025, 1, 1), "component_scores": [{"degree": "2", "extent": "2", "relevancy": "2"}]}]
    )
    assert state.ci_final == Decimal("92")


def test_partial_historical_record_degrades_to_unscored():
    state = project_current_state([{"inspection_date": date(2020, 1, 1)}])
    assert state.ci_final is None
    assert state.worst_urgency is None

    state = project_current_state([{"components": [{"component_name": "Face", "quantity": None}]}])
    assert state.ci_final is None
    assert state.worst_urgency == "R"


def test_repair_threshold_is_passed_through():
    history = [
        InspectionRecord(
            inspection_date=date(2025, 1, 1),
            components=({"degree": "1", "extent": "1", "relevancy": "2", "quantity": "2", "rate": "5"},),
        )
    ]
    assert project_current_state(history).total_remedial_cost == Decimal("0")
    assert project_current_state(history, repair_threshold=99).total_remedial_cost == Decimal("10")


@pytest.mark.parametrize("bad", [None, "history", 7])
def test_non_sequence_history_is_rejected(bad):
    with pytest.raises(InvalidInputError):
        project_current_state(bad)


def test_unknown_record_shape_is_rejected():
    with pytest.raises(InvalidInputError):
        project_current_state([object()])


def test_sort_latest_first_puts_undated_last():
    undated = _record(None, ("1", "1", "1"))
    old = _record(date(2022, 1, 1), ("1", "1", "1"))
    new = _record(date(2024, 1, 1), ("1", "1", "1"))
    assert sort_latest_first([undated, old, new]) == [new, old, undated]
