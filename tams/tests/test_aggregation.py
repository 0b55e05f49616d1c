from __future__ import annotations

from decimal import Decimal

import pytest

from tams.services.scoring import (
    RULE_VERSION,
    ComponentAssessment,
    InvalidInputError,
    aggregate,
    compute_deru,
    score,
)


def _component(d, e, r, **extra):
    return {"degree": d, "extent": e, "relevancy": r, **extra}


def test_single_worst_case_component():
    result = aggregate([_component(4, 4, 4)])
    assert result.components[0].urgency.urgency == "4"
    assert result.components[0].ci == 36
    assert result.ci_final == Decimal("36")
    assert result.worst_urgency == "4"


def test_unable_to_inspect_component_is_not_scored():
    result = aggregate([_component("U", 2, 3)])
    assert result.components[0].urgency.urgency == "U"
    assert result.components[0].ci is None
    assert result.ci_final is None
    assert result.worst_urgency == "R"
    assert not result.is_scored


def test_not_present_component_counts_as_full_condition():
    result = aggregate([_component("X", 1, 1)])
    assert result.components[0].urgency.urgency == "R"
    assert result.components[0].ci == 100
    assert result.ci_final == Decimal("100")


def test_mixed_components_roll_up():
    result = aggregate([_component(3, 4, 3), _component(1, 1, 1)])
    assert [c.urgency.urgency for c in result.components] == ["4", "1"]
    assert result.worst_urgency == "4"
    assert result.ci_final == Decimal("81.5")


def test_empty_component_list():
    result = aggregate([])
    assert result.ci_final is None
    assert result.ci_health is None
    assert result.ci_safety is None
    assert result.worst_urgency is None
    assert result.deru_value is None
    assert result.total_remedial_cost == Decimal("0")


def test_ci_final_is_mean_of_independent_scores():
    triples = [("2", "3", "1"), ("4", "2", "2"), ("U", "1", "1"), ("1", "1", "3"), ("X", "", "")]
    result = aggregate([_component(*triple) for triple in triples])
    independent = [score(*triple) for triple in triples]
    numeric = [ci for ci in independent if ci is not None]
    assert result.ci_final == Decimal(sum(numeric)) / Decimal(len(numeric))


def test_means_keep_full_precision():
    result = aggregate([_component(1, 1, 1), _component(1, 1, 2), _component(1, 1, 2)])
    assert result.ci_final == Decimal(99 + 98 + 98) / Decimal(3)
    assert result.ci_final != round(result.ci_final, 2)


def test_untagged_components_share_final_ci():
    result = aggregate([_component(2, 2, 2), _component(1, 1, 1)])
    assert result.ci_health == result.ci_final
    assert result.ci_safety == result.ci_final


def test_tagged_components_split_health_and_safety():
    result = aggregate(
        [
            _component(4, 4, 4, condition_category="safety"),
            _component(1, 1, 1, condition_category="health"),
            _component(2, 2, 1, condition_category="Health"),
            _component(1, 1, 2),
        ]
    )
    assert result.ci_safety == Decimal("36")
    assert result.ci_health == Decimal("97.5")
    assert result.ci_final == Decimal(36 + 99 + 96 + 98) / Decimal(4)


def test_tagged_subset_without_scores_is_none():
    result = aggregate(
        [
            _component("U", 1, 1, condition_category="safety"),
            _component(1, 1, 1, condition_category="health"),
        ]
    )
    assert result.ci_safety is None
    assert result.ci_health == Decimal("99")


def test_aggregation_is_idempotent():
    components = [_component(3, 2, 2, quantity="4", rate="25"), _component("u", 1, 1)]
    assert aggregate(components) == aggregate(components)


def test_remedial_costs_and_notes():
    result = aggregate(
        [
            _component(4, 4, 4, quantity="10", rate="50", remedial_work="Replace rail "),
            _component(1, 1, 1, quantity="3", rate="20", remedial_work="Clean"),
            _component(4, 4, 3, quantity=None, rate="20", remedial_work=""),
        ]
    )
    assert result.components[0].remedial_cost == Decimal("500")
    assert result.components[1].remedial_cost is None
    assert result.components[2].remedial_cost == Decimal("0")
    assert result.total_remedial_cost == Decimal("500")
    assert result.overall_remedial == "Replace rail; Clean"


def test_repair_threshold_is_configurable():
    components = [_component(2, 2, 5, quantity="1", rate="100"), _component(3, 3, 1, quantity="2", rate="10")]
    result = aggregate(components, repair_threshold=95)
    assert result.components[1].remedial_cost == Decimal("20")


def test_overall_codes_come_from_worst_component():
    result = aggregate([_component(2, 2, 2), _component(3, 4, 3), _component(4, 4, 3)])
    assert (result.overall_degree, result.overall_extent, result.overall_relevancy) == ("3", "4", "3")


def test_deru_value():
    assert compute_deru(None) is None
    assert compute_deru(Decimal("30")) == Decimal("140.0")
    assert compute_deru(Decimal("50")) == Decimal("75.0")
    assert compute_deru(Decimal("70")) == Decimal("30.0")
    assert compute_deru(Decimal("90")) == Decimal("5.0")


def test_metadata_block():
    metadata = aggregate([_component(4, 4, 4), _component("U", 1, 1)]).as_metadata()
    assert metadata["rule_version"] == RULE_VERSION
    assert metadata["ci_final"] == "36"
    assert metadata["worst_urgency"] == "4"
    assert metadata["total_components"] == 2
    assert metadata["scored_components"] == 1
    assert metadata["excluded_components"] == 1


def test_accepts_assessment_objects_and_camel_case_records():
    result = aggregate(
        [
            ComponentAssessment(component_name="Rail", degree_code="2", extent_code="2", relevancy_code="2"),
            {"componentName": "Post", "degreeCode": "1", "extentCode": "1", "relevancyCode": "1"},
        ]
    )
    assert [c.ci for c in result.components] == [92, 99]
    assert result.components[1].assessment.component_name == "Post"


def test_partial_records_do_not_fail():
    result = aggregate([{"component_name": "Sign face"}, {"degree": "2", "quantity": "n/a"}])
    assert result.ci_final is None
    assert result.worst_urgency == "R"


@pytest.mark.parametrize("bad", [None, "4,4,4", 42, {"degree": "4"}])
def test_non_sequence_input_is_rejected(bad):
    with pytest.raises(InvalidInputError):
        aggregate(bad)


def test_non_mapping_component_is_rejected():
    with pytest.raises(InvalidInputError):
        aggregate([("4", "4", "4")])


def test_wrong_shaped_code_is_rejected():
    with pytest.raises(InvalidInputError):
        aggregate([_component(4.0, 4, 4)])
