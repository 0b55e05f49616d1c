from __future__ import annotations

from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command

from tams import models


@pytest.fixture
def stale_inspections(asset, asset_type):
    other = models.Asset.objects.create(asset_ref="GR-002", asset_type=asset_type)
    created = []
    for target, day, degree in ((asset, date(2024, 4, 2), "4"), (other, date(2025, 4, 2), "2")):
        inspection = models.Inspection.objects.create(asset=target, inspection_date=day)
        models.InspectionComponentScore.objects.create(
            inspection=inspection, component_name="Rail", degree=degree, extent="4", relevancy="4"
        )
        created.append(inspection)
    models.Inspection.objects.update(ci_final=None, worst_urgency="", calculation_metadata=None)
    return created


def test_recomputes_every_inspection(stale_inspections):
    out = StringIO()
    call_command("compute_condition", stdout=out)

    assert "Recomputed 2 inspection(s); 2 scored" in out.getvalue()
    first, second = (models.Inspection.objects.get(pk=i.pk) for i in stale_inspections)
    assert first.ci_final == Decimal("36")
    assert second.ci_final == Decimal("68")
    assert first.calculation_metadata["rule_version"] == "2"


def test_year_filter(stale_inspections):
    out = StringIO()
    call_command("compute_condition", "--year", "2025", stdout=out)

    assert "Recomputed 1 inspection(s)" in out.getvalue()
    assert models.Inspection.objects.get(pk=stale_inspections[0].pk).ci_final is None
    assert models.Inspection.objects.get(pk=stale_inspections[1].pk).ci_final == Decimal("68")


def test_asset_filter(stale_inspections):
    out = StringIO()
    call_command("compute_condition", "--asset", "GR-001", stdout=out)

    assert "Recomputed 1 inspection(s)" in out.getvalue()
    assert models.Inspection.objects.get(pk=stale_inspections[0].pk).worst_urgency == "4"


def test_no_matching_inspections(db):
    out = StringIO()
    call_command("compute_condition", "--asset", "missing", stdout=out)
    assert "No inspections found." in out.getvalue()
