import os

import pytest

# Default environment for the lightweight SQLite test runs
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "project.settings")
os.environ.setdefault("USE_POSTGRES", "false")
os.environ.setdefault("TAMS_LOG_LEVEL", "WARNING")


@pytest.fixture
def asset_type(db):
    from tams.models import AssetType

    return AssetType.objects.create(name="Guardrail", abbreviation="GR")


@pytest.fixture
def template(asset_type):
    from tams.models import ComponentTemplate, ComponentTemplateItem

    template = ComponentTemplate.objects.create(
        asset_type=asset_type, template_name="Guardrail inspection", version=1
    )
    ComponentTemplateItem.objects.create(
        template=template,
        component_name="Rail",
        component_order=1,
        condition_category=ComponentTemplateItem.ConditionCategory.SAFETY,
        degree_rubric={"1": "Minor dents", "2": "Dented", "3": "Deformed", "4": "Broken"},
        extent_rubric={"1": "<10%", "2": "10-30%", "3": "30-60%", "4": ">60%"},
        relevancy_rubric={"1": "Cosmetic", "2": "Local", "3": "Serious", "4": "Critical"},
        quantity_unit="m",
    )
    ComponentTemplateItem.objects.create(
        template=template,
        component_name="Posts",
        component_order=2,
        condition_category=ComponentTemplateItem.ConditionCategory.HEALTH,
        quantity_unit="No.",
    )
    return template


@pytest.fixture
def asset(asset_type):
    from tams.models import Asset

    return Asset.objects.create(asset_ref="GR-001", asset_type=asset_type, road_name="A1")


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient

    return APIClient()
