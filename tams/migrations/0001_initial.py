from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AssetType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                ("abbreviation", models.CharField(blank=True, max_length=10)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Asset type",
                "verbose_name_plural": "Asset types",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ComponentTemplate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("template_name", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True)),
                ("version", models.PositiveIntegerField(default=1)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "asset_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="templates",
                        to="tams.assettype",
                    ),
                ),
            ],
            options={
                "verbose_name": "Component template",
                "verbose_name_plural": "Component templates",
                "ordering": ["asset_type", "-version"],
                "unique_together": {("asset_type", "version")},
            },
        ),
        migrations.CreateModel(
            name="ComponentTemplateItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("component_name", models.CharField(max_length=150)),
                ("component_order", models.PositiveSmallIntegerField(default=1)),
                ("what_to_inspect", models.TextField(blank=True)),
                ("degree_rubric", models.JSONField(blank=True, null=True)),
                ("extent_rubric", models.JSONField(blank=True, null=True)),
                ("relevancy_rubric", models.JSONField(blank=True, null=True)),
                ("quantity_unit", models.CharField(blank=True, max_length=20)),
                (
                    "condition_category",
                    models.CharField(
                        blank=True,
                        choices=[("", "Untagged"), ("health", "Health"), ("safety", "Safety")],
                        default="",
                        help_text="Health/safety tag used to split CI Health and CI Safety.",
                        max_length=10,
                    ),
                ),
                (
                    "template",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="tams.componenttemplate",
                    ),
                ),
            ],
            options={
                "verbose_name": "Component template item",
                "verbose_name_plural": "Component template items",
                "ordering": ["template", "component_order", "id"],
                "unique_together": {("template", "component_order")},
            },
        ),
        migrations.CreateModel(
            name="Asset",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("asset_ref", models.CharField(max_length=50, unique=True)),
                ("description", models.CharField(blank=True, max_length=255)),
                ("road_name", models.CharField(blank=True, max_length=150)),
                ("latest_ci", models.DecimalField(blank=True, decimal_places=4, max_digits=8, null=True)),
                ("latest_urgency", models.CharField(blank=True, max_length=2)),
                ("last_inspection_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("modified_at", models.DateTimeField(auto_now=True)),
                (
                    "asset_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="assets",
                        to="tams.assettype",
                    ),
                ),
            ],
            options={
                "ordering": ["asset_ref"],
            },
        ),
        migrations.CreateModel(
            name="Inspection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("inspection_date", models.DateField()),
                ("inspector_name", models.CharField(blank=True, max_length=150)),
                ("weather_conditions", models.CharField(blank=True, max_length=100)),
                ("comments", models.TextField(blank=True)),
                ("ci_health", models.DecimalField(blank=True, decimal_places=4, max_digits=8, null=True)),
                ("ci_safety", models.DecimalField(blank=True, decimal_places=4, max_digits=8, null=True)),
                ("ci_final", models.DecimalField(blank=True, decimal_places=4, max_digits=8, null=True)),
                ("worst_urgency", models.CharField(blank=True, max_length=2)),
                ("ci_band", models.CharField(blank=True, max_length=20)),
                ("deru_value", models.DecimalField(blank=True, decimal_places=4, max_digits=8, null=True)),
                ("total_remedial_cost", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("calculation_metadata", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("modified_at", models.DateTimeField(auto_now=True)),
                (
                    "asset",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="inspections",
                        to="tams.asset",
                    ),
                ),
            ],
            options={
                "ordering": ["-inspection_date", "-id"],
            },
        ),
        migrations.CreateModel(
            name="InspectionComponentScore",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("component_name", models.CharField(max_length=150)),
                (
                    "position",
                    models.PositiveSmallIntegerField(default=0, help_text="Display order within the inspection (0-based)."),
                ),
                ("degree", models.CharField(blank=True, max_length=50)),
                ("extent", models.CharField(blank=True, max_length=50)),
                ("relevancy", models.CharField(blank=True, max_length=50)),
                ("quantity", models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ("unit", models.CharField(blank=True, max_length=20)),
                ("rate", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("remedial_work", models.TextField(blank=True)),
                ("comments", models.TextField(blank=True)),
                ("urgency", models.CharField(blank=True, max_length=2)),
                ("conditional_index", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("cost", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                (
                    "inspection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="component_scores",
                        to="tams.inspection",
                    ),
                ),
            ],
            options={
                "verbose_name": "Inspection component score",
                "verbose_name_plural": "Inspection component scores",
                "ordering": ["inspection", "position", "id"],
            },
        ),
    ]
