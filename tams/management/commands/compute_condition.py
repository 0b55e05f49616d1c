from django.core.management.base import BaseCommand, CommandError

from tams.models import Inspection
from tams.services.inspections import recompute_inspection


class Command(BaseCommand):
    help = "Recompute condition index and urgency aggregates for stored inspections."

    def add_arguments(self, parser):
        parser.add_argument(
            "--year",
            type=int,
            help="Only recompute inspections carried out in this year (YYYY).",
        )
        parser.add_argument(
            "--asset",
            help="Only recompute inspections of the asset with this reference.",
        )

    def handle(self, *args, **options):
        inspections = Inspection.objects.select_related("asset__asset_type").order_by("inspection_date", "id")
        if options.get("year"):
            inspections = inspections.filter(inspection_date__year=options["year"])
        if options.get("asset"):
            inspections = inspections.filter(asset__asset_ref=options["asset"])

        total = inspections.count()
        if total == 0:
            self.stdout.write("No inspections found.")
            return

        self.stdout.write(f"Recomputing condition for {total} inspection(s)...")

        scored = 0
        for inspection in inspections:
            try:
                result = recompute_inspection(inspection)
            except Exception as e:
                raise CommandError(f"Error computing condition for inspection {inspection.id}: {e}")
            if result.is_scored:
                scored += 1

        self.stdout.write(self.style.SUCCESS(
            f"Completed. Recomputed {total} inspection(s); {scored} scored, {total - scored} not scored."
        ))
