from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .models import Asset, Inspection, InspectionComponentScore
from .services.inspections import recompute_inspection, refresh_asset_cache

# Inspection fields that decide which inspection is an asset's latest.
_PLACEMENT_FIELDS = {"asset", "asset_id", "inspection_date"}


def _moves_inspection(update_fields) -> bool:
    return update_fields is None or bool(_PLACEMENT_FIELDS & set(update_fields))


@receiver(post_save, sender=InspectionComponentScore)
def _recompute_on_component_save(sender, instance: InspectionComponentScore, raw=False, **kwargs):
    if raw or instance.__dict__.pop("_recomputing", False):
        return
    recompute_inspection(instance.inspection)


@receiver(post_delete, sender=InspectionComponentScore)
def _recompute_on_component_delete(sender, instance: InspectionComponentScore, **kwargs):
    inspection = (
        Inspection.objects.select_related("asset").filter(pk=instance.inspection_id).first()
    )
    if inspection is None:
        return
    recompute_inspection(inspection)


@receiver(pre_save, sender=Inspection)
def _remember_previous_asset(sender, instance: Inspection, raw=False, update_fields=None, **kwargs):
    if raw or instance.pk is None or not _moves_inspection(update_fields):
        return
    instance._previous_asset_id = (
        Inspection.objects.filter(pk=instance.pk).values_list("asset_id", flat=True).first()
    )


@receiver(post_save, sender=Inspection)
def _refresh_asset_on_inspection_save(sender, instance: Inspection, raw=False, update_fields=None, **kwargs):
    if raw or not _moves_inspection(update_fields):
        return
    previous_asset_id = instance.__dict__.pop("_previous_asset_id", None)
    refresh_asset_cache(instance.asset)
    if previous_asset_id is not None and previous_asset_id != instance.asset_id:
        previous = Asset.objects.filter(pk=previous_asset_id).first()
        if previous is not None:
            refresh_asset_cache(previous)


@receiver(post_delete, sender=Inspection)
def _refresh_asset_on_inspection_delete(sender, instance: Inspection, **kwargs):
    asset = Asset.objects.filter(pk=instance.asset_id).first()
    if asset is None:
        return
    refresh_asset_cache(asset)
