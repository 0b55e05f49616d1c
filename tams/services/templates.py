"""Component template lookups used when scoring inspections."""

from __future__ import annotations

from typing import Optional, Sequence

from tams import models


def active_template(asset_type: models.AssetType | None) -> models.ComponentTemplate | None:
    if asset_type is None:
        return None
    return (
        models.ComponentTemplate.objects.filter(asset_type=asset_type, is_active=True)
        .order_by("-version")
        .first()
    )


def active_template_items(asset_type: models.AssetType | None) -> list[models.ComponentTemplateItem]:
    template = active_template(asset_type)
    if template is None:
        return []
    return list(template.items.order_by("component_order", "id"))


def _normalise_name(name: str | None) -> str:
    return " ".join((name or "").split()).lower()


def match_template_item(
    component_name: str | None,
    position: int,
    items: Sequence[models.ComponentTemplateItem],
) -> Optional[models.ComponentTemplateItem]:
    """Match by name first, then fall back to position.

    Legacy inspections were saved with generic names ("Component 1"), so a
    name miss falls back to the template item in the same slot.
    """

    wanted = _normalise_name(component_name)
    if wanted:
        for item in items:
            if _normalise_name(item.component_name) == wanted:
                return item

    if 0 <= position < len(items):
        return items[position]
    return None
