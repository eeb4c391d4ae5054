from __future__ import annotations

from django.conf import settings
from django.db import models


def backorders_allowed() -> bool:
    return bool(getattr(settings, "ALLOW_BACKORDERS", False))


def inventory_available_for_variant(*, variant_id: int) -> int:
    from catalog.models import InventoryItem

    agg = InventoryItem.objects.filter(variant_id=int(variant_id)).aggregate(
        total=models.Sum(models.F("qty_on_hand") - models.F("qty_reserved"))
    )
    return max(0, int(agg.get("total") or 0))


def inventory_available_for_variants(*, variant_ids: list[int]) -> dict[int, int]:
    """Available qty per variant id; variants without stock rows map to 0."""
    from catalog.models import InventoryItem

    ids = {int(v) for v in variant_ids if v}
    out = {vid: 0 for vid in ids}
    if not ids:
        return out

    rows = (
        InventoryItem.objects.filter(variant_id__in=ids)
        .values("variant_id")
        .annotate(total=models.Sum(models.F("qty_on_hand") - models.F("qty_reserved")))
    )
    for row in rows:
        out[int(row["variant_id"])] = max(0, int(row["total"] or 0))
    return out
