from __future__ import annotations

import logging

from django.db import DatabaseError, transaction

from catalog.services import backorders_allowed, inventory_available_for_variants
from checkout.models import Order, OrderLine

from .exceptions import CapError

logger = logging.getLogger(__name__)


def cap_quantity_and_store_changes(order: Order) -> dict[int, int]:
    """Cap line quantities at available stock.

    Returns ``{line_id: original_qty}`` for every line that was reduced.
    Lines keep their place on the order even when capped to zero. The new
    quantities are committed right away and stay in place whatever happens
    to the order afterwards. An order placed meanwhile is left untouched.
    """

    if backorders_allowed():
        return {}

    changes: dict[int, int] = {}
    try:
        with transaction.atomic():
            locked = Order.objects.select_for_update().get(pk=order.pk)
            if locked.is_complete:
                return {}

            lines = list(
                OrderLine.objects.select_for_update()
                .filter(order_id=order.id)
                .order_by("id")
            )
            stock = inventory_available_for_variants(
                variant_ids=[ln.variant_id for ln in lines if ln.variant_id]
            )

            for ln in lines:
                if not ln.variant_id:
                    continue
                available = max(0, int(stock.get(int(ln.variant_id), 0)))
                if int(ln.qty) <= available:
                    continue
                changes[ln.id] = int(ln.qty)
                ln.qty = available
                ln.save(update_fields=["qty", "total"])

            if changes:
                locked.recalculate_totals()
                locked.save(update_fields=["items_total", "shipping_total", "total", "updated_at"])
    except DatabaseError as exc:
        raise CapError(f"Could not cap quantities: {exc}", order_id=order.id) from exc

    if changes:
        logger.info(
            "Capped order quantities to available stock",
            extra={"order_id": order.id, "changes": changes},
        )
    return changes
