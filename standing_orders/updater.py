from __future__ import annotations

from django.db import transaction

from checkout.models import Order, OrderLine

from .models import StandingLineItem


def update_line_items(standing_line_item: StandingLineItem, *, previous_quantity: int | None) -> int:
    """Push a standing line item's quantity into the orders not yet placed.

    Only lines still at ``previous_quantity`` follow the change; lines the
    customer edited on a particular order are left as they are. Returns the
    number of lines updated.
    """

    new_quantity = int(standing_line_item.quantity)
    if previous_quantity is None or int(previous_quantity) == new_quantity:
        return 0

    with transaction.atomic():
        lines = list(
            OrderLine.objects.select_for_update()
            .filter(
                variant_id=standing_line_item.variant_id,
                qty=int(previous_quantity),
                order__standing_order_link__standing_order_id=standing_line_item.standing_order_id,
                order__completed_at__isnull=True,
            )
            .order_by("id")
        )
        order_ids: set[int] = set()
        for ln in lines:
            ln.qty = new_quantity
            ln.save(update_fields=["qty", "total"])
            order_ids.add(ln.order_id)

        for order in Order.objects.filter(id__in=order_ids):
            order.recalculate_totals()
            order.save(update_fields=["items_total", "shipping_total", "total", "updated_at"])

    return len(lines)
