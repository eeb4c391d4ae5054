from __future__ import annotations

import logging
from typing import Any

from notifications.services import SendEmailResult, send_templated_email

from .models import Order

logger = logging.getLogger(__name__)


def order_lines_context(order: Order) -> list[dict[str, Any]]:
    return [
        {
            "id": ln.id,
            "sku": ln.sku,
            "name": ln.name,
            "qty": int(ln.qty),
            "unit_price": ln.unit_price,
            "total": ln.total,
        }
        for ln in order.lines.all().order_by("id")
    ]


def order_email_context(order: Order) -> dict[str, Any]:
    return {
        "order_id": order.id,
        "order": order,
        "lines": order_lines_context(order),
        "items_total": order.items_total,
        "shipping_total": order.shipping_total,
        "total": order.total,
        "currency": order.currency,
        "shop_name": getattr(order.distributor, "name", ""),
        "customer_name": getattr(order.user, "full_name", ""),
        "completed_at": order.completed_at,
    }


def send_order_confirmation(*, order_id: int) -> SendEmailResult | None:
    order = (
        Order.objects.select_related("user", "distributor")
        .filter(id=int(order_id))
        .first()
    )
    if order is None or not order.recipient_email:
        return None

    result = send_templated_email(
        template_key="checkout_order_confirmation",
        to_email=order.recipient_email,
        context=order_email_context(order),
        language_code=getattr(order.user, "language_code", "") or None,
        order_id=order.id,
    )
    if not result.ok:
        logger.warning(
            "Order confirmation email failed",
            extra={"order_id": order.id, "error": result.error},
        )
    return result
