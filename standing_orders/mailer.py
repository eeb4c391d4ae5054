from __future__ import annotations

import logging
from typing import Any

from django.db import DatabaseError

from checkout.models import Order
from checkout.services import order_email_context
from notifications.services import SendEmailResult, send_templated_email

from .exceptions import NotificationError

logger = logging.getLogger(__name__)

PLACEMENT_TEMPLATE = "standing_order_placement"
PLACEMENT_CAPPED_TEMPLATE = "standing_order_placement_capped"
FAILURE_TEMPLATE = "standing_order_failure"


def _changes_payload(order: Order, changes: dict[int, int]) -> list[dict[str, Any]]:
    lines = {ln.id: ln for ln in order.lines.all()}
    out: list[dict[str, Any]] = []
    for line_id, original_qty in sorted(changes.items()):
        ln = lines.get(int(line_id))
        if ln is None:
            logger.warning(
                "Capped line is no longer on the order",
                extra={"order_id": order.id, "line_id": int(line_id)},
            )
            continue
        out.append(
            {
                "line_id": ln.id,
                "sku": ln.sku,
                "name": ln.name,
                "original_qty": int(original_qty),
                "qty": int(ln.qty),
            }
        )
    return out


def _send(order: Order, *, template_key: str, context: dict[str, Any], payload: dict[str, Any]) -> SendEmailResult:
    to_email = order.recipient_email
    if not to_email:
        raise NotificationError("Order has no recipient email", order_id=order.id)

    try:
        result = send_templated_email(
            template_key=template_key,
            to_email=to_email,
            context=context,
            language_code=getattr(order.user, "language_code", "") or None,
            order_id=order.id,
            payload=payload,
        )
    except DatabaseError as exc:
        raise NotificationError(f"Email log could not be written: {exc}", order_id=order.id) from exc
    if not result.ok:
        raise NotificationError(result.error or "Email was not sent", order_id=order.id)
    return result


def send_placement_email(order: Order, changes: dict[int, int]) -> SendEmailResult:
    try:
        capped = _changes_payload(order, changes)
        context = {
            **order_email_context(order),
            "changes": capped,
            "has_changes": bool(capped),
        }
    except DatabaseError as exc:
        raise NotificationError(f"Email context could not be built: {exc}", order_id=order.id) from exc

    template_key = PLACEMENT_CAPPED_TEMPLATE if capped else PLACEMENT_TEMPLATE
    return _send(
        order,
        template_key=template_key,
        context=context,
        payload={"changes": capped},
    )


def send_failure_email(order: Order, error: Exception) -> SendEmailResult:
    try:
        context = {
            **order_email_context(order),
            "error": str(error),
        }
    except DatabaseError as exc:
        raise NotificationError(f"Email context could not be built: {exc}", order_id=order.id) from exc

    return _send(
        order,
        template_key=FAILURE_TEMPLATE,
        context=context,
        payload={"error": str(error)},
    )
