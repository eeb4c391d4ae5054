"""Placement of standing (subscription) orders for an order cycle.

When an order cycle opens, every draft order generated for it by a standing
order is capped against current stock, taken through checkout without
capturing payment, and announced to the customer with a single email.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.db import DatabaseError
from django.db.models import QuerySet

from checkout.models import Order
from checkout.workflow import CheckoutError, OrderAlreadyComplete, advance_to_completion
from order_cycles.models import OrderCycle

from . import mailer
from .exceptions import CapError, CompletionError, NotificationError, SelectionError
from .line_items import cap_quantity_and_store_changes

logger = logging.getLogger(__name__)


@dataclass
class PlacementSummary:
    order_cycle_id: int
    placed: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    notification_failed: list[int] = field(default_factory=list)
    # Placed meanwhile by another run
    skipped: list[int] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.placed) + len(self.failed)


class StandingOrderPlacementJob:
    def __init__(self, order_cycle: OrderCycle | int):
        self.order_cycle_id = int(getattr(order_cycle, "pk", order_cycle))

    def run(self) -> PlacementSummary:
        summary = PlacementSummary(order_cycle_id=self.order_cycle_id)
        try:
            orders = list(self.orders())
        except DatabaseError as exc:
            raise SelectionError(
                f"Could not select standing orders for order cycle {self.order_cycle_id}: {exc}"
            ) from exc

        logger.info(
            "Placing standing orders",
            extra={"order_cycle_id": self.order_cycle_id, "orders": len(orders)},
        )

        for order in orders:
            try:
                placed = self.process(order)
            except NotificationError:
                summary.placed.append(order.id)
                summary.notification_failed.append(order.id)
                logger.exception("Placement email failed", extra={"order_id": order.id})
            except (CapError, CompletionError) as exc:
                summary.failed.append(order.id)
                logger.exception("Standing order was not placed", extra={"order_id": order.id})
                if isinstance(exc, CompletionError):
                    self.send_failure_email(order, exc)
            except Exception:
                # The order's state is unknown; leave it for the next run.
                summary.failed.append(order.id)
                logger.exception("Unexpected error while placing standing order", extra={"order_id": order.id})
            else:
                if placed:
                    summary.placed.append(order.id)
                else:
                    summary.skipped.append(order.id)

        logger.info(
            "Standing order placement finished",
            extra={
                "order_cycle_id": self.order_cycle_id,
                "placed": len(summary.placed),
                "failed": len(summary.failed),
            },
        )
        return summary

    def orders(self) -> QuerySet[Order]:
        return (
            Order.objects.filter(
                order_cycle_id=self.order_cycle_id,
                completed_at__isnull=True,
                standing_order_link__isnull=False,
            )
            .select_related("user", "distributor")
            .order_by("id")
        )

    def process(self, order: Order) -> bool:
        """Place one order. Returns False when it was already complete."""

        changes = self.cap_quantity_and_store_changes(order)
        try:
            advance_to_completion(order, send_confirmation=False)
        except OrderAlreadyComplete:
            logger.info("Order already placed, skipping", extra={"order_id": order.id})
            return False
        except CheckoutError as exc:
            raise CompletionError(str(exc), order_id=order.id) from exc
        except DatabaseError as exc:
            raise CompletionError(f"Checkout failed: {exc}", order_id=order.id) from exc

        if not order.is_complete:
            raise CompletionError("Order was not completed", order_id=order.id)
        self.send_placement_email(order, changes)
        return True

    def cap_quantity_and_store_changes(self, order: Order) -> dict[int, int]:
        return cap_quantity_and_store_changes(order)

    def send_placement_email(self, order: Order, changes: dict[int, int]) -> None:
        mailer.send_placement_email(order, changes)

    def send_failure_email(self, order: Order, error: Exception) -> None:
        if not getattr(settings, "STANDING_ORDERS_SEND_FAILURE_EMAILS", True):
            return
        try:
            order.refresh_from_db()
            mailer.send_failure_email(order, error)
        except (NotificationError, DatabaseError):
            logger.exception("Failure email was not sent", extra={"order_id": order.id})
