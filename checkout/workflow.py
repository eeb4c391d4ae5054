"""Order checkout state machine.

An order moves ``cart -> address -> delivery -> payment -> confirm ->
complete``. Each transition validates what the next state needs. The whole
advance runs in one transaction, so a failing step leaves the persisted order
exactly as it was before the call. Payment capture is not part of checkout:
the payment is left authorized (state ``checkout``).
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from payments.services import get_available_payment_method
from shipping.services import available_shipping_methods

from .models import Order, Payment

logger = logging.getLogger(__name__)


class CheckoutError(ValueError):
    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step


class OrderAlreadyComplete(CheckoutError):
    pass


def _require_items(order: Order) -> None:
    if not order.lines.filter(qty__gt=0).exists():
        raise CheckoutError(Order.State.CART, "Order has no items")


def _require_address(order: Order) -> None:
    if not order.has_shipping_address():
        raise CheckoutError(Order.State.ADDRESS, "Shipping address is incomplete")


def _select_shipping_method(order: Order) -> None:
    methods = available_shipping_methods(distributor_id=order.distributor_id)
    if order.shipping_method:
        method = methods.filter(code=order.shipping_method).first()
    else:
        method = methods.first()
    if method is None:
        raise CheckoutError(Order.State.DELIVERY, "No shipping method available")

    order.shipping_method = method.code
    order.recalculate_totals()


def _attach_payment(order: Order) -> Payment:
    method = get_available_payment_method(
        code=order.payment_method, distributor_id=order.distributor_id
    )
    if method is None:
        raise CheckoutError(Order.State.PAYMENT, "Payment method is not available")

    payment = order.payments.filter(state=Payment.State.CHECKOUT).order_by("id").first()
    if payment is None:
        return Payment.objects.create(
            order=order,
            method=method,
            state=Payment.State.CHECKOUT,
            currency=order.currency,
            amount=order.total,
        )

    payment.method = method
    payment.amount = order.total
    payment.currency = order.currency
    payment.save(update_fields=["method", "amount", "currency", "updated_at"])
    return payment


def _next(order: Order) -> None:
    state = order.state
    if state == Order.State.CART:
        _require_items(order)
        order.state = Order.State.ADDRESS
    elif state == Order.State.ADDRESS:
        _require_address(order)
        order.state = Order.State.DELIVERY
    elif state == Order.State.DELIVERY:
        _select_shipping_method(order)
        order.state = Order.State.PAYMENT
    elif state == Order.State.PAYMENT:
        _attach_payment(order)
        order.state = Order.State.CONFIRM
    elif state == Order.State.CONFIRM:
        order.completed_at = timezone.now()
        order.state = Order.State.COMPLETE
    else:
        raise CheckoutError(state, f"Unknown checkout state: {state}")


def advance_to_completion(order: Order, *, send_confirmation: bool = True) -> Order:
    """Run every remaining checkout step and complete the order.

    Raises CheckoutError when a step cannot be passed. ``order`` is refreshed
    from the database on success.
    """

    with transaction.atomic():
        locked = Order.objects.select_for_update().filter(pk=order.pk).first()
        if locked is None:
            raise CheckoutError("lookup", "Order not found")
        if locked.is_complete:
            raise OrderAlreadyComplete(locked.state, "Order is already complete")

        while locked.state != Order.State.COMPLETE:
            _next(locked)

        locked.save(
            update_fields=[
                "state",
                "completed_at",
                "shipping_method",
                "items_total",
                "shipping_total",
                "total",
                "updated_at",
            ]
        )

        if send_confirmation:
            from .services import send_order_confirmation

            order_id = locked.id
            transaction.on_commit(lambda: send_order_confirmation(order_id=order_id))

    order.refresh_from_db()
    logger.info("Order completed", extra={"order_id": order.id})
    return order
