from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class StandingOrder(models.Model):
    shop = models.ForeignKey(
        "order_cycles.Enterprise",
        on_delete=models.PROTECT,
        related_name="standing_orders",
    )
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="standing_orders",
    )
    schedule = models.ForeignKey(
        "order_cycles.Schedule",
        on_delete=models.PROTECT,
        related_name="standing_orders",
    )

    shipping_method = models.ForeignKey(
        "shipping.ShippingMethod",
        on_delete=models.PROTECT,
        related_name="standing_orders",
    )
    payment_method = models.ForeignKey(
        "payments.PaymentMethod",
        on_delete=models.PROTECT,
        related_name="standing_orders",
    )
    ship_address = models.ForeignKey(
        "accounts.UserAddress",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )
    bill_address = models.ForeignKey(
        "accounts.UserAddress",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )

    begins_at = models.DateTimeField(null=True, blank=True)
    ends_at = models.DateTimeField(null=True, blank=True)
    paused_at = models.DateTimeField(null=True, blank=True)
    canceled_at = models.DateTimeField(null=True, blank=True)

    orders = models.ManyToManyField(
        "checkout.Order",
        through="StandingOrderOrder",
        related_name="+",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["shop", "schedule"], name="idx_standing_order_shop_sched"),
        ]

    def __str__(self) -> str:
        return f"standing_order:{self.id} shop:{self.shop_id} customer:{self.customer_id}"

    def is_active(self, now=None) -> bool:
        now = now or timezone.now()
        if self.canceled_at is not None or self.paused_at is not None:
            return False
        if self.begins_at is not None and self.begins_at > now:
            return False
        if self.ends_at is not None and self.ends_at <= now:
            return False
        return True


class StandingLineItem(models.Model):
    standing_order = models.ForeignKey(
        StandingOrder, on_delete=models.CASCADE, related_name="standing_line_items"
    )
    variant = models.ForeignKey(
        "catalog.Variant",
        on_delete=models.PROTECT,
        related_name="standing_line_items",
    )
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="chk_standing_line_item_quantity_gte_1",
            ),
        ]

    def __str__(self) -> str:
        return f"standing_order:{self.standing_order_id} variant:{self.variant_id} x{self.quantity}"

    def available_from(self, shop_id: int, schedule_id: int) -> bool:
        from order_cycles.services import variant_available_from

        return variant_available_from(
            variant_id=self.variant_id, shop_id=shop_id, schedule_id=schedule_id
        )

    def clean(self):
        super().clean()
        so = getattr(self, "standing_order", None)
        if so is None or not self.variant_id:
            return
        if not self.available_from(so.shop_id, so.schedule_id):
            raise ValidationError(
                {"variant": "This variant is not offered by the shop in any order cycle of the schedule."}
            )


class StandingOrderOrder(models.Model):
    standing_order = models.ForeignKey(
        StandingOrder, on_delete=models.CASCADE, related_name="standing_order_orders"
    )
    order = models.OneToOneField(
        "checkout.Order", on_delete=models.CASCADE, related_name="standing_order_link"
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"standing_order:{self.standing_order_id} order:{self.order_id}"

    def clean(self):
        super().clean()
        order = getattr(self, "order", None)
        so = getattr(self, "standing_order", None)
        if order is None or so is None:
            return
        in_schedule = so.schedule.order_cycles.filter(id=order.order_cycle_id).exists()
        if not in_schedule:
            raise ValidationError(
                {"order": "Order cycle of the order is not part of the standing order's schedule."}
            )
