from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models


class Order(models.Model):
    class State(models.TextChoices):
        CART = "cart", "Cart"
        ADDRESS = "address", "Address"
        DELIVERY = "delivery", "Delivery"
        PAYMENT = "payment", "Payment"
        CONFIRM = "confirm", "Confirm"
        COMPLETE = "complete", "Complete"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    email = models.EmailField(blank=True, default="")

    distributor = models.ForeignKey(
        "order_cycles.Enterprise",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="distributed_orders",
    )
    order_cycle = models.ForeignKey(
        "order_cycles.OrderCycle",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    state = models.CharField(
        max_length=16, choices=State.choices, default=State.CART)
    # Set once, when checkout finishes. Null means the order is still a draft.
    completed_at = models.DateTimeField(null=True, blank=True)

    currency = models.CharField(max_length=3, default="EUR")

    # Codes of shipping.ShippingMethod / payments.PaymentMethod
    shipping_method = models.CharField(max_length=50, blank=True, default="")
    payment_method = models.CharField(max_length=50, blank=True, default="")

    items_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"))

    # Shipping address snapshot (copied from accounts.UserAddress)
    shipping_full_name = models.CharField(
        max_length=200, blank=True, default="")
    shipping_company = models.CharField(max_length=200, blank=True, default="")
    shipping_line1 = models.CharField(max_length=255, blank=True, default="")
    shipping_city = models.CharField(max_length=120, blank=True, default="")
    shipping_postal_code = models.CharField(
        max_length=32, blank=True, default="")
    shipping_country_code = models.CharField(
        max_length=2, blank=True, default="")
    shipping_phone = models.CharField(max_length=32, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "-created_at"], name="idx_order_user_created"),
            models.Index(fields=["order_cycle", "completed_at"], name="idx_order_cycle_completed"),
            models.Index(fields=["state", "-created_at"], name="idx_order_state_created"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"order:{self.id} user:{self.user_id} {self.state}"

    @property
    def is_complete(self) -> bool:
        return self.completed_at is not None

    @property
    def recipient_email(self) -> str:
        return (self.email or getattr(self.user, "email", "") or "").strip()

    def apply_shipping_address(self, address) -> None:
        self.shipping_full_name = address.full_name or ""
        self.shipping_company = address.company or ""
        self.shipping_line1 = address.line1 or ""
        self.shipping_city = address.city or ""
        self.shipping_postal_code = address.postal_code or ""
        self.shipping_country_code = (address.country_code or "").upper()
        self.shipping_phone = address.phone or ""

    def has_shipping_address(self) -> bool:
        required = (
            self.shipping_line1,
            self.shipping_city,
            self.shipping_postal_code,
            self.shipping_country_code,
        )
        return all((v or "").strip() for v in required)

    def recalculate_totals(self) -> None:
        from shipping.services import get_shipping_net

        items_total = Decimal("0.00")
        for ln in self.lines.all():
            items_total += Decimal(ln.unit_price) * int(ln.qty)
        self.items_total = items_total

        shipping_total = Decimal("0.00")
        if self.shipping_method and self.shipping_country_code:
            try:
                shipping_total = get_shipping_net(
                    shipping_method=self.shipping_method,
                    country_code=self.shipping_country_code,
                )
            except ValueError:
                shipping_total = Decimal("0.00")
        self.shipping_total = shipping_total

        self.total = self.items_total + self.shipping_total


class OrderLine(models.Model):
    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="lines")
    variant = models.ForeignKey(
        "catalog.Variant",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="order_lines",
    )

    sku = models.CharField(max_length=64, blank=True, default="")
    name = models.CharField(max_length=255, blank=True, default="")

    unit_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"))
    # Zero is allowed: out-of-stock lines stay on the order with qty 0.
    qty = models.PositiveIntegerField(default=1)
    total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["id"]

    def save(self, *args, **kwargs):
        if self.variant:
            if not self.sku:
                self.sku = self.variant.sku
            if not self.name:
                self.name = self.variant.display_name

        self.total = Decimal(self.unit_price or 0) * int(self.qty)
        return super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"order:{self.order_id} {self.sku} x{self.qty}"


class Payment(models.Model):
    class State(models.TextChoices):
        CHECKOUT = "checkout", "Checkout"
        PROCESSING = "processing", "Processing"
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"
        VOID = "void", "Void"

    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="payments")
    method = models.ForeignKey(
        "payments.PaymentMethod",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    state = models.CharField(
        max_length=20, choices=State.choices, default=State.CHECKOUT)

    currency = models.CharField(max_length=3, default="EUR")
    amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"))

    raw_response = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["state", "-created_at"], name="idx_payment_state_created"),
        ]
        ordering = ["id"]

    def __str__(self) -> str:
        return f"payment:{self.method_id}:{self.state} order:{self.order_id}"

    def process(self) -> None:
        """Hand an authorized payment over for capture.

        Checkout never calls this; capture happens later, out of band.
        """
        if self.state != self.State.CHECKOUT:
            raise ValueError(f"Cannot process payment in state {self.state}")
        self.state = self.State.PROCESSING
        self.save(update_fields=["state", "updated_at"])
