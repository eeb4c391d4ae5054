from __future__ import annotations

from django.db import models
from django.utils import timezone


class Enterprise(models.Model):
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")

    is_producer = models.BooleanField(default=False)
    # Distributors ("shops") receive goods and sell them to customers.
    is_distributor = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class OrderCycle(models.Model):
    name = models.CharField(max_length=255)
    coordinator = models.ForeignKey(
        Enterprise, on_delete=models.PROTECT, related_name="coordinated_order_cycles"
    )

    orders_open_at = models.DateTimeField(null=True, blank=True)
    orders_close_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-orders_open_at", "-id"]
        indexes = [
            models.Index(fields=["orders_open_at", "orders_close_at"], name="idx_order_cycle_open_close"),
        ]

    def __str__(self) -> str:
        return self.name

    def is_open(self, now=None) -> bool:
        now = now or timezone.now()
        if self.orders_open_at is None or self.orders_close_at is None:
            return False
        return self.orders_open_at <= now < self.orders_close_at


class Exchange(models.Model):
    order_cycle = models.ForeignKey(
        OrderCycle, on_delete=models.CASCADE, related_name="exchanges"
    )
    sender = models.ForeignKey(
        Enterprise, on_delete=models.PROTECT, related_name="sent_exchanges"
    )
    receiver = models.ForeignKey(
        Enterprise, on_delete=models.PROTECT, related_name="received_exchanges"
    )
    # Incoming: producer -> coordinator. Outgoing: coordinator -> shop.
    incoming = models.BooleanField(default=False)

    variants = models.ManyToManyField(
        "catalog.Variant", related_name="exchanges", blank=True
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["order_cycle", "sender", "receiver", "incoming"],
                name="uniq_exchange_per_direction",
            )
        ]
        ordering = ["order_cycle_id", "id"]

    def __str__(self) -> str:
        direction = "in" if self.incoming else "out"
        return f"oc:{self.order_cycle_id} {self.sender_id}->{self.receiver_id} ({direction})"


class Schedule(models.Model):
    name = models.CharField(max_length=255)
    order_cycles = models.ManyToManyField(
        OrderCycle, related_name="schedules", blank=True
    )

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
