from __future__ import annotations

from django.db import models


class PaymentMethod(models.Model):
    class Kind(models.TextChoices):
        OFFLINE = "offline", "Offline"
        GATEWAY = "gateway", "Gateway"
        COD = "cod", "Cash on delivery"

    code = models.SlugField(max_length=50, unique=True)
    name = models.CharField(max_length=200)
    kind = models.CharField(max_length=20, choices=Kind.choices, default=Kind.OFFLINE)
    provider = models.CharField(max_length=50, blank=True, default="")

    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    # Empty = offered by every distributor.
    distributors = models.ManyToManyField(
        "order_cycles.Enterprise",
        related_name="payment_methods",
        blank=True,
    )

    instructions = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "code"]
        indexes = [
            models.Index(fields=["code", "is_active"], name="idx_payment_method_code"),
        ]

    def __str__(self) -> str:
        return self.code
