from __future__ import annotations

from django.db import models


class Product(models.Model):
    supplier = models.ForeignKey(
        "order_cycles.Enterprise",
        on_delete=models.PROTECT,
        related_name="supplied_products",
    )
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Variant(models.Model):
    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="variants")
    sku = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255, blank=True)

    # MVP: EUR-only.
    price_eur = models.DecimalField(max_digits=12, decimal_places=2)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sku"]

    def __str__(self) -> str:
        return self.sku

    @property
    def display_name(self) -> str:
        product_name = getattr(self.product, "name", "")
        if self.name and self.name != product_name:
            return f"{product_name} - {self.name}"
        return product_name or self.sku


class Warehouse(models.Model):
    code = models.SlugField(max_length=100, unique=True)
    name = models.CharField(max_length=255)

    # ISO 3166-1 alpha-2 (e.g. LT)
    country_code = models.CharField(max_length=2)

    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "code"]

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"


class InventoryItem(models.Model):
    variant = models.ForeignKey(
        Variant, on_delete=models.CASCADE, related_name="inventory_items"
    )
    warehouse = models.ForeignKey(
        Warehouse, on_delete=models.PROTECT, related_name="inventory_items"
    )

    qty_on_hand = models.IntegerField(default=0)
    qty_reserved = models.IntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["variant", "warehouse"],
                name="uniq_inventory_item_variant_warehouse",
            ),
            models.CheckConstraint(
                condition=models.Q(qty_on_hand__gte=0),
                name="chk_inventory_qty_on_hand_gte_0",
            ),
            models.CheckConstraint(
                condition=models.Q(qty_reserved__gte=0),
                name="chk_inventory_qty_reserved_gte_0",
            ),
            models.CheckConstraint(
                condition=models.Q(qty_reserved__lte=models.F("qty_on_hand")),
                name="chk_inventory_qty_reserved_lte_on_hand",
            ),
        ]

    @property
    def qty_available(self) -> int:
        return max(0, int(self.qty_on_hand) - int(self.qty_reserved))

    def __str__(self) -> str:
        return f"{self.variant_id}@{self.warehouse.code}: {self.qty_available}"
