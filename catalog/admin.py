from __future__ import annotations

from django.contrib import admin

from .models import InventoryItem, Product, Variant, Warehouse


class VariantInline(admin.TabularInline):
    model = Variant
    extra = 0
    fields = ("sku", "name", "price_eur", "is_active")


class InventoryItemInline(admin.TabularInline):
    model = InventoryItem
    extra = 0
    fields = ("warehouse", "qty_on_hand", "qty_reserved")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "supplier", "is_active", "updated_at")
    list_filter = ("is_active", "supplier")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    inlines = (VariantInline,)


@admin.register(Variant)
class VariantAdmin(admin.ModelAdmin):
    list_display = ("sku", "product", "name", "price_eur", "is_active")
    list_filter = ("is_active",)
    search_fields = ("sku", "name", "product__name")
    autocomplete_fields = ("product",)
    inlines = (InventoryItemInline,)


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "country_code", "is_active", "sort_order")
    list_filter = ("is_active", "country_code")
    search_fields = ("code", "name")
    ordering = ("sort_order", "code")


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("variant", "warehouse", "qty_on_hand", "qty_reserved", "updated_at")
    list_filter = ("warehouse",)
    search_fields = ("variant__sku", "variant__product__name")
    autocomplete_fields = ("variant",)
