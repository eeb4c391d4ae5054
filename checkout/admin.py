from __future__ import annotations

from django.contrib import admin

from .models import Order, OrderLine, Payment


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    autocomplete_fields = ("variant",)
    fields = ("variant", "sku", "name", "unit_price", "qty", "total")
    readonly_fields = ("total",)


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ("method", "state", "currency", "amount", "created_at")
    readonly_fields = ("state", "created_at")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "distributor",
        "order_cycle",
        "state",
        "completed_at",
        "shipping_method",
        "payment_method",
        "total",
        "created_at",
    )
    list_filter = ("state", "distributor", "order_cycle")
    search_fields = ("id", "user__email", "email")
    date_hierarchy = "created_at"
    readonly_fields = (
        "state",
        "completed_at",
        "items_total",
        "shipping_total",
        "total",
        "created_at",
        "updated_at",
    )
    fields = (
        "user",
        "email",
        "distributor",
        "order_cycle",
        "state",
        "completed_at",
        "shipping_method",
        "payment_method",
        "shipping_full_name",
        "shipping_company",
        "shipping_line1",
        "shipping_city",
        "shipping_postal_code",
        "shipping_country_code",
        "shipping_phone",
        "items_total",
        "shipping_total",
        "total",
        "created_at",
        "updated_at",
    )
    inlines = (OrderLineInline, PaymentInline)


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "method", "state", "amount", "created_at")
    list_filter = ("state", "method")
    search_fields = ("order__id", "order__user__email")
    readonly_fields = ("raw_response", "created_at", "updated_at")
