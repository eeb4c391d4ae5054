from __future__ import annotations

from django.contrib import admin

from catalog.services import inventory_available_for_variant

from .models import StandingLineItem, StandingOrder, StandingOrderOrder
from .updater import update_line_items


class StandingLineItemInline(admin.TabularInline):
    model = StandingLineItem
    extra = 0
    fields = ("variant", "quantity", "stock")
    readonly_fields = ("stock",)
    autocomplete_fields = ("variant",)

    @admin.display(description="In stock")
    def stock(self, obj):
        if not obj or not obj.variant_id:
            return "-"
        return inventory_available_for_variant(variant_id=obj.variant_id)


class StandingOrderOrderInline(admin.TabularInline):
    model = StandingOrderOrder
    extra = 0
    fields = ("order", "created_at")
    readonly_fields = ("order", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(StandingOrder)
class StandingOrderAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "customer",
        "shop",
        "schedule",
        "begins_at",
        "ends_at",
        "paused_at",
        "canceled_at",
        "active",
    )
    list_filter = ("shop", "schedule")
    search_fields = ("id", "customer__email")
    autocomplete_fields = ("customer", "shop")
    inlines = (StandingLineItemInline, StandingOrderOrderInline)

    @admin.display(boolean=True, description="Active")
    def active(self, obj):
        return obj.is_active()

    def save_formset(self, request, form, formset, change):
        if formset.model is not StandingLineItem:
            return super().save_formset(request, form, formset, change)

        previous = {
            f.instance.pk: f.initial.get("quantity")
            for f in formset.forms
            if f.instance.pk and "quantity" in f.changed_data
        }
        super().save_formset(request, form, formset, change)
        for item in formset.new_objects + [obj for obj, _fields in formset.changed_objects]:
            if item.pk in previous:
                update_line_items(item, previous_quantity=previous[item.pk])
