from __future__ import annotations

from django.contrib import admin, messages

from standing_orders.exceptions import SelectionError
from standing_orders.placement import StandingOrderPlacementJob

from .models import Enterprise, Exchange, OrderCycle, Schedule


@admin.register(Enterprise)
class EnterpriseAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "is_producer", "is_distributor", "updated_at")
    list_filter = ("is_producer", "is_distributor")
    search_fields = ("name", "email")


class ExchangeInline(admin.TabularInline):
    model = Exchange
    extra = 0
    fields = ("sender", "receiver", "incoming", "variants")
    autocomplete_fields = ("sender", "receiver", "variants")


@admin.register(OrderCycle)
class OrderCycleAdmin(admin.ModelAdmin):
    list_display = ("name", "coordinator", "orders_open_at", "orders_close_at")
    list_filter = ("coordinator",)
    search_fields = ("name",)
    autocomplete_fields = ("coordinator",)
    inlines = (ExchangeInline,)
    actions = ("place_standing_orders",)

    @admin.action(description="Place standing orders")
    def place_standing_orders(self, request, queryset):
        for oc in queryset:
            try:
                summary = StandingOrderPlacementJob(oc).run()
            except SelectionError as exc:
                self.message_user(request, str(exc), level=messages.ERROR)
                continue

            level = messages.WARNING if summary.failed else messages.SUCCESS
            self.message_user(
                request,
                f"{oc}: placed {len(summary.placed)}, failed {len(summary.failed)}",
                level=level,
            )


@admin.register(Schedule)
class ScheduleAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)
    filter_horizontal = ("order_cycles",)
