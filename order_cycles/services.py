from __future__ import annotations

from django.db.models import QuerySet
from django.utils import timezone

from .models import Exchange, OrderCycle


def variant_available_from(*, variant_id: int, shop_id: int, schedule_id: int) -> bool:
    """True when some outgoing exchange to ``shop_id`` in one of the schedule's
    order cycles offers the variant."""

    return Exchange.objects.filter(
        incoming=False,
        receiver_id=int(shop_id),
        order_cycle__schedules__id=int(schedule_id),
        variants__id=int(variant_id),
    ).exists()


def open_order_cycles(*, now=None) -> QuerySet[OrderCycle]:
    now = now or timezone.now()
    return OrderCycle.objects.filter(
        orders_open_at__lte=now,
        orders_close_at__gt=now,
    ).order_by("orders_open_at", "id")
