from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from order_cycles.models import Enterprise, OrderCycle
from order_cycles.services import open_order_cycles, variant_available_from

pytestmark = pytest.mark.django_db


def test_variant_offered_in_a_scheduled_order_cycle_is_available(
    shop, schedule2, order_cycle2, make_variant, offer
):
    variant = make_variant()
    offer(order_cycle2, variant)

    assert variant_available_from(variant_id=variant.id, shop_id=shop.id, schedule_id=schedule2.id)


def test_variant_outside_the_schedule_is_not_available(shop, schedule1, order_cycle2, make_variant, offer):
    variant = make_variant()
    offer(order_cycle2, variant)

    assert not variant_available_from(variant_id=variant.id, shop_id=shop.id, schedule_id=schedule1.id)


def test_variant_offered_to_another_shop_is_not_available(shop, schedule1, order_cycle1, make_variant):
    other_shop = Enterprise.objects.create(name="Other Hub", is_distributor=True)
    variant = make_variant()
    exchange = order_cycle1.exchanges.create(sender=shop, receiver=other_shop, incoming=False)
    exchange.variants.add(variant)

    assert not variant_available_from(variant_id=variant.id, shop_id=shop.id, schedule_id=schedule1.id)


def test_incoming_exchanges_do_not_make_variants_available(shop, producer, schedule1, order_cycle1, make_variant):
    variant = make_variant()
    exchange = order_cycle1.exchanges.create(sender=producer, receiver=shop, incoming=True)
    exchange.variants.add(variant)

    assert not variant_available_from(variant_id=variant.id, shop_id=shop.id, schedule_id=schedule1.id)


def test_open_order_cycles(shop, order_cycle1):
    now = timezone.now()
    closed = OrderCycle.objects.create(
        name="Last week",
        coordinator=shop,
        orders_open_at=now - timedelta(days=8),
        orders_close_at=now - timedelta(days=1),
    )

    cycles = list(open_order_cycles(now=now))

    assert order_cycle1 in cycles
    assert closed not in cycles
    assert order_cycle1.is_open(now)
    assert not closed.is_open(now)
