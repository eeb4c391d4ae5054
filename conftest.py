from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.models import User, UserAddress
from catalog.models import InventoryItem, Product, Variant, Warehouse
from checkout.models import Order, OrderLine
from notifications.models import EmailTemplate
from order_cycles.models import Enterprise, Exchange, OrderCycle, Schedule
from payments.models import PaymentMethod
from shipping.models import ShippingMethod, ShippingRate
from standing_orders.models import StandingLineItem, StandingOrder, StandingOrderOrder

EMAIL_TEMPLATES = {
    "checkout_order_confirmation": "Order #{{ order_id }} confirmed",
    "standing_order_placement": "Subscription order #{{ order_id }} placed",
    "standing_order_placement_capped": "Subscription order #{{ order_id }} placed with changes",
    "standing_order_failure": "Subscription order #{{ order_id }} failed",
}


@pytest.fixture(autouse=True)
def email_templates(db):
    for key, subject in EMAIL_TEMPLATES.items():
        EmailTemplate.objects.create(
            key=key,
            language_code="en",
            subject=subject,
            body_text="{% for line in lines %}{{ line.name }} x{{ line.qty }}\n{% endfor %}",
        )


@pytest.fixture
def shop(db):
    return Enterprise.objects.create(name="Green Hub", email="hub@example.com", is_distributor=True)


@pytest.fixture
def producer(db):
    return Enterprise.objects.create(name="Hill Farm", is_producer=True)


def _order_cycle(name: str, coordinator: Enterprise) -> OrderCycle:
    now = timezone.now()
    return OrderCycle.objects.create(
        name=name,
        coordinator=coordinator,
        orders_open_at=now - timedelta(hours=1),
        orders_close_at=now + timedelta(days=6),
    )


@pytest.fixture
def order_cycle1(shop):
    return _order_cycle("Week 1", shop)


@pytest.fixture
def order_cycle2(shop):
    return _order_cycle("Week 2", shop)


@pytest.fixture
def schedule1(order_cycle1):
    schedule = Schedule.objects.create(name="Weekly")
    schedule.order_cycles.set([order_cycle1])
    return schedule


@pytest.fixture
def schedule2(order_cycle1, order_cycle2):
    schedule = Schedule.objects.create(name="Fortnightly")
    schedule.order_cycles.set([order_cycle1, order_cycle2])
    return schedule


@pytest.fixture
def warehouse(db):
    return Warehouse.objects.create(code="main", name="Main", country_code="LT")


@pytest.fixture
def shipping_method(db):
    method = ShippingMethod.objects.create(code="courier", name="Courier")
    ShippingRate.objects.create(method=method, country_code="LT", net_eur=Decimal("3.50"))
    return method


@pytest.fixture
def payment_method(db):
    return PaymentMethod.objects.create(code="bank", name="Bank transfer")


@pytest.fixture
def customer(db):
    return User.objects.create_user(email="customer@example.com", first_name="Ona")


@pytest.fixture
def address(customer):
    return UserAddress.objects.create(
        user=customer,
        full_name="Ona Customer",
        line1="Main st. 1",
        city="Vilnius",
        postal_code="01100",
        country_code="LT",
    )


@pytest.fixture
def make_variant(producer, warehouse):
    counter = {"n": 0}

    def make(*, stock: int = 10, price: str = "2.00") -> Variant:
        counter["n"] += 1
        n = counter["n"]
        product = Product.objects.create(supplier=producer, name=f"Produce {n}", slug=f"produce-{n}")
        variant = Variant.objects.create(product=product, sku=f"SKU-{n}", price_eur=Decimal(price))
        InventoryItem.objects.create(variant=variant, warehouse=warehouse, qty_on_hand=stock)
        return variant

    return make


@pytest.fixture
def offer(producer, shop):
    """Make variants orderable from ``shop`` in the given order cycle."""

    def add(order_cycle: OrderCycle, *variants: Variant) -> Exchange:
        exchange, _ = Exchange.objects.get_or_create(
            order_cycle=order_cycle, sender=order_cycle.coordinator, receiver=shop, incoming=False
        )
        exchange.variants.add(*variants)
        return exchange

    return add


@pytest.fixture
def make_standing_order(shop, customer, address, shipping_method, payment_method, make_variant, offer):
    def make(schedule: Schedule, *, items: list[tuple[Variant, int]] | None = None) -> StandingOrder:
        if items is None:
            items = [(make_variant(), 2)]
        so = StandingOrder.objects.create(
            shop=shop,
            customer=customer,
            schedule=schedule,
            shipping_method=shipping_method,
            payment_method=payment_method,
            ship_address=address,
            bill_address=address,
        )
        for variant, quantity in items:
            for oc in schedule.order_cycles.all():
                offer(oc, variant)
            StandingLineItem.objects.create(standing_order=so, variant=variant, quantity=quantity)
        return so

    return make


@pytest.fixture
def initialise_orders():
    """Create the draft order of every order cycle in the schedule, as the
    standing order form does when a subscription is saved."""

    def initialise(so: StandingOrder) -> list[Order]:
        orders: list[Order] = []
        for oc in so.schedule.order_cycles.all().order_by("id"):
            order = Order(
                user=so.customer,
                email=so.customer.email,
                distributor=so.shop,
                order_cycle=oc,
                shipping_method=so.shipping_method.code,
                payment_method=so.payment_method.code,
            )
            if so.ship_address is not None:
                order.apply_shipping_address(so.ship_address)
            order.save()
            for item in so.standing_line_items.all():
                OrderLine.objects.create(
                    order=order,
                    variant=item.variant,
                    unit_price=item.variant.price_eur,
                    qty=item.quantity,
                )
            order.recalculate_totals()
            order.save()
            StandingOrderOrder.objects.create(standing_order=so, order=order)
            orders.append(order)
        return orders

    return initialise
