from __future__ import annotations

from datetime import timedelta
from unittest import mock

import pytest
from django.db import DatabaseError
from django.utils import timezone

from catalog.services import inventory_available_for_variants
from checkout.models import Order, OrderLine, Payment
from checkout.workflow import CheckoutError, advance_to_completion
from notifications.models import EmailTemplate, OutboundEmail
from standing_orders import mailer
from standing_orders.exceptions import SelectionError
from standing_orders.models import StandingOrderOrder
from standing_orders.placement import StandingOrderPlacementJob

pytestmark = pytest.mark.django_db


def _order(user, order_cycle, **kwargs) -> Order:
    return Order.objects.create(user=user, order_cycle=order_cycle, **kwargs)


def test_selects_only_incomplete_linked_orders_of_the_order_cycle(
    customer, order_cycle1, order_cycle2, schedule1, schedule2, make_standing_order
):
    so1 = make_standing_order(schedule1)
    so2 = make_standing_order(schedule2)

    complete_linked = _order(customer, order_cycle1, completed_at=timezone.now() - timedelta(minutes=5))
    incomplete_linked = _order(customer, order_cycle1)
    incomplete_unlinked = _order(customer, order_cycle1)
    other_cycle = _order(customer, order_cycle2)
    StandingOrderOrder.objects.create(standing_order=so1, order=complete_linked)
    StandingOrderOrder.objects.create(standing_order=so1, order=incomplete_linked)
    StandingOrderOrder.objects.create(standing_order=so2, order=other_cycle)

    orders = list(StandingOrderPlacementJob(order_cycle1).orders())

    assert incomplete_linked in orders
    assert complete_linked not in orders
    assert incomplete_unlinked not in orders
    assert other_cycle not in orders


def test_caps_quantity_at_the_stock_level_and_reports_the_change(customer, order_cycle1, make_variant):
    order = _order(customer, order_cycle1)
    variant1 = make_variant(stock=5)
    variant2 = make_variant(stock=2)
    variant3 = make_variant(stock=0)
    line1 = OrderLine.objects.create(order=order, variant=variant1, unit_price=variant1.price_eur, qty=3)
    line2 = OrderLine.objects.create(order=order, variant=variant2, unit_price=variant2.price_eur, qty=3)
    line3 = OrderLine.objects.create(order=order, variant=variant3, unit_price=variant3.price_eur, qty=3)

    changes = StandingOrderPlacementJob(order_cycle1).cap_quantity_and_store_changes(order)

    line1.refresh_from_db()
    line2.refresh_from_db()
    line3.refresh_from_db()
    assert line1.qty == 3
    assert line2.qty == 2
    assert line3.qty == 0
    assert changes == {line2.id: 3, line3.id: 3}
    assert order.lines.count() == 3


def test_capping_is_skipped_when_backorders_are_allowed(settings, customer, order_cycle1, make_variant):
    settings.ALLOW_BACKORDERS = True
    order = _order(customer, order_cycle1)
    variant = make_variant(stock=1)
    line = OrderLine.objects.create(order=order, variant=variant, unit_price=variant.price_eur, qty=4)

    changes = StandingOrderPlacementJob(order_cycle1).cap_quantity_and_store_changes(order)

    line.refresh_from_db()
    assert changes == {}
    assert line.qty == 4


def test_capping_updates_order_totals(customer, order_cycle1, make_variant):
    order = _order(customer, order_cycle1)
    variant = make_variant(stock=1, price="2.50")
    OrderLine.objects.create(order=order, variant=variant, unit_price=variant.price_eur, qty=4)

    StandingOrderPlacementJob(order_cycle1).cap_quantity_and_store_changes(order)

    order.refresh_from_db()
    assert str(order.items_total) == "2.50"


class TestProcessingAStandingOrderOrder:
    @pytest.fixture
    def order(self, schedule1, make_standing_order, initialise_orders):
        so = make_standing_order(schedule1)
        return initialise_orders(so)[0]

    @pytest.fixture
    def job(self, order_cycle1):
        return StandingOrderPlacementJob(order_cycle1)

    def test_moves_the_order_to_completion_but_does_not_process_the_payment(self, job, order):
        with mock.patch.object(job, "cap_quantity_and_store_changes", return_value={}), \
                mock.patch.object(Payment, "process") as process:
            job.process(order)

        order.refresh_from_db()
        assert order.completed_at is not None
        assert abs((timezone.now() - order.completed_at).total_seconds()) < 5
        assert order.payments.first().state == Payment.State.CHECKOUT
        process.assert_not_called()

    def test_sends_only_a_placement_email_and_no_confirmation(
        self, job, order, mailoutbox, django_capture_on_commit_callbacks
    ):
        changes: dict[int, int] = {}
        with mock.patch.object(job, "cap_quantity_and_store_changes", return_value=changes), \
                mock.patch.object(job, "send_placement_email", wraps=job.send_placement_email) as send, \
                mock.patch("checkout.services.send_order_confirmation") as confirm, \
                django_capture_on_commit_callbacks(execute=True):
            job.process(order)

        send.assert_called_once_with(order, changes)
        confirm.assert_not_called()
        assert len(mailoutbox) == 1
        assert list(OutboundEmail.objects.filter(order=order).values_list("template_key", flat=True)) == [
            "standing_order_placement"
        ]

    def test_capped_items_are_reported_in_the_single_email(self, job, order, mailoutbox):
        line = order.lines.get()
        stock = line.variant.inventory_items.get()
        stock.qty_on_hand = 1
        stock.save()

        job.process(order)

        assert len(mailoutbox) == 1
        outbound = OutboundEmail.objects.get(order=order)
        assert outbound.template_key == "standing_order_placement_capped"
        assert outbound.payload["changes"] == [
            {"line_id": line.id, "sku": line.sku, "name": line.name, "original_qty": 2, "qty": 1}
        ]

    def test_returns_false_for_an_order_placed_meanwhile(self, job, order, mailoutbox):
        Order.objects.filter(pk=order.pk).update(completed_at=timezone.now(), state=Order.State.COMPLETE)

        assert job.process(order) is False
        assert len(mailoutbox) == 0


def test_failure_of_one_order_does_not_stop_the_others(
    schedule1, order_cycle1, make_standing_order, initialise_orders, mailoutbox
):
    failing = initialise_orders(make_standing_order(schedule1))[0]
    healthy = initialise_orders(make_standing_order(schedule1))[0]

    def complete(order, **kwargs):
        if order.pk == failing.pk:
            raise CheckoutError("payment", "Payment method could not be attached")
        return advance_to_completion(order, **kwargs)

    with mock.patch("standing_orders.placement.advance_to_completion", side_effect=complete):
        summary = StandingOrderPlacementJob(order_cycle1).run()

    failing.refresh_from_db()
    healthy.refresh_from_db()
    assert failing.completed_at is None
    assert healthy.completed_at is not None
    assert summary.placed == [healthy.id]
    assert summary.failed == [failing.id]
    assert OutboundEmail.objects.get(order=healthy).template_key == "standing_order_placement"
    assert OutboundEmail.objects.get(order=failing).template_key == "standing_order_failure"
    assert len(mailoutbox) == 2


def test_completion_failure_keeps_capped_quantities(
    schedule1, order_cycle1, make_standing_order, make_variant, initialise_orders
):
    variant = make_variant(stock=1)
    order = initialise_orders(make_standing_order(schedule1, items=[(variant, 3)]))[0]
    Order.objects.filter(pk=order.pk).update(shipping_line1="")

    summary = StandingOrderPlacementJob(order_cycle1).run()

    order.refresh_from_db()
    assert summary.failed == [order.id]
    assert order.completed_at is None
    assert order.state == Order.State.CART
    assert order.lines.get().qty == 1


def test_failure_emails_can_be_switched_off(
    settings, schedule1, order_cycle1, make_standing_order, initialise_orders, mailoutbox
):
    settings.STANDING_ORDERS_SEND_FAILURE_EMAILS = False
    order = initialise_orders(make_standing_order(schedule1))[0]
    Order.objects.filter(pk=order.pk).update(payment_method="")

    summary = StandingOrderPlacementJob(order_cycle1).run()

    assert summary.failed == [order.id]
    assert len(mailoutbox) == 0


def test_notification_failure_does_not_undo_the_placement(
    schedule1, order_cycle1, make_standing_order, initialise_orders
):
    order = initialise_orders(make_standing_order(schedule1))[0]
    EmailTemplate.objects.filter(key="standing_order_placement").delete()

    summary = StandingOrderPlacementJob(order_cycle1).run()

    order.refresh_from_db()
    assert order.completed_at is not None
    assert summary.placed == [order.id]
    assert summary.notification_failed == [order.id]
    assert OutboundEmail.objects.get(order=order).status == OutboundEmail.Status.FAILED


def test_running_twice_places_each_order_once(
    schedule1, order_cycle1, make_standing_order, initialise_orders, mailoutbox
):
    order = initialise_orders(make_standing_order(schedule1))[0]
    job = StandingOrderPlacementJob(order_cycle1)

    first = job.run()
    second = job.run()

    assert first.placed == [order.id]
    assert second.processed == 0
    assert len(mailoutbox) == 1


def test_selection_failure_is_raised(order_cycle1):
    job = StandingOrderPlacementJob(order_cycle1)

    with mock.patch.object(job, "orders", side_effect=DatabaseError("connection lost")):
        with pytest.raises(SelectionError):
            job.run()


def test_database_error_in_one_placement_email_does_not_stop_the_run(
    schedule1, order_cycle1, make_standing_order, initialise_orders, mailoutbox
):
    first = initialise_orders(make_standing_order(schedule1))[0]
    second = initialise_orders(make_standing_order(schedule1))[0]

    real_send = mailer.send_templated_email

    def send(**kwargs):
        if kwargs["order_id"] == first.id:
            raise DatabaseError("outbound insert failed")
        return real_send(**kwargs)

    with mock.patch("standing_orders.mailer.send_templated_email", side_effect=send):
        summary = StandingOrderPlacementJob(order_cycle1).run()

    first.refresh_from_db()
    second.refresh_from_db()
    assert first.completed_at is not None
    assert second.completed_at is not None
    assert summary.placed == [first.id, second.id]
    assert summary.notification_failed == [first.id]
    assert len(mailoutbox) == 1


def test_unexpected_error_is_recorded_and_the_run_continues(
    schedule1, order_cycle1, make_standing_order, initialise_orders
):
    broken = initialise_orders(make_standing_order(schedule1))[0]
    healthy = initialise_orders(make_standing_order(schedule1))[0]
    job = StandingOrderPlacementJob(order_cycle1)
    real_cap = job.cap_quantity_and_store_changes

    def cap(order):
        if order.pk == broken.pk:
            raise RuntimeError("boom")
        return real_cap(order)

    with mock.patch.object(job, "cap_quantity_and_store_changes", side_effect=cap):
        summary = job.run()

    assert summary.failed == [broken.id]
    assert summary.placed == [healthy.id]


def test_stock_lookup_failure_skips_only_that_order(
    schedule1, order_cycle1, make_standing_order, make_variant, initialise_orders
):
    failing_variant = make_variant()
    failing = initialise_orders(make_standing_order(schedule1, items=[(failing_variant, 2)]))[0]
    healthy = initialise_orders(make_standing_order(schedule1))[0]

    def stock(*, variant_ids):
        if failing_variant.id in variant_ids:
            raise DatabaseError("inventory unavailable")
        return inventory_available_for_variants(variant_ids=variant_ids)

    with mock.patch("standing_orders.line_items.inventory_available_for_variants", side_effect=stock):
        summary = StandingOrderPlacementJob(order_cycle1).run()

    failing.refresh_from_db()
    healthy.refresh_from_db()
    assert summary.failed == [failing.id]
    assert summary.placed == [healthy.id]
    assert failing.completed_at is None
    assert healthy.completed_at is not None
    assert not OutboundEmail.objects.filter(order=failing).exists()
    assert OutboundEmail.objects.filter(order=healthy).count() == 1


def test_order_placed_after_selection_keeps_its_quantities(
    schedule1, order_cycle1, make_standing_order, initialise_orders, mailoutbox
):
    order = initialise_orders(make_standing_order(schedule1))[0]
    job = StandingOrderPlacementJob(order_cycle1)
    selected = list(job.orders())

    Order.objects.filter(pk=order.pk).update(completed_at=timezone.now(), state=Order.State.COMPLETE)
    line = order.lines.get()
    line.variant.inventory_items.update(qty_on_hand=0)

    assert job.process(selected[0]) is False

    line.refresh_from_db()
    assert line.qty == 2
    assert len(mailoutbox) == 0


def test_capped_line_missing_from_the_order_is_left_out_of_the_email(
    schedule1, order_cycle1, make_standing_order, initialise_orders
):
    order = initialise_orders(make_standing_order(schedule1))[0]
    line = order.lines.get()

    payload = mailer._changes_payload(order, {line.id: 5, line.id + 1000: 3})

    assert payload == [
        {"line_id": line.id, "sku": line.sku, "name": line.name, "original_qty": 5, "qty": 2}
    ]
