from __future__ import annotations

import pytest
from django.urls import reverse

from checkout.models import Order

pytestmark = pytest.mark.django_db


def test_place_standing_orders_action(
    admin_client, schedule1, order_cycle1, make_standing_order, initialise_orders, mailoutbox
):
    order = initialise_orders(make_standing_order(schedule1))[0]

    response = admin_client.post(
        reverse("admin:order_cycles_ordercycle_changelist"),
        {"action": "place_standing_orders", "_selected_action": [order_cycle1.pk]},
    )

    assert response.status_code == 302
    order.refresh_from_db()
    assert order.state == Order.State.COMPLETE
    assert order.completed_at is not None
    assert len(mailoutbox) == 1
