from __future__ import annotations

from unittest import mock

import pytest

from notifications.models import EmailTemplate, OutboundEmail
from notifications.services import language_fallback_chain, send_templated_email

pytestmark = pytest.mark.django_db


def test_language_fallback_chain(settings):
    settings.LANGUAGE_CODE = "en"

    assert language_fallback_chain("lt_LT") == ["lt-lt", "lt", "en"]
    assert language_fallback_chain(None) == ["en"]


def test_sends_rendered_template_and_logs_it(mailoutbox):
    result = send_templated_email(
        template_key="standing_order_placement",
        to_email="customer@example.com",
        context={"order_id": 42, "lines": [{"name": "Apples", "qty": 3}]},
        payload={"changes": []},
    )

    assert result.ok
    assert len(mailoutbox) == 1
    assert mailoutbox[0].subject == "Subscription order #42 placed"
    assert "Apples x3" in mailoutbox[0].body

    outbound = OutboundEmail.objects.get(id=result.outbound_id)
    assert outbound.status == OutboundEmail.Status.SENT
    assert outbound.payload == {"changes": []}
    assert outbound.sent_at is not None


def test_prefers_the_requested_language(mailoutbox):
    EmailTemplate.objects.create(
        key="standing_order_placement",
        language_code="lt",
        subject="Užsakymas #{{ order_id }} pateiktas",
        body_text="Ačiū",
    )

    send_templated_email(
        template_key="standing_order_placement",
        to_email="customer@example.com",
        context={"order_id": 7},
        language_code="lt",
    )

    assert mailoutbox[0].subject == "Užsakymas #7 pateiktas"


def test_missing_template_is_logged_as_failed(mailoutbox):
    result = send_templated_email(template_key="nope", to_email="customer@example.com")

    assert not result.ok
    assert mailoutbox == []
    assert OutboundEmail.objects.get(id=result.outbound_id).status == OutboundEmail.Status.FAILED


def test_transport_error_is_logged_as_failed():
    with mock.patch(
        "notifications.services.EmailMultiAlternatives.send", side_effect=OSError("smtp down")
    ):
        result = send_templated_email(
            template_key="standing_order_failure",
            to_email="customer@example.com",
            context={"order_id": 1},
        )

    assert not result.ok
    outbound = OutboundEmail.objects.get(id=result.outbound_id)
    assert outbound.status == OutboundEmail.Status.FAILED
    assert outbound.error_message == "smtp down"
