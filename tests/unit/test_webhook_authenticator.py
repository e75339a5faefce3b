import json

import pytest

from reconciler.application.interfaces.clock import FakeClock
from reconciler.domain.errors import AuthenticationError, AuthFailureReason, InvalidEventPayloadError
from reconciler.domain.events import (
    DisputeEvent,
    EventKind,
    PaymentIntentEvent,
    SubscriptionEvent,
    UnhandledEvent,
)
from reconciler.infrastructure.gateways.stripe_webhook_authenticator import (
    StripeWebhookAuthenticator,
)
from tests.factories import (
    FIXED_NOW,
    WEBHOOK_SECRET,
    dispute_event,
    make_event,
    payment_intent_event,
    sign_payload,
)

NOW_TS = int(FIXED_NOW.timestamp())


@pytest.fixture
def authenticator():
    return StripeWebhookAuthenticator(WEBHOOK_SECRET, tolerance_seconds=300, clock=FakeClock(FIXED_NOW))


def _signed(event, timestamp=NOW_TS, secret=WEBHOOK_SECRET):
    payload = json.dumps(event)
    return payload.encode(), sign_payload(payload, timestamp, secret)


def test_empty_secret_is_a_configuration_error():
    with pytest.raises(ValueError):
        StripeWebhookAuthenticator("")


def test_valid_payment_intent_event_is_parsed(authenticator):
    body, header = _signed(
        payment_intent_event(
            "payment_intent.payment_failed",
            event_id="evt_42",
            last_payment_error={"code": "card_declined", "message": "Declined"},
        )
    )

    event = authenticator.authenticate(body, header)

    assert isinstance(event, PaymentIntentEvent)
    assert event.event_id == "evt_42"
    assert event.kind is EventKind.PAYMENT_FAILED
    assert event.payment_intent_id == "pi_test_123"
    assert event.amount == 10000
    assert event.last_payment_error == "Declined"
    assert event.correlation_id == "pi_test_123"


def test_dispute_event_correlates_on_payment_intent(authenticator):
    body, header = _signed(dispute_event())

    event = authenticator.authenticate(body, header)

    assert isinstance(event, DisputeEvent)
    assert event.charge_id == "ch_1"
    assert event.correlation_id == "pi_test_123"


def test_dispute_without_payment_intent_correlates_on_charge(authenticator):
    body, header = _signed(dispute_event(intent_id=None))

    assert authenticator.authenticate(body, header).correlation_id == "ch_1"


def test_subscription_event_is_parsed(authenticator):
    body, header = _signed(
        make_event("customer.subscription.deleted", {"id": "sub_9", "status": "canceled"})
    )

    event = authenticator.authenticate(body, header)

    assert isinstance(event, SubscriptionEvent)
    assert event.status == "canceled"


def test_unknown_type_becomes_unhandled_event(authenticator):
    body, header = _signed(make_event("payout.paid", {"id": "po_1"}, event_id="evt_po"))

    event = authenticator.authenticate(body, header)

    assert isinstance(event, UnhandledEvent)
    assert event.kind == "payout.paid"
    assert event.correlation_id is None


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(authenticator, header):
    with pytest.raises(AuthenticationError) as exc_info:
        authenticator.authenticate(b"{}", header)

    assert exc_info.value.reason is AuthFailureReason.MISSING_SIGNATURE


def test_wrong_secret(authenticator):
    body, header = _signed(payment_intent_event(), secret="whsec_wrong")

    with pytest.raises(AuthenticationError) as exc_info:
        authenticator.authenticate(body, header)

    assert exc_info.value.reason is AuthFailureReason.BAD_SIGNATURE


def test_garbage_header(authenticator):
    with pytest.raises(AuthenticationError) as exc_info:
        authenticator.authenticate(b"{}", "not-a-signature")

    assert exc_info.value.reason is AuthFailureReason.BAD_SIGNATURE


@pytest.mark.parametrize("offset", [-301, 301, -3600])
def test_timestamp_outside_tolerance(authenticator, offset):
    body, header = _signed(payment_intent_event(), timestamp=NOW_TS + offset)

    with pytest.raises(AuthenticationError) as exc_info:
        authenticator.authenticate(body, header)

    assert exc_info.value.reason is AuthFailureReason.STALE_TIMESTAMP


@pytest.mark.parametrize("offset", [-300, 0, 300])
def test_timestamp_on_tolerance_boundary_is_accepted(authenticator, offset):
    body, header = _signed(payment_intent_event(), timestamp=NOW_TS + offset)

    assert isinstance(authenticator.authenticate(body, header), PaymentIntentEvent)


@pytest.mark.parametrize(
    "payload",
    [
        "[]",
        json.dumps({"id": "evt_1", "type": "payment_intent.succeeded"}),
        json.dumps(make_event("payment_intent.succeeded", {"id": "pi_1", "currency": "usd"})),
        json.dumps(make_event("charge.dispute.created", {"id": "dp_1"})),
    ],
)
def test_authentic_but_malformed_payload(authenticator, payload):
    header = sign_payload(payload, NOW_TS)

    with pytest.raises(InvalidEventPayloadError):
        authenticator.authenticate(payload.encode(), header)
