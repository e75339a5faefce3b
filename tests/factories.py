"""Builders for signed Stripe deliveries and seeded booking state."""

import hashlib
import hmac
import json
from datetime import datetime, timezone
from typing import Any

from reconciler.application.interfaces.clock import Clock
from reconciler.domain.entities.booking import Booking
from reconciler.domain.entities.order import Order
from reconciler.domain.entities.payment import Payment
from reconciler.infrastructure.in_memory.store import InMemoryStore

WEBHOOK_SECRET = "whsec_test_secret"
FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

INTENT_ID = "pi_test_123"
EVENT_ID = "evt_concert_1"
USER_ID = "user_1"
BOOKING_ID = "booking_1"


def sign_payload(payload: str, timestamp: int, secret: str = WEBHOOK_SECRET) -> str:
    """Build a `Stripe-Signature` header the way Stripe does."""
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def signed_body(event: dict[str, Any], clock: Clock, secret: str = WEBHOOK_SECRET) -> tuple[bytes, str]:
    payload = json.dumps(event)
    return payload.encode("utf-8"), sign_payload(payload, int(clock.timestamp()), secret)


def make_event(
    event_type: str,
    obj: dict[str, Any],
    event_id: str = "evt_1",
) -> dict[str, Any]:
    return {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "created": int(FIXED_NOW.timestamp()),
        "livemode": False,
        "data": {"object": obj},
    }


def payment_intent_event(
    event_type: str = "payment_intent.succeeded",
    event_id: str = "evt_1",
    intent_id: str = INTENT_ID,
    amount: int = 10000,
    currency: str = "usd",
    **extra: Any,
) -> dict[str, Any]:
    obj = {"id": intent_id, "object": "payment_intent", "amount": amount, "currency": currency}
    obj.update(extra)
    return make_event(event_type, obj, event_id=event_id)


def dispute_event(event_id: str = "evt_dispute_1", intent_id: str | None = INTENT_ID) -> dict[str, Any]:
    return make_event(
        "charge.dispute.created",
        {
            "id": "dp_1",
            "object": "dispute",
            "charge": "ch_1",
            "reason": "fraudulent",
            "amount": 10000,
            "currency": "usd",
            "payment_intent": intent_id,
        },
        event_id=event_id,
    )


def seed_booking(
    store: InMemoryStore,
    intent_id: str = INTENT_ID,
    amount: int = 10000,
    currency: str = "usd",
    booking_id: str = BOOKING_ID,
    user_id: str = USER_ID,
    event_id: str = EVENT_ID,
    event_name: str = "Summer Concert",
    order_ids: tuple[str, ...] = ("order_1",),
) -> Payment:
    """Seed a pending payment with its booking, event and orders."""
    store.add_event(event_id, event_name)
    payment = store.add_payment(Payment(payment_intent_id=intent_id, amount=amount, currency=currency))
    store.add_booking(
        Booking(id=booking_id, user_id=user_id, event_id=event_id, payment_intent_id=intent_id)
    )
    for order_id in order_ids:
        store.add_order(Order(id=order_id, user_id=user_id, event_id=event_id))
    return payment
