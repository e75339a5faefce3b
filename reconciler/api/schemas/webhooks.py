"""Wire models for processor webhook deliveries."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from reconciler.domain.events import (
    PAYMENT_INTENT_KINDS,
    SUBSCRIPTION_KINDS,
    DisputeEvent,
    Event,
    EventKind,
    InvoiceEvent,
    PaymentIntentEvent,
    SubscriptionEvent,
    UnhandledEvent,
)


class StripeEventData(BaseModel):
    model_config = ConfigDict(extra="allow")

    object: dict[str, Any]


class StripeWebhookEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    data: StripeEventData
    livemode: bool | None = None
    created: int | None = None


class PaymentIntentObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    amount: int = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)
    last_payment_error: dict[str, Any] | None = None
    cancellation_reason: str | None = None


class DisputeObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    charge: str = Field(min_length=1)
    reason: str
    amount: int = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)
    payment_intent: str | None = None


class InvoiceObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    amount_paid: int = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)
    customer: str | None = None
    subscription: str | None = None


class SubscriptionObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    status: str | None = None
    customer: str | None = None


def build_event(envelope: StripeWebhookEnvelope) -> Event:
    """Map a validated envelope to a typed domain event. Raises pydantic.ValidationError."""
    kind = EventKind.parse(envelope.type)
    obj = envelope.data.object

    if kind is None:
        return UnhandledEvent(event_id=envelope.id, kind=envelope.type, created=envelope.created)

    if kind in PAYMENT_INTENT_KINDS:
        intent = PaymentIntentObject.model_validate(obj)
        error = intent.last_payment_error or {}
        return PaymentIntentEvent(
            event_id=envelope.id,
            kind=kind,
            payment_intent_id=intent.id,
            amount=intent.amount,
            currency=intent.currency,
            created=envelope.created,
            last_payment_error=error.get("message"),
            cancellation_reason=intent.cancellation_reason,
        )

    if kind is EventKind.DISPUTE_OPENED:
        dispute = DisputeObject.model_validate(obj)
        return DisputeEvent(
            event_id=envelope.id,
            kind=kind,
            dispute_id=dispute.id,
            charge_id=dispute.charge,
            reason=dispute.reason,
            amount=dispute.amount,
            currency=dispute.currency,
            payment_intent_id=dispute.payment_intent,
            created=envelope.created,
        )

    if kind is EventKind.INVOICE_PAID:
        invoice = InvoiceObject.model_validate(obj)
        return InvoiceEvent(
            event_id=envelope.id,
            kind=kind,
            invoice_id=invoice.id,
            amount_paid=invoice.amount_paid,
            currency=invoice.currency,
            customer_id=invoice.customer,
            subscription_id=invoice.subscription,
            created=envelope.created,
        )

    if kind in SUBSCRIPTION_KINDS:
        subscription = SubscriptionObject.model_validate(obj)
        return SubscriptionEvent(
            event_id=envelope.id,
            kind=kind,
            subscription_id=subscription.id,
            status=subscription.status,
            customer_id=subscription.customer,
            created=envelope.created,
        )

    raise ValueError(f"No payload mapping for {kind.value}")


class WebhookAck(BaseModel):
    received: bool = True
    outcome: str
