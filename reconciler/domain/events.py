"""
Typed payment-processor events.

Each recognized event type has its own frozen payload shape; anything else
becomes an `UnhandledEvent` carrying only the raw type string. The `kind`
values are the processor's wire discriminators.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class EventKind(str, Enum):
    PAYMENT_SUCCEEDED = "payment_intent.succeeded"
    PAYMENT_FAILED = "payment_intent.payment_failed"
    PAYMENT_CANCELED = "payment_intent.canceled"
    DISPUTE_OPENED = "charge.dispute.created"
    INVOICE_PAID = "invoice.payment_succeeded"
    SUBSCRIPTION_CREATED = "customer.subscription.created"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"

    @classmethod
    def parse(cls, raw_type: str) -> "EventKind | None":
        try:
            return cls(raw_type)
        except ValueError:
            return None


PAYMENT_INTENT_KINDS = frozenset(
    {EventKind.PAYMENT_SUCCEEDED, EventKind.PAYMENT_FAILED, EventKind.PAYMENT_CANCELED}
)
SUBSCRIPTION_KINDS = frozenset(
    {
        EventKind.SUBSCRIPTION_CREATED,
        EventKind.SUBSCRIPTION_UPDATED,
        EventKind.SUBSCRIPTION_DELETED,
    }
)


@dataclass(frozen=True)
class PaymentIntentEvent:
    event_id: str
    kind: EventKind
    payment_intent_id: str
    amount: int
    currency: str
    created: int | None = None
    last_payment_error: str | None = None
    cancellation_reason: str | None = None

    @property
    def correlation_id(self) -> str:
        return self.payment_intent_id


@dataclass(frozen=True)
class DisputeEvent:
    event_id: str
    kind: EventKind
    dispute_id: str
    charge_id: str
    reason: str
    amount: int
    currency: str
    payment_intent_id: str | None = None
    created: int | None = None

    @property
    def correlation_id(self) -> str:
        return self.payment_intent_id or self.charge_id


@dataclass(frozen=True)
class InvoiceEvent:
    event_id: str
    kind: EventKind
    invoice_id: str
    amount_paid: int
    currency: str
    customer_id: str | None = None
    subscription_id: str | None = None
    created: int | None = None

    @property
    def correlation_id(self) -> str:
        return self.invoice_id


@dataclass(frozen=True)
class SubscriptionEvent:
    event_id: str
    kind: EventKind
    subscription_id: str
    status: str | None = None
    customer_id: str | None = None
    created: int | None = None

    @property
    def correlation_id(self) -> str:
        return self.subscription_id


@dataclass(frozen=True)
class UnhandledEvent:
    event_id: str
    kind: str
    created: int | None = None

    @property
    def correlation_id(self) -> None:
        return None


Event = Union[PaymentIntentEvent, DisputeEvent, InvoiceEvent, SubscriptionEvent, UnhandledEvent]
