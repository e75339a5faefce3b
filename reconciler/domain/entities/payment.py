"""Payment entity - one checkout attempt tracked against the processor."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PaymentStatus(str, Enum):
    """Possible states of a payment."""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


TERMINAL_PAYMENT_STATUSES = frozenset({PaymentStatus.PAID.value, PaymentStatus.FAILED.value})


@dataclass
class Payment:
    """
    A payment created at checkout in PENDING.

    Only the reconciliation engine moves it to PAID or FAILED, and only in
    response to an authenticated processor event. `amount` is kept in the
    processor's minor unit.

    A status written by another flow (e.g. REFUNDED) is kept as a plain
    string and treated as settled.
    """

    payment_intent_id: str
    amount: int
    currency: str
    status: PaymentStatus | str = PaymentStatus.PENDING
    id: int | None = None
    updated_at: datetime | None = None
