"""
Idempotency guard for processor event delivery.

Two layers:
- a ledger of provider event ids already applied (exact replays are skipped
  before any write), and
- a status-precedence rule on the Payment and Booking rows, so a retried
  event with a new id, or an out-of-order event of another terminal kind,
  neither reverts a terminal status nor repeats tracking/notification
  side effects.
"""

import logging
from enum import Enum

from reconciler.application.dtos.reconciliation_dto import HandlerResult
from reconciler.application.interfaces.clock import Clock
from reconciler.application.interfaces.processed_event_repo import ProcessedEventRepo
from reconciler.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from reconciler.domain.entities.payment import TERMINAL_PAYMENT_STATUSES, Payment, PaymentStatus
from reconciler.domain.entities.processed_event import ProcessedEvent
from reconciler.domain.events import Event
from reconciler.domain.statuses import enum_value, is_known_status

logger = logging.getLogger(__name__)


class TransitionDecision(str, Enum):
    APPLY = "APPLY"
    NOOP = "NOOP"
    REJECT = "REJECT"


def resolve_transition(current: str, target: str) -> TransitionDecision:
    """Status precedence: terminal statuses are never overwritten by another terminal."""
    if current == target:
        return TransitionDecision.NOOP
    if current in TERMINAL_PAYMENT_STATUSES:
        return TransitionDecision.REJECT
    return TransitionDecision.APPLY


class IdempotencyGuard:
    def __init__(self, processed_event_repo: ProcessedEventRepo, clock: Clock) -> None:
        self._processed_event_repo = processed_event_repo
        self._clock = clock

    async def should_apply(self, event: Event) -> bool:
        existing = await self._processed_event_repo.get(event.event_id)
        if existing:
            logger.info(
                "Skipping replayed webhook event",
                extra={
                    "event_id": event.event_id,
                    "event_type": existing.event_type,
                    "first_outcome": existing.outcome,
                },
            )
            return False
        return True

    async def remember(self, event: Event, result: HandlerResult) -> None:
        if not result.recordable:
            return
        await self._processed_event_repo.save(
            ProcessedEvent(
                event_id=event.event_id,
                event_type=result.kind,
                outcome=result.outcome.value,
                processed_at=self._clock.now(),
                correlation_id=result.correlation_id,
            )
        )

    def payment_transition(self, payment: Payment, target: PaymentStatus) -> TransitionDecision:
        if not is_known_status(PaymentStatus, payment.status):
            return TransitionDecision.REJECT
        return resolve_transition(enum_value(payment.status), target.value)

    def booking_transition(
        self,
        booking: Booking,
        status: BookingStatus,
        payment_status: BookingPaymentStatus,
    ) -> TransitionDecision:
        if not (
            is_known_status(BookingStatus, booking.status)
            and is_known_status(BookingPaymentStatus, booking.payment_status)
        ):
            return TransitionDecision.REJECT
        decision = resolve_transition(enum_value(booking.payment_status), payment_status.value)
        if decision is TransitionDecision.NOOP and enum_value(booking.status) != status.value:
            # a status settled elsewhere is kept
            logger.warning(
                "Booking status differs from its payment status, leaving it untouched",
                extra={
                    "booking_id": booking.id,
                    "booking_status": enum_value(booking.status),
                    "payment_status": enum_value(booking.payment_status),
                },
            )
        return decision
