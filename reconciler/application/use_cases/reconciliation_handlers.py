"""
Reconciliation handlers, one per recognized event kind.

Handlers run inside the core transaction and only perform Payment, Booking,
Order and OrderTracking writes. User-facing effects are returned as
follow-ups for the notifier, which runs after commit.
"""

import logging
from dataclasses import dataclass

from reconciler.application.dtos.reconciliation_dto import (
    FollowUp,
    HandlerOutcome,
    HandlerResult,
    IssueRequest,
    NotificationKind,
    NotificationRequest,
)
from reconciler.application.interfaces.booking_repo import BookingRepo
from reconciler.application.interfaces.clock import Clock
from reconciler.application.interfaces.order_repo import OrderRepo, OrderTrackingRepo
from reconciler.application.interfaces.payment_repo import PaymentRepo
from reconciler.application.services.idempotency_guard import IdempotencyGuard, TransitionDecision
from reconciler.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from reconciler.domain.entities.notification import IssuePriority
from reconciler.domain.entities.order import OrderStatus, TrackingStatus
from reconciler.domain.entities.payment import PaymentStatus
from reconciler.domain.events import (
    DisputeEvent,
    EventKind,
    InvoiceEvent,
    PaymentIntentEvent,
    SubscriptionEvent,
)
from reconciler.domain.statuses import enum_value
from reconciler.domain.value_objects.money import Money


@dataclass(frozen=True)
class PaymentTransition:
    """Target state of the (Payment, Booking, Order) tuple for one event kind."""

    payment_status: PaymentStatus
    booking_status: BookingStatus
    booking_payment_status: BookingPaymentStatus
    order_status: OrderStatus
    tracking_status: TrackingStatus | None = None
    tracking_description: str | None = None
    notification_kind: NotificationKind | None = None


PAYMENT_SUCCEEDED = PaymentTransition(
    payment_status=PaymentStatus.PAID,
    booking_status=BookingStatus.CONFIRMED,
    booking_payment_status=BookingPaymentStatus.PAID,
    order_status=OrderStatus.CONFIRMED,
    tracking_status=TrackingStatus.PAYMENT_CONFIRMED,
    tracking_description="Payment successfully processed",
    notification_kind=NotificationKind.BOOKING_CONFIRMED,
)

PAYMENT_FAILED = PaymentTransition(
    payment_status=PaymentStatus.FAILED,
    booking_status=BookingStatus.CANCELLED,
    booking_payment_status=BookingPaymentStatus.FAILED,
    order_status=OrderStatus.CANCELLED,
    tracking_status=TrackingStatus.PAYMENT_FAILED,
    tracking_description="Payment processing failed",
    notification_kind=NotificationKind.PAYMENT_FAILED,
)

# Cancellation keeps the audit trail but sends no customer notification.
PAYMENT_CANCELED = PaymentTransition(
    payment_status=PaymentStatus.FAILED,
    booking_status=BookingStatus.CANCELLED,
    booking_payment_status=BookingPaymentStatus.FAILED,
    order_status=OrderStatus.CANCELLED,
    tracking_status=TrackingStatus.PAYMENT_CANCELED,
    tracking_description="Payment was canceled",
)


class PaymentIntentHandler:
    transition: PaymentTransition

    def __init__(
        self,
        payment_repo: PaymentRepo,
        booking_repo: BookingRepo,
        order_repo: OrderRepo,
        order_tracking_repo: OrderTrackingRepo,
        guard: IdempotencyGuard,
        clock: Clock,
    ) -> None:
        self._payment_repo = payment_repo
        self._booking_repo = booking_repo
        self._order_repo = order_repo
        self._order_tracking_repo = order_tracking_repo
        self._guard = guard
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def handle(self, event: PaymentIntentEvent) -> HandlerResult:
        intent_id = event.payment_intent_id
        log_extra = {
            "event_id": event.event_id,
            "event_type": event.kind.value,
            "payment_intent_id": intent_id,
        }
        self._logger.info("Reconciling payment intent event", extra=log_extra)

        payment = await self._payment_repo.find_by_payment_intent(intent_id, for_update=True)
        if payment is None:
            self._logger.info("No payment tracked for intent, acknowledging", extra=log_extra)
            return self._result(event, HandlerOutcome.PAYMENT_NOT_FOUND)

        now = self._clock.now()
        payment_decision = self._guard.payment_transition(payment, self.transition.payment_status)
        if payment_decision is TransitionDecision.REJECT:
            self._logger.warning(
                "Payment already settled with a different outcome, ignoring event",
                extra={**log_extra, "current_status": enum_value(payment.status)},
            )
            return self._result(event, HandlerOutcome.CONFLICT_IGNORED)

        # decide for both rows before writing; a conflict writes nothing
        booking = await self._booking_repo.find_by_payment_intent(intent_id)
        booking_decision = None
        if booking is not None:
            booking_decision = self._guard.booking_transition(
                booking,
                self.transition.booking_status,
                self.transition.booking_payment_status,
            )
            if booking_decision is TransitionDecision.REJECT:
                self._logger.warning(
                    "Booking already settled with a different outcome, ignoring event",
                    extra={
                        **log_extra,
                        "booking_id": booking.id,
                        "booking_payment_status": enum_value(booking.payment_status),
                    },
                )
                return self._result(event, HandlerOutcome.CONFLICT_IGNORED)

        payment_changed = payment_decision is TransitionDecision.APPLY
        if payment_changed:
            await self._payment_repo.update_status(
                payment_id=payment.id,
                status=self.transition.payment_status,
                updated_at=now,
            )

        if booking is None:
            self._logger.info("Payment has no booking, stopping after payment write", extra=log_extra)
            return self._result(event, HandlerOutcome.BOOKING_NOT_FOUND, changed=payment_changed)

        if booking_decision is TransitionDecision.NOOP:
            outcome = HandlerOutcome.APPLIED if payment_changed else HandlerOutcome.NO_CHANGE
            return self._result(event, outcome, changed=payment_changed)

        await self._booking_repo.update_status(
            booking_id=booking.id,
            status=self.transition.booking_status,
            payment_status=self.transition.booking_payment_status,
            updated_at=now,
        )
        orders = await self._order_repo.update_status_for(
            event_id=booking.event_id,
            user_id=booking.user_id,
            status=self.transition.order_status,
            updated_at=now,
        )
        if self.transition.tracking_status is not None:
            for order in orders:
                await self._order_tracking_repo.append(
                    order_id=order.id,
                    status=self.transition.tracking_status.value,
                    description=self.transition.tracking_description or "",
                    timestamp=now,
                )

        follow_ups: list[FollowUp] = []
        if self.transition.notification_kind is not None:
            follow_ups.append(
                NotificationRequest(
                    user_id=booking.user_id,
                    kind=self.transition.notification_kind,
                    context=self._notification_context(event, booking),
                )
            )

        self._logger.info(
            "Payment event reconciled",
            extra={**log_extra, "booking_id": booking.id, "orders_updated": len(orders)},
        )
        return self._result(event, HandlerOutcome.APPLIED, changed=True, follow_ups=follow_ups)

    def _notification_context(self, event: PaymentIntentEvent, booking: Booking) -> dict:
        return {
            "booking_id": booking.id,
            "event_name": booking.event_name,
            "payment_intent_id": event.payment_intent_id,
            "amount": event.amount,
            "currency": event.currency,
            "last_payment_error": event.last_payment_error,
        }

    def _result(
        self,
        event: PaymentIntentEvent,
        outcome: HandlerOutcome,
        changed: bool = False,
        follow_ups: list[FollowUp] | None = None,
    ) -> HandlerResult:
        return HandlerResult(
            outcome=outcome,
            event_id=event.event_id,
            kind=event.kind.value,
            correlation_id=event.payment_intent_id,
            changed=changed,
            follow_ups=follow_ups or [],
        )


class PaymentSucceededHandler(PaymentIntentHandler):
    transition = PAYMENT_SUCCEEDED


class PaymentFailedHandler(PaymentIntentHandler):
    transition = PAYMENT_FAILED


class PaymentCanceledHandler(PaymentIntentHandler):
    transition = PAYMENT_CANCELED


class DisputeOpenedHandler:
    """Opens a HIGH priority issue; payment, booking and order stay as they are."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def handle(self, event: DisputeEvent) -> HandlerResult:
        amount = Money.from_minor(event.amount, event.currency)
        issue = IssueRequest(
            title=f"Payment Dispute: {event.dispute_id}",
            description=(
                f"A payment dispute has been created for charge {event.charge_id}. "
                f"Reason: {event.reason}. Amount: {amount.display()}"
            ),
            priority=IssuePriority.HIGH,
        )
        self._logger.warning(
            "Charge dispute created",
            extra={
                "event_id": event.event_id,
                "dispute_id": event.dispute_id,
                "charge_id": event.charge_id,
                "reason": event.reason,
            },
        )
        return HandlerResult(
            outcome=HandlerOutcome.ISSUE_OPENED,
            event_id=event.event_id,
            kind=event.kind.value,
            correlation_id=event.correlation_id,
            follow_ups=[issue],
        )


class InvoicePaidHandler:
    """Logged only until subscriptions are supported."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def handle(self, event: InvoiceEvent) -> HandlerResult:
        self._logger.info(
            "Invoice payment succeeded",
            extra={
                "event_id": event.event_id,
                "invoice_id": event.invoice_id,
                "amount_paid": event.amount_paid,
                "currency": event.currency,
            },
        )
        return HandlerResult(
            outcome=HandlerOutcome.LOGGED,
            event_id=event.event_id,
            kind=event.kind.value,
            correlation_id=event.correlation_id,
        )


class SubscriptionChangedHandler:
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def handle(self, event: SubscriptionEvent) -> HandlerResult:
        self._logger.info(
            "Subscription event",
            extra={
                "event_id": event.event_id,
                "event_type": event.kind.value,
                "subscription_id": event.subscription_id,
                "subscription_status": event.status,
            },
        )
        return HandlerResult(
            outcome=HandlerOutcome.LOGGED,
            event_id=event.event_id,
            kind=event.kind.value,
            correlation_id=event.correlation_id,
        )


def build_handlers(
    payment_repo: PaymentRepo,
    booking_repo: BookingRepo,
    order_repo: OrderRepo,
    order_tracking_repo: OrderTrackingRepo,
    guard: IdempotencyGuard,
    clock: Clock,
) -> dict:
    deps = dict(
        payment_repo=payment_repo,
        booking_repo=booking_repo,
        order_repo=order_repo,
        order_tracking_repo=order_tracking_repo,
        guard=guard,
        clock=clock,
    )
    subscription_handler = SubscriptionChangedHandler()
    return {
        EventKind.PAYMENT_SUCCEEDED: PaymentSucceededHandler(**deps),
        EventKind.PAYMENT_FAILED: PaymentFailedHandler(**deps),
        EventKind.PAYMENT_CANCELED: PaymentCanceledHandler(**deps),
        EventKind.DISPUTE_OPENED: DisputeOpenedHandler(),
        EventKind.INVOICE_PAID: InvoicePaidHandler(),
        EventKind.SUBSCRIPTION_CREATED: subscription_handler,
        EventKind.SUBSCRIPTION_UPDATED: subscription_handler,
        EventKind.SUBSCRIPTION_DELETED: subscription_handler,
    }
