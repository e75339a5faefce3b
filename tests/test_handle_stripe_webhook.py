"""Use-case level tests: concurrency, timeouts and ordering."""

import asyncio

import pytest

from reconciler.api.dependencies import build_webhook_use_case
from reconciler.application.dtos.reconciliation_dto import HandlerOutcome
from reconciler.application.services.correlation_lock import CorrelationLock
from reconciler.domain.entities.booking import BookingPaymentStatus, BookingStatus
from reconciler.domain.entities.payment import PaymentStatus
from reconciler.domain.errors import AuthenticationError, TransientStorageError
from tests.factories import BOOKING_ID, INTENT_ID, payment_intent_event, signed_body


def _payment(store):
    return next(p for p in store.payments.values() if p.payment_intent_id == INTENT_ID)


@pytest.mark.asyncio
async def test_concurrent_duplicate_deliveries_apply_once(webhook_use_case, seeded_store, clock):
    body, signature = signed_body(payment_intent_event(event_id="evt_dup"), clock)

    results = await asyncio.gather(
        webhook_use_case.execute(body, signature),
        webhook_use_case.execute(body, signature),
        webhook_use_case.execute(body, signature),
    )

    outcomes = sorted(r.outcome for r in results)
    assert outcomes == [HandlerOutcome.APPLIED, HandlerOutcome.DUPLICATE, HandlerOutcome.DUPLICATE]
    assert len(seeded_store.order_tracking) == 1
    assert len(seeded_store.notifications) == 1


@pytest.mark.asyncio
async def test_concurrent_conflicting_outcomes_leave_consistent_state(
    webhook_use_case, seeded_store, clock
):
    succeeded = signed_body(payment_intent_event("payment_intent.succeeded", event_id="evt_s"), clock)
    failed = signed_body(payment_intent_event("payment_intent.payment_failed", event_id="evt_f"), clock)

    results = await asyncio.gather(
        webhook_use_case.execute(*succeeded),
        webhook_use_case.execute(*failed),
    )

    assert sorted(r.outcome for r in results) == [
        HandlerOutcome.APPLIED,
        HandlerOutcome.CONFLICT_IGNORED,
    ]
    payment = _payment(seeded_store)
    booking = seeded_store.bookings[BOOKING_ID]
    # whichever event won, payment and booking agree
    assert booking.payment_status.value == payment.status.value
    assert len(seeded_store.order_tracking) == 1
    assert len(seeded_store.notifications) == 1


@pytest.mark.asyncio
async def test_storage_timeout_surfaces_transient_error(bundle, authenticator, seeded_store, clock):
    use_case = build_webhook_use_case(
        bundle,
        authenticator=authenticator,
        correlation_lock=CorrelationLock(),
        storage_timeout_seconds=0.05,
    )

    async def slow_lookup(payment_intent_id, for_update=False):
        await asyncio.sleep(1)

    bundle["payment_repo"].find_by_payment_intent = slow_lookup
    body, signature = signed_body(payment_intent_event(), clock)

    with pytest.raises(TransientStorageError):
        await use_case.execute(body, signature)

    assert _payment(seeded_store).status == PaymentStatus.PENDING
    assert seeded_store.processed_events == {}


@pytest.mark.asyncio
async def test_lock_timeout_surfaces_transient_error(bundle, authenticator, clock):
    lock = CorrelationLock(timeout_seconds=0.05)
    use_case = build_webhook_use_case(
        bundle, authenticator=authenticator, correlation_lock=lock, storage_timeout_seconds=5.0
    )
    body, signature = signed_body(payment_intent_event(), clock)

    async with lock.hold(INTENT_ID):
        with pytest.raises(TransientStorageError):
            await use_case.execute(body, signature)


@pytest.mark.asyncio
async def test_authentication_failure_touches_nothing(webhook_use_case, seeded_store, clock):
    body, _ = signed_body(payment_intent_event(), clock)

    with pytest.raises(AuthenticationError):
        await webhook_use_case.execute(body, "t=1,v1=deadbeef")

    assert _payment(seeded_store).status == PaymentStatus.PENDING
    assert seeded_store.bookings[BOOKING_ID].payment_status == BookingPaymentStatus.UNPAID


@pytest.mark.asyncio
async def test_booking_cancelled_elsewhere_is_not_reconfirmed(webhook_use_case, seeded_store, clock):
    _payment(seeded_store).status = PaymentStatus.PAID
    booking = seeded_store.bookings[BOOKING_ID]
    booking.status = BookingStatus.CANCELLED
    booking.payment_status = BookingPaymentStatus.PAID

    result = await webhook_use_case.execute(*signed_body(payment_intent_event(), clock))

    assert result.outcome is HandlerOutcome.NO_CHANGE
    assert result.follow_ups == []
    assert seeded_store.bookings[BOOKING_ID].status == BookingStatus.CANCELLED
    assert _payment(seeded_store).updated_at is None
    assert seeded_store.order_tracking == []
    assert seeded_store.notifications == []
