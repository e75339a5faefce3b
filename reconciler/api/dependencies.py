from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from reconciler.api.deps import AsyncSessionLocal
from reconciler.application.interfaces.clock import Clock, SystemClock
from reconciler.application.interfaces.event_authenticator import EventAuthenticator
from reconciler.application.services.correlation_lock import CorrelationLock
from reconciler.application.services.event_router import EventRouter
from reconciler.application.services.idempotency_guard import IdempotencyGuard
from reconciler.application.services.notifier import Notifier
from reconciler.application.use_cases.handle_stripe_webhook import HandleStripeWebhookUseCase
from reconciler.application.use_cases.manage_payment_methods import (
    AttachPaymentMethodUseCase,
    GetPaymentMethodUseCase,
)
from reconciler.application.use_cases.reconciliation_handlers import build_handlers
from reconciler.config import Settings, get_settings
from reconciler.infrastructure.db.repositories import (
    BookingRepoSQL,
    IssueRepoSQL,
    NotificationRepoSQL,
    OrderRepoSQL,
    OrderTrackingRepoSQL,
    PaymentRepoSQL,
    ProcessedEventRepoSQL,
)
from reconciler.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from reconciler.infrastructure.gateways.stripe_payment_processor import StripePaymentProcessor
from reconciler.infrastructure.gateways.stripe_webhook_authenticator import (
    StripeWebhookAuthenticator,
)
from reconciler.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryIssueRepo,
    InMemoryNotificationRepo,
    InMemoryOrderRepo,
    InMemoryOrderTrackingRepo,
    InMemoryPaymentRepo,
    InMemoryProcessedEventRepo,
    InMemoryStore,
    InMemoryTransactionManager,
    StubPaymentProcessor,
)


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


# Process-wide singletons: one clock, one lock registry, one authenticator.


@lru_cache(maxsize=1)
def get_clock() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def get_correlation_lock() -> CorrelationLock:
    return CorrelationLock(timeout_seconds=get_settings().correlation_lock_timeout_seconds)


@lru_cache(maxsize=1)
def get_authenticator() -> EventAuthenticator:
    settings = get_settings()
    return StripeWebhookAuthenticator(
        webhook_secret=settings.stripe_webhook_secret or "",
        tolerance_seconds=settings.webhook_tolerance_seconds,
        clock=get_clock(),
    )


def build_in_memory_bundle(store: InMemoryStore | None = None, clock: Clock | None = None) -> dict:
    store = store or InMemoryStore()
    clock = clock or get_clock()
    return {
        "store": store,
        "clock": clock,
        "payment_repo": InMemoryPaymentRepo(store),
        "booking_repo": InMemoryBookingRepo(store),
        "order_repo": InMemoryOrderRepo(store),
        "order_tracking_repo": InMemoryOrderTrackingRepo(store),
        "notification_repo": InMemoryNotificationRepo(store, clock),
        "issue_repo": InMemoryIssueRepo(store, clock),
        "processed_event_repo": InMemoryProcessedEventRepo(store),
        "tx_manager": InMemoryTransactionManager(store),
        "payment_processor": StubPaymentProcessor(),
    }


@lru_cache(maxsize=1)
def _in_memory_bundle() -> dict:
    return build_in_memory_bundle()


def _sql_bundle(session: AsyncSession, settings: Settings) -> dict:
    clock = get_clock()
    return {
        "clock": clock,
        "payment_repo": PaymentRepoSQL(session),
        "booking_repo": BookingRepoSQL(session),
        "order_repo": OrderRepoSQL(session),
        "order_tracking_repo": OrderTrackingRepoSQL(session),
        "notification_repo": NotificationRepoSQL(session, clock),
        "issue_repo": IssueRepoSQL(session, clock),
        "processed_event_repo": ProcessedEventRepoSQL(session),
        "tx_manager": SQLAlchemyTransactionManager(session),
        "payment_processor": _stripe_payment_processor(settings.stripe_api_key or ""),
    }


@lru_cache(maxsize=1)
def _stripe_payment_processor(api_key: str) -> StripePaymentProcessor:
    return StripePaymentProcessor.from_api_key(api_key)


def build_webhook_use_case(
    bundle: dict,
    authenticator: EventAuthenticator,
    correlation_lock: CorrelationLock,
    storage_timeout_seconds: float,
) -> HandleStripeWebhookUseCase:
    clock = bundle["clock"]
    guard = IdempotencyGuard(processed_event_repo=bundle["processed_event_repo"], clock=clock)
    handlers = build_handlers(
        payment_repo=bundle["payment_repo"],
        booking_repo=bundle["booking_repo"],
        order_repo=bundle["order_repo"],
        order_tracking_repo=bundle["order_tracking_repo"],
        guard=guard,
        clock=clock,
    )
    notifier = Notifier(
        notification_repo=bundle["notification_repo"],
        issue_repo=bundle["issue_repo"],
        transaction_manager=bundle["tx_manager"],
    )
    return HandleStripeWebhookUseCase(
        authenticator=authenticator,
        router=EventRouter(handlers),
        guard=guard,
        notifier=notifier,
        transaction_manager=bundle["tx_manager"],
        correlation_lock=correlation_lock,
        storage_timeout_seconds=storage_timeout_seconds,
    )


def get_bundle(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
) -> dict:
    if settings.use_in_memory:
        return _in_memory_bundle()
    if not session:
        raise RuntimeError("DB session not available")
    return _sql_bundle(session, settings)


def get_webhook_use_case(
    settings: Settings = Depends(get_settings),
    bundle: dict = Depends(get_bundle),
) -> HandleStripeWebhookUseCase:
    return build_webhook_use_case(
        bundle,
        authenticator=get_authenticator(),
        correlation_lock=get_correlation_lock(),
        storage_timeout_seconds=settings.storage_timeout_seconds,
    )


def get_use_cases(bundle: dict = Depends(get_bundle)) -> dict:
    payment_processor = bundle["payment_processor"]
    return {
        "get_payment_method": GetPaymentMethodUseCase(payment_processor=payment_processor),
        "attach_payment_method": AttachPaymentMethodUseCase(payment_processor=payment_processor),
    }
