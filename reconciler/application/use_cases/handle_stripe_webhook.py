import asyncio
import logging

from reconciler.application.dtos.reconciliation_dto import HandlerOutcome, HandlerResult
from reconciler.application.interfaces.event_authenticator import EventAuthenticator
from reconciler.application.interfaces.transaction_manager import TransactionManager
from reconciler.application.services.correlation_lock import CorrelationLock
from reconciler.application.services.event_router import EventRouter
from reconciler.application.services.idempotency_guard import IdempotencyGuard
from reconciler.application.services.notifier import Notifier
from reconciler.domain.errors import AuthenticationError, TransientStorageError
from reconciler.domain.events import Event, UnhandledEvent
from reconciler.domain.statuses import enum_value


class HandleStripeWebhookUseCase:
    """
    Entry point for one webhook delivery.

    authenticate -> per-correlation lock -> transactional phase (replay
    check, handler writes, ledger row) -> best-effort notifications.
    Errors raised here mean the processor should redeliver.
    """

    def __init__(
        self,
        authenticator: EventAuthenticator,
        router: EventRouter,
        guard: IdempotencyGuard,
        notifier: Notifier,
        transaction_manager: TransactionManager,
        correlation_lock: CorrelationLock,
        storage_timeout_seconds: float = 5.0,
    ) -> None:
        self._authenticator = authenticator
        self._router = router
        self._guard = guard
        self._notifier = notifier
        self._transaction_manager = transaction_manager
        self._correlation_lock = correlation_lock
        self._storage_timeout = storage_timeout_seconds
        self._logger = logging.getLogger(__name__)

    async def execute(self, raw_body: bytes, signature: str | None) -> HandlerResult:
        try:
            event = self._authenticator.authenticate(raw_body, signature)
        except AuthenticationError as exc:
            self._logger.warning(
                "Rejected webhook delivery",
                extra={"reason": exc.reason.value, "detail": exc.detail},
            )
            raise

        if isinstance(event, UnhandledEvent):
            # nothing to lock or record
            return await self._router.route(event)

        async with self._correlation_lock.hold(event.correlation_id):
            try:
                result = await asyncio.wait_for(self._apply(event), timeout=self._storage_timeout)
            except asyncio.TimeoutError as exc:
                self._logger.error(
                    "Webhook transaction timed out",
                    extra={
                        "event_id": event.event_id,
                        "correlation_id": event.correlation_id,
                        "timeout_seconds": self._storage_timeout,
                    },
                )
                raise TransientStorageError(
                    f"Storage did not respond within {self._storage_timeout}s"
                ) from exc

        # core state is committed; notification failures must not cause a redelivery
        await self._notifier.deliver(result.follow_ups)

        self._logger.info(
            "Stripe webhook processed",
            extra={
                "event_id": result.event_id,
                "event_type": result.kind,
                "correlation_id": result.correlation_id,
                "outcome": result.outcome.value,
            },
        )
        return result

    async def _apply(self, event: Event) -> HandlerResult:
        async with self._transaction_manager.start():
            if not await self._guard.should_apply(event):
                return HandlerResult(
                    outcome=HandlerOutcome.DUPLICATE,
                    event_id=event.event_id,
                    kind=enum_value(event.kind),
                    correlation_id=event.correlation_id,
                )
            result = await self._router.route(event)
            await self._guard.remember(event, result)
            return result
