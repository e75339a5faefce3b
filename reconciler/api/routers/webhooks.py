import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from reconciler.api.dependencies import get_webhook_use_case
from reconciler.api.schemas.webhooks import WebhookAck
from reconciler.application.use_cases.handle_stripe_webhook import HandleStripeWebhookUseCase
from reconciler.domain.errors import (
    AuthenticationError,
    InvalidEventPayloadError,
    TransientStorageError,
)
from reconciler.infrastructure.db.retry import retry_on_deadlock

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhooks/stripe", response_model=WebhookAck, status_code=status.HTTP_200_OK)
async def stripe_webhook(
    request: Request,
    use_case: HandleStripeWebhookUseCase = Depends(get_webhook_use_case),
) -> WebhookAck:
    """
    Receive a Stripe event.

    200 acknowledges the delivery (including duplicates and unknown types);
    400 tells Stripe the delivery is not authentic or not an event; 500 asks
    Stripe to redeliver later.
    """
    raw_body = await request.body()
    signature = request.headers.get("Stripe-Signature")
    try:
        result = await retry_on_deadlock(
            lambda: use_case.execute(raw_body=raw_body, signature=signature),
            max_attempts=3,
            base_delay=0.1,
        )
    except AuthenticationError as exc:
        # reason stays in the server logs
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid webhook signature"
        ) from exc
    except InvalidEventPayloadError as exc:
        logger.warning("Invalid webhook payload", extra={"detail": exc.detail})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payload") from exc
    except TransientStorageError as exc:
        logger.error("Webhook handler failed", exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook handler failed"
        ) from exc

    return WebhookAck(outcome=result.outcome.value)
