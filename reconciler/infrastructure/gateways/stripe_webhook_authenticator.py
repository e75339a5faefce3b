import json
import logging

import stripe
from pydantic import ValidationError

from reconciler.api.schemas.webhooks import StripeWebhookEnvelope, build_event
from reconciler.application.interfaces.clock import Clock, SystemClock
from reconciler.application.interfaces.event_authenticator import EventAuthenticator
from reconciler.domain.errors import AuthenticationError, AuthFailureReason, InvalidEventPayloadError
from reconciler.domain.events import Event

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_SECONDS = 300


class StripeWebhookAuthenticator(EventAuthenticator):
    """
    Verifies `Stripe-Signature` headers (`t=<ts>,v1=<hmac>`) over the raw body.

    The HMAC check is delegated to the Stripe SDK; the timestamp window is
    checked here against the injected clock, in both directions.
    """

    def __init__(
        self,
        webhook_secret: str,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        if not webhook_secret:
            raise ValueError("STRIPE_WEBHOOK_SECRET is required to verify webhooks")
        self._webhook_secret = webhook_secret
        self._tolerance = tolerance_seconds
        self._clock = clock or SystemClock()

    def authenticate(self, raw_body: bytes, signature_header: str | None) -> Event:
        if not signature_header:
            raise AuthenticationError(AuthFailureReason.MISSING_SIGNATURE)

        try:
            payload = raw_body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise AuthenticationError(AuthFailureReason.BAD_SIGNATURE, "Body is not UTF-8") from exc

        try:
            # tolerance=None: the SDK only checks the HMAC, the window is ours
            stripe.WebhookSignature.verify_header(
                payload, signature_header, self._webhook_secret, tolerance=None
            )
        except stripe.SignatureVerificationError as exc:
            raise AuthenticationError(AuthFailureReason.BAD_SIGNATURE, str(exc)) from exc

        timestamp = _signed_timestamp(signature_header)
        if timestamp is None:
            raise AuthenticationError(AuthFailureReason.BAD_SIGNATURE, "Missing timestamp")
        skew = abs(self._clock.timestamp() - timestamp)
        if skew > self._tolerance:
            raise AuthenticationError(
                AuthFailureReason.STALE_TIMESTAMP,
                f"Timestamp skew {skew:.0f}s exceeds {self._tolerance}s",
            )

        return self._parse(payload)

    def _parse(self, payload: str) -> Event:
        try:
            body = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise InvalidEventPayloadError("Body is not valid JSON") from exc
        if not isinstance(body, dict):
            raise InvalidEventPayloadError("Body is not a JSON object")

        try:
            envelope = StripeWebhookEnvelope.model_validate(body)
            return build_event(envelope)
        except ValidationError as exc:
            logger.warning(
                "Authentic webhook with unusable payload",
                extra={"event_id": body.get("id"), "event_type": body.get("type")},
            )
            raise InvalidEventPayloadError(
                f"{exc.error_count()} validation error(s) in event envelope"
            ) from exc


def _signed_timestamp(header: str) -> int | None:
    for item in header.split(","):
        key, _, value = item.strip().partition("=")
        if key == "t":
            try:
                return int(value)
            except ValueError:
                return None
    return None
