import asyncio
import logging

import stripe

from reconciler.application.interfaces.payment_processor import PaymentMethodDetails, PaymentProcessor
from reconciler.domain.errors import PaymentProcessorError, PaymentProcessorUnavailableError
from reconciler.infrastructure.circuit_breaker import CircuitBreakerError, stripe_breaker

logger = logging.getLogger(__name__)


class StripePaymentProcessor(PaymentProcessor):
    def __init__(self, client: stripe.StripeClient) -> None:
        self._client = client

    @classmethod
    def from_api_key(cls, api_key: str) -> "StripePaymentProcessor":
        # Bounded network retries so a slow API cannot hold a worker thread forever
        return cls(stripe.StripeClient(api_key, max_network_retries=2))

    async def _call(self, func, *args, **kwargs):
        """
        Run a blocking SDK call in a worker thread, protected by the circuit breaker.

        Raises:
            PaymentProcessorUnavailableError: circuit open
            PaymentProcessorError: Stripe rejected the request
        """
        try:
            return await asyncio.to_thread(stripe_breaker.call, func, *args, **kwargs)
        except CircuitBreakerError as e:
            logger.error(
                "Stripe circuit breaker is open - service unavailable",
                extra={"circuit_state": str(e)},
            )
            raise PaymentProcessorUnavailableError() from e
        except stripe.StripeError as e:
            logger.error("Stripe API error", exc_info=e, extra={"stripe_code": e.code})
            raise PaymentProcessorError(
                e.user_message or str(e) or "Stripe request failed",
                processor_code=e.code,
            ) from e

    async def retrieve_payment_method_details(self, payment_method_id: str) -> PaymentMethodDetails:
        payment_method = await self._call(self._client.payment_methods.retrieve, payment_method_id)
        details = _to_details(payment_method)
        if details.customer_id:
            customer = await self._call(self._client.customers.retrieve, details.customer_id)
            invoice_settings = getattr(customer, "invoice_settings", None)
            default_id = getattr(invoice_settings, "default_payment_method", None)
            details.is_default = default_id == details.id
        return details

    async def attach_payment_method(
        self,
        payment_method_id: str,
        customer_id: str,
    ) -> PaymentMethodDetails:
        payment_method = await self._call(
            self._client.payment_methods.attach,
            payment_method_id,
            params={"customer": customer_id},
        )
        logger.info(
            "Payment method attached in Stripe",
            extra={"payment_method_id": payment_method_id, "customer_id": customer_id},
        )
        return _to_details(payment_method)

    async def set_default_payment_method(
        self,
        customer_id: str,
        payment_method_id: str,
    ) -> None:
        await self._call(
            self._client.customers.update,
            customer_id,
            params={"invoice_settings": {"default_payment_method": payment_method_id}},
        )


def _to_details(payment_method) -> PaymentMethodDetails:
    card = getattr(payment_method, "card", None)
    return PaymentMethodDetails(
        id=payment_method.id,
        type=payment_method.type,
        customer_id=getattr(payment_method, "customer", None),
        brand=getattr(card, "brand", None),
        last4=getattr(card, "last4", None),
        exp_month=getattr(card, "exp_month", None),
        exp_year=getattr(card, "exp_year", None),
        funding=getattr(card, "funding", None),
        country=getattr(card, "country", None),
    )
