from dataclasses import replace

from reconciler.application.interfaces.payment_processor import PaymentMethodDetails, PaymentProcessor
from reconciler.domain.errors import PaymentProcessorError


class StubPaymentProcessor(PaymentProcessor):
    """Dev-mode processor: payment methods live in a dict, card data is fake."""

    def __init__(self) -> None:
        self._methods: dict[str, PaymentMethodDetails] = {}
        self._defaults: dict[str, str] = {}

    def register(self, details: PaymentMethodDetails) -> None:
        self._methods[details.id] = details

    async def retrieve_payment_method_details(self, payment_method_id: str) -> PaymentMethodDetails:
        details = self._methods.get(payment_method_id)
        if details is None:
            raise PaymentProcessorError(
                f"No such payment method: '{payment_method_id}'",
                processor_code="resource_missing",
            )
        is_default = bool(details.customer_id) and self._defaults.get(details.customer_id) == details.id
        return replace(details, is_default=is_default)

    async def attach_payment_method(
        self,
        payment_method_id: str,
        customer_id: str,
    ) -> PaymentMethodDetails:
        details = self._methods.get(payment_method_id)
        if details is None:
            details = PaymentMethodDetails(
                id=payment_method_id,
                type="card",
                brand="visa",
                last4="4242",
                exp_month=12,
                exp_year=2030,
                funding="credit",
                country="US",
            )
        details = replace(details, customer_id=customer_id)
        self._methods[payment_method_id] = details
        return replace(details)

    async def set_default_payment_method(
        self,
        customer_id: str,
        payment_method_id: str,
    ) -> None:
        self._defaults[customer_id] = payment_method_id
