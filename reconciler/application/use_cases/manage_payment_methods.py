import logging
from dataclasses import replace

from reconciler.application.interfaces.payment_processor import PaymentMethodDetails, PaymentProcessor


class GetPaymentMethodUseCase:
    def __init__(self, payment_processor: PaymentProcessor) -> None:
        self._payment_processor = payment_processor

    async def execute(self, payment_method_id: str) -> PaymentMethodDetails:
        return await self._payment_processor.retrieve_payment_method_details(payment_method_id)


class AttachPaymentMethodUseCase:
    """Attach a payment method to a customer, optionally making it the invoice default."""

    def __init__(self, payment_processor: PaymentProcessor) -> None:
        self._payment_processor = payment_processor
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        payment_method_id: str,
        customer_id: str,
        set_as_default: bool = False,
    ) -> PaymentMethodDetails:
        details = await self._payment_processor.attach_payment_method(
            payment_method_id=payment_method_id,
            customer_id=customer_id,
        )
        if set_as_default:
            await self._payment_processor.set_default_payment_method(
                customer_id=customer_id,
                payment_method_id=payment_method_id,
            )
            details = replace(details, is_default=True)

        self._logger.info(
            "Payment method attached",
            extra={
                "payment_method_id": payment_method_id,
                "customer_id": customer_id,
                "is_default": details.is_default,
            },
        )
        return details
