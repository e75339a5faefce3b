from dataclasses import dataclass


@dataclass
class PaymentMethodDetails:
    id: str
    type: str
    customer_id: str | None = None
    brand: str | None = None
    last4: str | None = None
    exp_month: int | None = None
    exp_year: int | None = None
    funding: str | None = None
    country: str | None = None
    is_default: bool = False


class PaymentProcessor:
    """Payment-method operations against the processor (outside the reconciliation core)."""

    async def retrieve_payment_method_details(self, payment_method_id: str) -> PaymentMethodDetails:
        raise NotImplementedError

    async def attach_payment_method(
        self,
        payment_method_id: str,
        customer_id: str,
    ) -> PaymentMethodDetails:
        raise NotImplementedError

    async def set_default_payment_method(
        self,
        customer_id: str,
        payment_method_id: str,
    ) -> None:
        raise NotImplementedError
