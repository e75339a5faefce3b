from pydantic import BaseModel, Field

from reconciler.application.interfaces.payment_processor import PaymentMethodDetails


class AttachPaymentMethodRequest(BaseModel):
    payment_method_id: str = Field(min_length=1)
    customer_id: str = Field(min_length=1)
    set_as_default: bool = False


class PaymentMethodResponse(BaseModel):
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

    @classmethod
    def from_details(cls, details: PaymentMethodDetails) -> "PaymentMethodResponse":
        return cls(
            id=details.id,
            type=details.type,
            customer_id=details.customer_id,
            brand=details.brand,
            last4=details.last4,
            exp_month=details.exp_month,
            exp_year=details.exp_year,
            funding=details.funding,
            country=details.country,
            is_default=details.is_default,
        )
