from reconciler.application.use_cases.handle_stripe_webhook import HandleStripeWebhookUseCase
from reconciler.application.use_cases.manage_payment_methods import (
    AttachPaymentMethodUseCase,
    GetPaymentMethodUseCase,
)
from reconciler.application.use_cases.reconciliation_handlers import (
    DisputeOpenedHandler,
    InvoicePaidHandler,
    PaymentCanceledHandler,
    PaymentFailedHandler,
    PaymentSucceededHandler,
    SubscriptionChangedHandler,
    build_handlers,
)

__all__ = [
    "HandleStripeWebhookUseCase",
    "GetPaymentMethodUseCase",
    "AttachPaymentMethodUseCase",
    "PaymentSucceededHandler",
    "PaymentFailedHandler",
    "PaymentCanceledHandler",
    "DisputeOpenedHandler",
    "InvoicePaidHandler",
    "SubscriptionChangedHandler",
    "build_handlers",
]
