"""Domain exceptions for the payment reconciliation engine."""

from enum import Enum


class DomainError(Exception):
    """Base class for every domain error."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Authentication ===


class AuthFailureReason(str, Enum):
    MISSING_SIGNATURE = "MISSING_SIGNATURE"
    BAD_SIGNATURE = "BAD_SIGNATURE"
    STALE_TIMESTAMP = "STALE_TIMESTAMP"


class AuthenticationError(DomainError):
    """The webhook could not be proven to come from the payment processor.

    The reason is for server-side logs only; callers must not echo it.
    """

    def __init__(self, reason: AuthFailureReason, detail: str | None = None):
        super().__init__(
            message=f"Webhook authentication failed: {reason.value}",
            code="AUTHENTICATION_FAILED",
        )
        self.reason = reason
        self.detail = detail


class InvalidEventPayloadError(DomainError):
    """The body was authentic but is not a usable event envelope."""

    def __init__(self, detail: str):
        super().__init__(message=f"Invalid event payload: {detail}", code="INVALID_EVENT_PAYLOAD")
        self.detail = detail


# === Storage ===


class TransientStorageError(DomainError):
    """Storage was unavailable, slow or contended; the event must be redelivered."""

    def __init__(self, message: str):
        super().__init__(message=message, code="TRANSIENT_STORAGE_ERROR")


# === Notifications ===


class NotifierError(DomainError):
    """A notification or issue could not be created. Logged, never raised to callers."""

    def __init__(self, target: str, cause: Exception):
        super().__init__(
            message=f"Failed to create {target}: {cause}",
            code="NOTIFIER_ERROR",
        )
        self.target = target
        self.cause = cause


# === Payment processor ===


class PaymentProcessorError(DomainError):
    """The payment processor rejected a payment-method request."""

    def __init__(self, message: str, processor_code: str | None = None):
        super().__init__(message=message, code="PAYMENT_PROCESSOR_ERROR")
        self.processor_code = processor_code


class PaymentProcessorUnavailableError(DomainError):
    """The processor circuit is open or the call timed out."""

    def __init__(self, message: str = "Payment processor unavailable"):
        super().__init__(message=message, code="PAYMENT_PROCESSOR_UNAVAILABLE")
