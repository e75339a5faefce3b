"""
Circuit breaker for calls to the payment processor API.

CLOSED: calls pass through. OPEN: too many consecutive failures, calls fail
immediately with CircuitBreakerError. HALF_OPEN: after `reset_timeout`
seconds one trial call decides whether the circuit closes again.

Only transport-level failures count. Card declines and invalid requests are
client errors and are excluded so they cannot open the circuit.
"""

import logging

import stripe
from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


def _is_client_error(exc: BaseException) -> bool:
    return isinstance(
        exc,
        (stripe.CardError, stripe.InvalidRequestError, stripe.AuthenticationError),
    )


class StateChangeLogger(CircuitBreakerListener):
    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": old_state.name if old_state else None,
                "new_state": new_state.name,
            },
        )


stripe_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=60,
    exclude=[_is_client_error],
    listeners=[StateChangeLogger("stripe")],
    name="stripe_circuit_breaker",
)


__all__ = [
    "stripe_breaker",
    "StateChangeLogger",
    "CircuitBreakerError",
]
