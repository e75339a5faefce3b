from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import stripe

from reconciler.domain.errors import PaymentProcessorError, PaymentProcessorUnavailableError
from reconciler.infrastructure.circuit_breaker import stripe_breaker
from reconciler.infrastructure.gateways.stripe_payment_processor import StripePaymentProcessor


def _card_payment_method(pm_id="pm_1", customer="cus_1"):
    return SimpleNamespace(
        id=pm_id,
        type="card",
        customer=customer,
        card=SimpleNamespace(
            brand="visa",
            last4="4242",
            exp_month=12,
            exp_year=2030,
            funding="credit",
            country="US",
        ),
    )


@pytest.fixture
def stripe_client():
    client = Mock()
    client.payment_methods.retrieve.return_value = _card_payment_method()
    client.payment_methods.attach.return_value = _card_payment_method()
    client.customers.retrieve.return_value = SimpleNamespace(
        invoice_settings=SimpleNamespace(default_payment_method="pm_1")
    )
    return client


@pytest.fixture
def processor(stripe_client):
    return StripePaymentProcessor(stripe_client)


class TestRetrievePaymentMethod:

    @pytest.mark.asyncio
    async def test_maps_card_details(self, processor, stripe_client):
        details = await processor.retrieve_payment_method_details("pm_1")

        stripe_client.payment_methods.retrieve.assert_called_once_with("pm_1")
        assert details.brand == "visa"
        assert details.last4 == "4242"
        assert details.customer_id == "cus_1"
        assert details.is_default is True

    @pytest.mark.asyncio
    async def test_detached_method_skips_customer_lookup(self, processor, stripe_client):
        stripe_client.payment_methods.retrieve.return_value = _card_payment_method(customer=None)

        details = await processor.retrieve_payment_method_details("pm_1")

        stripe_client.customers.retrieve.assert_not_called()
        assert details.is_default is False

    @pytest.mark.asyncio
    async def test_stripe_error_is_translated(self, processor, stripe_client):
        stripe_client.payment_methods.retrieve.side_effect = stripe.InvalidRequestError(
            "No such PaymentMethod: 'pm_x'", param="id", code="resource_missing"
        )

        with pytest.raises(PaymentProcessorError) as exc_info:
            await processor.retrieve_payment_method_details("pm_x")

        assert exc_info.value.processor_code == "resource_missing"


class TestAttachPaymentMethod:

    @pytest.mark.asyncio
    async def test_attach_passes_customer(self, processor, stripe_client):
        details = await processor.attach_payment_method("pm_1", "cus_1")

        stripe_client.payment_methods.attach.assert_called_once_with(
            "pm_1", params={"customer": "cus_1"}
        )
        assert details.id == "pm_1"

    @pytest.mark.asyncio
    async def test_set_default_updates_invoice_settings(self, processor, stripe_client):
        await processor.set_default_payment_method("cus_1", "pm_1")

        stripe_client.customers.update.assert_called_once_with(
            "cus_1", params={"invoice_settings": {"default_payment_method": "pm_1"}}
        )


@pytest.mark.circuit_breaker
class TestCircuitBreaker:

    @pytest.mark.asyncio
    async def test_open_circuit_fails_fast(self, processor, stripe_client):
        stripe_breaker.open()

        with pytest.raises(PaymentProcessorUnavailableError):
            await processor.retrieve_payment_method_details("pm_1")

        stripe_client.payment_methods.retrieve.assert_not_called()

    @pytest.mark.asyncio
    async def test_client_errors_do_not_open_the_circuit(self, processor, stripe_client):
        stripe_client.payment_methods.retrieve.side_effect = stripe.CardError(
            "Your card was declined.", param=None, code="card_declined"
        )

        for _ in range(stripe_breaker.fail_max + 1):
            with pytest.raises(PaymentProcessorError):
                await processor.retrieve_payment_method_details("pm_1")

        assert stripe_breaker.current_state == "closed"

    @pytest.mark.asyncio
    async def test_connection_errors_open_the_circuit(self, processor, stripe_client):
        stripe_client.payment_methods.retrieve.side_effect = stripe.APIConnectionError("timeout")

        for _ in range(stripe_breaker.fail_max - 1):
            with pytest.raises(PaymentProcessorError):
                await processor.retrieve_payment_method_details("pm_1")

        with pytest.raises(PaymentProcessorUnavailableError):
            await processor.retrieve_payment_method_details("pm_1")

        assert stripe_breaker.current_state == "open"
