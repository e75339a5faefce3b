import hashlib
import hmac
import json
import os
import time
import uuid

from locust import HttpUser, between, task

WEBHOOK_SECRET = os.environ.get("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")
PAYMENT_INTENT_ID = os.environ.get("LOAD_PAYMENT_INTENT_ID", "pi_seed_1")


def _sign(payload: str) -> str:
    timestamp = int(time.time())
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(WEBHOOK_SECRET.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


class StripeWebhookUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    def _deliver(self, event: dict, name: str):
        payload = json.dumps(event)
        self.client.post(
            "/api/v1/webhooks/stripe",
            data=payload,
            headers={"Stripe-Signature": _sign(payload), "Content-Type": "application/json"},
            name=name,  # Group all requests under this name in the stats
        )

    @task(5)
    def payment_succeeded(self):
        """
        A fresh event id each time: after the first delivery every request
        takes the no-change path under the correlation lock.
        """
        self._deliver(
            {
                "id": f"evt_{uuid.uuid4().hex}",
                "type": "payment_intent.succeeded",
                "data": {
                    "object": {
                        "id": PAYMENT_INTENT_ID,
                        "object": "payment_intent",
                        "amount": 10000,
                        "currency": "usd",
                    }
                },
            },
            name="payment_intent.succeeded",
        )

    @task(2)
    def replayed_delivery(self):
        """Same event id every time: exercises the processed-event ledger."""
        self._deliver(
            {
                "id": "evt_load_replay",
                "type": "payment_intent.succeeded",
                "data": {
                    "object": {
                        "id": PAYMENT_INTENT_ID,
                        "object": "payment_intent",
                        "amount": 10000,
                        "currency": "usd",
                    }
                },
            },
            name="replay",
        )

    @task(1)
    def unsigned_delivery(self):
        with self.client.post(
            "/api/v1/webhooks/stripe",
            data="{}",
            headers={"Content-Type": "application/json"},
            name="unsigned",
            catch_response=True,
        ) as response:
            if response.status_code == 400:
                response.success()
