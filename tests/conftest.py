"""
Pytest configuration and shared fixtures.

Provides:
- Environment for the app (in-memory mode, webhook secret)
- A fixed clock and a seeded in-memory store
- Signed Stripe webhook deliveries (FastAPI TestClient)
- An aiosqlite engine for SQL-backed tests
"""

import os
from typing import Any, AsyncGenerator, Generator

os.environ.setdefault("USE_IN_MEMORY", "true")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from reconciler.api.dependencies import (  # noqa: E402
    build_in_memory_bundle,
    build_webhook_use_case,
    get_bundle,
    get_webhook_use_case,
)
from reconciler.application.interfaces.clock import FakeClock  # noqa: E402
from reconciler.application.services.correlation_lock import CorrelationLock  # noqa: E402
from reconciler.infrastructure.circuit_breaker import stripe_breaker  # noqa: E402
from reconciler.infrastructure.db.tables import metadata  # noqa: E402
from reconciler.infrastructure.gateways.stripe_webhook_authenticator import (  # noqa: E402
    StripeWebhookAuthenticator,
)
from reconciler.infrastructure.in_memory.store import InMemoryStore  # noqa: E402
from reconciler.main import app  # noqa: E402
from tests.factories import FIXED_NOW, WEBHOOK_SECRET, seed_booking, signed_body  # noqa: E402


# ============================================================================
# STORE / CLOCK FIXTURES
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seeded_store(store: InMemoryStore) -> InMemoryStore:
    seed_booking(store)
    return store


@pytest.fixture
def bundle(seeded_store: InMemoryStore, clock: FakeClock) -> dict:
    return build_in_memory_bundle(store=seeded_store, clock=clock)


@pytest.fixture
def authenticator(clock: FakeClock) -> StripeWebhookAuthenticator:
    return StripeWebhookAuthenticator(WEBHOOK_SECRET, tolerance_seconds=300, clock=clock)


@pytest.fixture
def webhook_use_case(bundle: dict, authenticator: StripeWebhookAuthenticator):
    return build_webhook_use_case(
        bundle,
        authenticator=authenticator,
        correlation_lock=CorrelationLock(timeout_seconds=2.0),
        storage_timeout_seconds=5.0,
    )


# ============================================================================
# HTTP CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def client(bundle: dict, webhook_use_case) -> Generator[TestClient, None, None]:
    """TestClient wired to the test bundle instead of the process-wide one."""
    app.dependency_overrides[get_bundle] = lambda: bundle
    app.dependency_overrides[get_webhook_use_case] = lambda: webhook_use_case

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def deliver(client: TestClient, clock: FakeClock):
    """POST a correctly signed event and return the response."""
    def _deliver(event: dict[str, Any]):
        body, signature = signed_body(event, clock)
        return client.post(
            "/api/v1/webhooks/stripe",
            content=body,
            headers={"Stripe-Signature": signature, "Content-Type": "application/json"},
        )

    return _deliver


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


# ============================================================================
# HOOKS
# ============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests backed by a SQL database")
    config.addinivalue_line("markers", "circuit_breaker: tests of the Stripe circuit breaker")


@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """Tests must not inherit an open circuit from an earlier test."""
    stripe_breaker.close()
    yield
    stripe_breaker.close()
