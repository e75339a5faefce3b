"""
Infrastructure layer: concrete adapters for the application ports.

Structure:
- db/: SQLAlchemy Core tables, repositories, transaction manager, deadlock retry
- gateways/: Stripe adapters (webhook signature verification, payment methods)
- in_memory/: in-memory adapters for dev mode and tests
- circuit_breaker.py: pybreaker guard around Stripe API calls
"""
