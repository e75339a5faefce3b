from sqlalchemy import JSON, Column, DateTime, Integer, MetaData, String, Table, Text

metadata = MetaData()

events = Table(
    "events",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255), nullable=False),
)

payments = Table(
    "payments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("payment_intent_id", String(64), nullable=False, unique=True),
    Column("amount", Integer, nullable=False),  # minor units
    Column("currency", String(3), nullable=False),
    Column("status", String(16), nullable=False, default="PENDING"),
    Column("updated_at", DateTime),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False),
    Column("event_id", String(64), nullable=False),
    Column("payment_intent_id", String(64), index=True),
    Column("status", String(16), nullable=False, default="PENDING"),
    Column("payment_status", String(16), nullable=False, default="UNPAID"),
    Column("updated_at", DateTime),
)

orders = Table(
    "orders",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False),
    Column("event_id", String(64), nullable=False),
    Column("status", String(16), nullable=False, default="PENDING"),
    Column("updated_at", DateTime),
)

order_tracking = Table(
    "order_tracking",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", String(64), nullable=False, index=True),
    Column("status", String(32), nullable=False),
    Column("description", String(255), nullable=False),
    Column("timestamp", DateTime, nullable=False),
)

notifications = Table(
    "notifications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("type", String(16), nullable=False),
    Column("title", String(255), nullable=False),
    Column("message", Text, nullable=False),
    Column("data", JSON),
    Column("created_at", DateTime),
)

issues = Table(
    "issues",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column("status", String(16), nullable=False, default="OPEN"),
    Column("priority", String(16), nullable=False, default="MEDIUM"),
    Column("created_at", DateTime),
)

processed_webhook_events = Table(
    "processed_webhook_events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", String(255), nullable=False, unique=True),
    Column("event_type", String(64), nullable=False),
    Column("correlation_id", String(255)),
    Column("outcome", String(32), nullable=False),
    Column("processed_at", DateTime, nullable=False),
)
