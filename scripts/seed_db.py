import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy import insert  # noqa: E402

from reconciler.api.deps import engine  # noqa: E402
from reconciler.infrastructure.db.tables import (  # noqa: E402
    bookings,
    events,
    metadata,
    orders,
    payments,
)


async def seed():
    async with engine.begin() as conn:
        # Recreate tables
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
        print("Recreated all tables.")

        await conn.execute(insert(events).values(id="evt_seed_1", name="Summer Concert"))
        await conn.execute(
            insert(payments).values(
                payment_intent_id="pi_seed_1", amount=10000, currency="usd", status="PENDING"
            )
        )
        await conn.execute(
            insert(bookings).values(
                id="booking_seed_1",
                user_id="user_seed_1",
                event_id="evt_seed_1",
                payment_intent_id="pi_seed_1",
                status="PENDING",
                payment_status="UNPAID",
            )
        )
        await conn.execute(
            insert(orders).values(
                id="order_seed_1", user_id="user_seed_1", event_id="evt_seed_1", status="PENDING"
            )
        )

        print("Seeded one pending booking for payment intent pi_seed_1.")

if __name__ == "__main__":
    asyncio.run(seed())
