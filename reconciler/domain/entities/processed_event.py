"""ProcessedEvent - ledger entry for a provider event already applied."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ProcessedEvent:
    event_id: str
    event_type: str
    outcome: str
    processed_at: datetime
    correlation_id: str | None = None
