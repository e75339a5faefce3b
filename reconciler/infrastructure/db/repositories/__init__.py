from reconciler.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from reconciler.infrastructure.db.repositories.notification_repo_sql import (
    IssueRepoSQL,
    NotificationRepoSQL,
)
from reconciler.infrastructure.db.repositories.order_repo_sql import (
    OrderRepoSQL,
    OrderTrackingRepoSQL,
)
from reconciler.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from reconciler.infrastructure.db.repositories.processed_event_repo_sql import (
    ProcessedEventRepoSQL,
)

__all__ = [
    "PaymentRepoSQL",
    "BookingRepoSQL",
    "OrderRepoSQL",
    "OrderTrackingRepoSQL",
    "NotificationRepoSQL",
    "IssueRepoSQL",
    "ProcessedEventRepoSQL",
]
