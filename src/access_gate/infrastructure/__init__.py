"""Infrastructure — the host ledger model and the notification broadcast."""

from access_gate.infrastructure.ledger import InMemoryLedger
from access_gate.infrastructure.notification_channel import (
    NotificationChannel,
    Subscription,
)

__all__ = ["InMemoryLedger", "NotificationChannel", "Subscription"]
