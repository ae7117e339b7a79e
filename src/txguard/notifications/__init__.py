"""txguard notification queue.

Provides the bounded, time-expiring alert queue and its collaborators:
- Alert models and severities
- Scheduler protocol with asyncio and virtual-clock implementations
- Transaction presets that turn classified failures into alerts

Usage:
    from txguard.notifications import NotificationQueue, ManualScheduler

    scheduler = ManualScheduler()
    queue = NotificationQueue(scheduler=scheduler)
    alert_id = queue.info("Heads up", "Gas prices are high", duration_ms=100)
    scheduler.advance(0.1)
    assert alert_id not in queue
"""

from txguard.notifications.models import (
    Alert,
    AlertAction,
    AlertInput,
    AlertLink,
    AlertSeverity,
)
from txguard.notifications.queue import AlertListener, NotificationQueue
from txguard.notifications.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    TimerHandle,
)
from txguard.notifications.transactions import TransactionAlerts

__all__ = [
    # Models
    "Alert",
    "AlertAction",
    "AlertInput",
    "AlertLink",
    "AlertSeverity",
    # Queue
    "AlertListener",
    "NotificationQueue",
    # Scheduling
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "TimerHandle",
    # Presets
    "TransactionAlerts",
]
