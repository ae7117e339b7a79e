"""Bounded, time-expiring notification queue.

Holds the active alerts newest first. Every mutation is synchronous; the
only deferred work is expiry timers, run through an injectable Scheduler.

Rules:
- ``enqueue`` inserts at the front and evicts from the tail beyond
  ``max_alerts``; an evicted alert's timer is cancelled.
- Non-loading alerts default to a 6 second lifetime; loading alerts have
  none unless the caller sets one.
- Persistent and loading alerts never get a timer.
- ``remove`` and ``clear`` cancel the timers of what they remove, and a
  timer that fires for an id no longer queued does nothing.

Example:
    queue = NotificationQueue(scheduler=AsyncioScheduler())
    pending = queue.loading("Transaction Pending", "Waiting for confirmation...")
    ...
    queue.remove(pending)
    queue.success("Swap Completed", "Your tokens have been swapped.")
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from txguard.core.constants import (
    DEFAULT_ALERT_DURATION_MS,
    DEFAULT_MAX_ALERTS,
    MS_PER_SECOND,
)
from txguard.core.logging import get_logger

from .models import Alert, AlertAction, AlertInput, AlertLink, AlertSeverity
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle

if TYPE_CHECKING:
    from txguard.core.config import AlertQueueConfig

AlertListener = Callable[[tuple[Alert, ...]], None]

_logger = get_logger("notifications")


def _new_alert_id() -> str:
    return uuid.uuid4().hex


class NotificationQueue:
    """Ordered, capacity-bounded collection of active alerts.

    Attributes:
        max_alerts: Capacity; the oldest alerts beyond it are dropped.
        default_duration_ms: Lifetime given to non-loading alerts that do
            not set one.
    """

    def __init__(
        self,
        max_alerts: int = DEFAULT_MAX_ALERTS,
        scheduler: Scheduler | None = None,
        default_duration_ms: int = DEFAULT_ALERT_DURATION_MS,
        id_factory: Callable[[], str] = _new_alert_id,
    ) -> None:
        """Initialize an empty queue.

        Args:
            max_alerts: Capacity, at least 1.
            scheduler: Timer source for expiry. Defaults to AsyncioScheduler,
                which needs a running loop when a timer is scheduled.
            default_duration_ms: Default lifetime in milliseconds.
            id_factory: Source of unique alert ids.

        Raises:
            ValueError: If max_alerts < 1 or default_duration_ms < 0.
        """
        if max_alerts < 1:
            raise ValueError(f"max_alerts must be >= 1, got {max_alerts}")
        if default_duration_ms < 0:
            raise ValueError(f"default_duration_ms must be >= 0, got {default_duration_ms}")
        self.max_alerts = max_alerts
        self.default_duration_ms = default_duration_ms
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._id_factory = id_factory
        self._alerts: list[Alert] = []
        self._timers: dict[str, TimerHandle] = {}
        self._listeners: list[AlertListener] = []

    @classmethod
    def from_config(
        cls,
        config: AlertQueueConfig,
        scheduler: Scheduler | None = None,
    ) -> NotificationQueue:
        return cls(
            max_alerts=config.max_alerts,
            scheduler=scheduler,
            default_duration_ms=config.default_duration_ms,
        )

    # -------------------------------------------------------------------------
    # Read access for renderers
    # -------------------------------------------------------------------------

    @property
    def alerts(self) -> tuple[Alert, ...]:
        """Snapshot of the queued alerts, newest first."""
        return tuple(self._alerts)

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    def get(self, alert_id: str) -> Alert | None:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        return None

    def __len__(self) -> int:
        return len(self._alerts)

    def __iter__(self) -> Iterator[Alert]:
        return iter(tuple(self._alerts))

    def __contains__(self, alert_id: object) -> bool:
        return any(alert.id == alert_id for alert in self._alerts)

    def subscribe(self, listener: AlertListener) -> Callable[[], None]:
        """Register a listener called with the new snapshot after each change.

        Returns:
            A callable that unregisters the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def enqueue(self, data: AlertInput) -> str:
        """Queue an alert and schedule its expiry.

        Args:
            data: Alert content.

        Returns:
            The new alert's id.

        Raises:
            RuntimeError: If the alert needs an expiry timer and the default
                AsyncioScheduler has no running event loop. The queue is left
                unchanged.
        """
        alert_id = self._id_factory()
        duration_ms = data.duration_ms
        if duration_ms is None and data.severity is not AlertSeverity.LOADING:
            duration_ms = self.default_duration_ms
        alert = Alert.from_input(alert_id, data, duration_ms)

        # Scheduling can fail (no running loop); do it before touching state
        timer: TimerHandle | None = None
        if alert.auto_expires and alert.duration_ms is not None:
            timer = self._scheduler.call_later(
                alert.duration_ms / MS_PER_SECOND,
                lambda: self._expire(alert_id),
            )

        self._alerts.insert(0, alert)
        while len(self._alerts) > self.max_alerts:
            evicted = self._alerts.pop()
            self._cancel_timer(evicted.id)
            _logger.debug("alert_evicted", alert_id=evicted.id, severity=evicted.severity.value)

        if timer is not None:
            self._timers[alert_id] = timer

        _logger.debug(
            "alert_enqueued",
            alert_id=alert_id,
            severity=alert.severity.value,
            duration_ms=alert.duration_ms,
            persistent=alert.persistent,
        )
        self._notify()
        return alert_id

    def remove(self, alert_id: str) -> bool:
        """Remove an alert and cancel its timer.

        Unknown, expired and evicted ids are ignored.

        Returns:
            True if an alert was removed.
        """
        self._cancel_timer(alert_id)
        for index, alert in enumerate(self._alerts):
            if alert.id == alert_id:
                del self._alerts[index]
                self._notify()
                return True
        return False

    def clear(self) -> None:
        """Remove every alert and cancel every pending timer."""
        for alert_id in list(self._timers):
            self._cancel_timer(alert_id)
        had_alerts = bool(self._alerts)
        self._alerts.clear()
        if had_alerts:
            self._notify()

    # -------------------------------------------------------------------------
    # Convenience constructors
    # -------------------------------------------------------------------------

    def success(self, title: str, message: str, **options: Any) -> str:
        return self.enqueue(AlertInput(AlertSeverity.SUCCESS, title, message, **options))

    def error(
        self,
        title: str,
        message: str,
        *,
        duration_ms: int | None = None,
        action: AlertAction | None = None,
        link: AlertLink | None = None,
    ) -> str:
        """Queue a persistent error alert; it stays until removed."""
        return self.enqueue(AlertInput(
            AlertSeverity.ERROR, title, message,
            duration_ms=duration_ms, persistent=True, action=action, link=link,
        ))

    def warning(self, title: str, message: str, **options: Any) -> str:
        return self.enqueue(AlertInput(AlertSeverity.WARNING, title, message, **options))

    def info(self, title: str, message: str, **options: Any) -> str:
        return self.enqueue(AlertInput(AlertSeverity.INFO, title, message, **options))

    def loading(
        self,
        title: str,
        message: str,
        *,
        duration_ms: int | None = None,
        action: AlertAction | None = None,
        link: AlertLink | None = None,
    ) -> str:
        """Queue a persistent loading alert; the operation it tracks must remove it."""
        return self.enqueue(AlertInput(
            AlertSeverity.LOADING, title, message,
            duration_ms=duration_ms, persistent=True, action=action, link=link,
        ))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _expire(self, alert_id: str) -> None:
        self._timers.pop(alert_id, None)
        if self.remove(alert_id):
            _logger.debug("alert_expired", alert_id=alert_id)

    def _cancel_timer(self, alert_id: str) -> None:
        handle = self._timers.pop(alert_id, None)
        if handle is not None:
            handle.cancel()

    def _notify(self) -> None:
        snapshot = self.alerts
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                # A broken renderer must not corrupt queue state
                _logger.warning("alert_listener_failed", listener=repr(listener), error=str(e))
