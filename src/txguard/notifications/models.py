"""Alert models for the notification queue.

Alerts are immutable once queued; the queue only ever inserts and removes
them. The renderer contract is expressed as properties on Alert:

- ``dismissible``: whether a close affordance may be shown
- ``auto_expires``: whether the queue scheduled an expiry timer
- ``shows_progress``: whether a depleting progress indicator applies
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from txguard.utils.time import utc_now


class AlertSeverity(str, Enum):
    """Visual severity of an alert."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    LOADING = "loading"


@dataclass(frozen=True)
class AlertAction:
    """A button on an alert."""

    label: str
    invoke: Callable[[], None]

    def __call__(self) -> None:
        self.invoke()


@dataclass(frozen=True)
class AlertLink:
    """An external link on an alert."""

    label: str
    url: str


@dataclass(frozen=True)
class AlertInput:
    """Caller-supplied alert data, before the queue assigns an id.

    ``duration_ms`` of None means "use the severity default"; 0 means the
    alert never auto-expires.
    """

    severity: AlertSeverity
    title: str
    message: str
    duration_ms: int | None = None
    persistent: bool = False
    action: AlertAction | None = None
    link: AlertLink | None = None

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Alert title must not be empty")
        if self.duration_ms is not None and self.duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {self.duration_ms}")


@dataclass(frozen=True)
class Alert:
    """A queued notification."""

    id: str
    severity: AlertSeverity
    title: str
    message: str
    duration_ms: int | None = None
    persistent: bool = False
    action: AlertAction | None = None
    link: AlertLink | None = None
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_input(cls, alert_id: str, data: AlertInput, duration_ms: int | None) -> Alert:
        return cls(
            id=alert_id,
            severity=data.severity,
            title=data.title,
            message=data.message,
            duration_ms=duration_ms or None,
            persistent=data.persistent,
            action=data.action,
            link=data.link,
        )

    @property
    def auto_expires(self) -> bool:
        return (
            self.duration_ms is not None
            and not self.persistent
            and self.severity is not AlertSeverity.LOADING
        )

    @property
    def dismissible(self) -> bool:
        return not self.persistent

    @property
    def shows_progress(self) -> bool:
        """Renderer should draw a bar depleting linearly over ``duration_ms``."""
        return self.auto_expires
