"""Timer scheduling for alert expiry.

The queue never sleeps; it asks a Scheduler to run a callback later and
keeps the returned handle so it can cancel the timer when the alert leaves
the queue early.

- AsyncioScheduler: real timers on the running event loop
- ManualScheduler: virtual clock advanced explicitly (tests, synchronous hosts)
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Cancellation handle for a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Capability to run a callback once after a delay."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule ``callback`` to run once after ``delay_seconds``.

        Returns:
            A handle whose ``cancel()`` prevents the call.
        """
        ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop.

    Callbacks run on the loop thread, so queue mutations stay on one actor.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Loop to schedule on. Defaults to the loop running at the
                time of each call_later().
        """
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                raise RuntimeError(
                    "AsyncioScheduler needs a running event loop; "
                    "pass a loop or use ManualScheduler"
                ) from None
        return loop.call_later(delay_seconds, callback)


@dataclass(order=True)
class _ManualTimer:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler.

    Time only moves when ``advance()`` is called; due callbacks then run
    synchronously in due order (ties in scheduling order).

    Example:
        scheduler = ManualScheduler()
        queue = NotificationQueue(scheduler=scheduler)
        queue.info("Heads up", "...", duration_ms=100)
        scheduler.advance(0.1)  # the alert expires here
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[_ManualTimer] = []
        self._seq = itertools.count()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        timer = _ManualTimer(self.now + max(0.0, delay_seconds), next(self._seq), callback)
        heapq.heappush(self._timers, timer)
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled, uncancelled callbacks."""
        return sum(1 for timer in self._timers if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback that became due.

        Returns:
            Number of callbacks run.
        """
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")
        target = self.now + seconds
        fired = 0
        while self._timers and self._timers[0].due <= target:
            timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self.now = timer.due
            timer.callback()
            fired += 1
        self.now = target
        return fired
