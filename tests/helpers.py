"""Shared test helpers for txguard tests."""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def scripted_operation(outcomes: Iterable[Any]) -> tuple[Callable[[], Awaitable[Any]], list[int]]:
    """Build an async operation that raises or returns ``outcomes`` in order.

    Exceptions in ``outcomes`` are raised; anything else is returned.

    Returns:
        The operation and a single-item list holding the call count.
    """
    remaining = list(outcomes)
    calls = [0]

    async def operation() -> Any:
        calls[0] += 1
        outcome = remaining.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    return operation, calls
