"""Single-attempt execution that returns failures as values."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from txguard.core.errors import ErrorReporter, ParsedError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationOutcome(Generic[T]):
    """Result of ``with_error_handling``: exactly one of data/error is meaningful."""

    data: T | None = None
    error: ParsedError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def with_error_handling(
    operation: Callable[[], Awaitable[T]],
    context: str | None = None,
    reporter: ErrorReporter | None = None,
) -> OperationOutcome[T]:
    """Run ``operation`` once, logging and classifying any failure.

    Returns:
        OperationOutcome with ``data`` on success or ``error`` on failure.
    """
    try:
        data = await operation()
    except Exception as exc:
        parsed = (reporter or ErrorReporter()).handle_error(exc, context)
        return OperationOutcome(error=parsed)
    return OperationOutcome(data=data)
