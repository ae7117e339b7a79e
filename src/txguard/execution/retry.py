"""Classification-driven retry for asynchronous operations.

Wraps an awaitable operation and re-attempts it when the failure's
classification allows it:

    executor = RetryExecutor()
    receipt = await executor.with_retry(lambda: client.send_swap(amount), context="swap")

The retry count is local to one ``with_retry`` call. Each failure is
classified afresh and the policy of that failure decides both whether to
retry and how long to wait. Terminal failures are reported once and then
re-raised unchanged, so callers see the same exception shapes they would
without the executor.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from txguard.core.errors import ErrorClassifier, ErrorReporter, get_retry_strategy
from txguard.core.logging import get_logger

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[object]]

_logger = get_logger("retry")


class RetryExecutor:
    """Runs operations with per-kind retry policies.

    Attributes:
        classifier: Classifier consulted on every failure.
        reporter: Receives the terminal failure before it is re-raised.
    """

    def __init__(
        self,
        classifier: ErrorClassifier | None = None,
        reporter: ErrorReporter | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the executor.

        Args:
            classifier: Classifier for failures. Defaults to a new ErrorClassifier.
            reporter: Terminal failure reporter. Defaults to one sharing the classifier.
            sleep: Awaitable delay function taking seconds; tests inject a recorder.
        """
        self.classifier = classifier or ErrorClassifier()
        self.reporter = reporter or ErrorReporter(self.classifier)
        self._sleep = sleep

    async def with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        context: str | None = None,
    ) -> T:
        """Run ``operation`` until it succeeds or its failure is terminal.

        Args:
            operation: Zero-argument callable returning a fresh awaitable per attempt.
            context: Label used in log events.

        Returns:
            The operation's result.

        Raises:
            Exception: The original failure of the last attempt, unmodified.
        """
        retry_count = 0
        while True:
            try:
                return await operation()
            except Exception as exc:
                parsed = self.classifier.classify(exc)
                policy = get_retry_strategy(parsed.kind)
                if not policy.allows_attempt(retry_count):
                    self.reporter.log_error(exc, context)
                    raise

                retry_count += 1
                _logger.info(
                    "retrying_operation",
                    context=context,
                    kind=parsed.kind.value,
                    attempt=retry_count,
                    max_retries=policy.max_retries,
                    delay_ms=policy.retry_delay_ms,
                )
                await self._sleep(policy.retry_delay_seconds or 0.0)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    context: str | None = None,
) -> T:
    """Run ``operation`` through a default RetryExecutor."""
    return await RetryExecutor().with_retry(operation, context)
