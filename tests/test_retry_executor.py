"""Tests for RetryExecutor.

Tests cover:
- Retry counts and delays per error kind
- Re-raising the original exception object
- Per-invocation retry counters
- Logging of retries and terminal failures
"""

import asyncio

import pytest
from structlog.testing import capture_logs

from tests.helpers import RecordingSleep, scripted_operation
from txguard.core.errors import (
    ContractRevertError,
    ErrorClassifier,
    ErrorReporter,
    TransportError,
    UserRejectedRequestError,
)
from txguard.execution import RetryExecutor, with_retry


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def executor(sleep: RecordingSleep) -> RetryExecutor:
    return RetryExecutor(sleep=sleep)


class TestWithRetry:
    """Retry decisions follow the failure's classification."""

    @pytest.mark.asyncio
    async def test_success_without_retry(self, executor: RetryExecutor, sleep: RecordingSleep) -> None:
        operation, calls = scripted_operation(["receipt"])
        assert await executor.with_retry(operation) == "receipt"
        assert calls[0] == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_network_error_twice_then_success(
        self, executor: RetryExecutor, sleep: RecordingSleep
    ) -> None:
        operation, calls = scripted_operation([
            Exception("Failed to fetch"),
            Exception("Failed to fetch"),
            "receipt",
        ])

        result = await executor.with_retry(operation, context="swap")

        assert result == "receipt"
        assert calls[0] == 3
        assert sleep.delays == [2.0, 2.0]

    @pytest.mark.asyncio
    async def test_user_rejected_not_retried(
        self, executor: RetryExecutor, sleep: RecordingSleep
    ) -> None:
        error = UserRejectedRequestError()
        operation, calls = scripted_operation([error])

        with pytest.raises(UserRejectedRequestError) as exc_info:
            await executor.with_retry(operation)

        assert exc_info.value is error
        assert calls[0] == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_network_error_exhausts_three_retries(
        self, executor: RetryExecutor, sleep: RecordingSleep
    ) -> None:
        errors = [TransportError(short_message="network unreachable") for _ in range(4)]
        operation, calls = scripted_operation(errors)

        with pytest.raises(TransportError) as exc_info:
            await executor.with_retry(operation)

        assert exc_info.value is errors[-1]
        assert calls[0] == 4
        assert sleep.delays == [2.0, 2.0, 2.0]

    @pytest.mark.asyncio
    async def test_contract_error_retried_twice(
        self, executor: RetryExecutor, sleep: RecordingSleep
    ) -> None:
        operation, calls = scripted_operation([ContractRevertError(reason="Paused")] * 3)

        with pytest.raises(ContractRevertError):
            await executor.with_retry(operation)

        assert calls[0] == 3
        assert sleep.delays == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_unknown_retried_once(self, executor: RetryExecutor, sleep: RecordingSleep) -> None:
        operation, calls = scripted_operation([ValueError("odd"), ValueError("odd")])

        with pytest.raises(ValueError):
            await executor.with_retry(operation)

        assert calls[0] == 2
        assert sleep.delays == [1.0]

    @pytest.mark.asyncio
    async def test_terminal_kind_after_retryable_stops(
        self, executor: RetryExecutor, sleep: RecordingSleep
    ) -> None:
        operation, calls = scripted_operation([
            Exception("Failed to fetch"),
            RuntimeError("insufficient funds for gas"),
        ])

        with pytest.raises(RuntimeError, match="insufficient funds"):
            await executor.with_retry(operation)

        assert calls[0] == 2
        assert sleep.delays == [2.0]

    @pytest.mark.asyncio
    async def test_retry_count_is_per_call(
        self, executor: RetryExecutor, sleep: RecordingSleep
    ) -> None:
        first, _ = scripted_operation([ValueError("odd"), "one"])
        second, _ = scripted_operation([ValueError("odd"), "two"])

        assert await executor.with_retry(first) == "one"
        assert await executor.with_retry(second) == "two"
        assert sleep.delays == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_cancellation_propagates_without_retry(
        self, executor: RetryExecutor, sleep: RecordingSleep
    ) -> None:
        operation, calls = scripted_operation([asyncio.CancelledError()])

        with pytest.raises(asyncio.CancelledError):
            await executor.with_retry(operation)

        assert calls[0] == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_module_level_with_retry(self) -> None:
        operation, _ = scripted_operation(["ok"])
        assert await with_retry(operation) == "ok"


class TestRetryLogging:
    """Retries and terminal failures are logged; classification is not surfaced."""

    @pytest.mark.asyncio
    async def test_retry_and_terminal_events(self, sleep: RecordingSleep) -> None:
        executor = RetryExecutor(sleep=sleep)
        operation, _ = scripted_operation([ValueError("odd"), ValueError("still odd")])

        with capture_logs() as logs:
            with pytest.raises(ValueError):
                await executor.with_retry(operation, context="swap")

        events = [entry["event"] for entry in logs]
        assert events == ["retrying_operation", "operation_failed"]
        retry_entry, failure_entry = logs
        assert retry_entry["attempt"] == 1
        assert retry_entry["max_retries"] == 1
        assert retry_entry["delay_ms"] == 1000
        assert failure_entry["context"] == "swap"
        assert failure_entry["kind"] == "unknown"
        assert failure_entry["message"] == "still odd"
        assert failure_entry["log_level"] == "error"

    @pytest.mark.asyncio
    async def test_reporter_receives_terminal_failure_once(self, sleep: RecordingSleep) -> None:
        reported: list[tuple[object, str | None]] = []

        class RecordingReporter(ErrorReporter):
            def log_error(self, error, context=None):  # type: ignore[override]
                reported.append((error, context))
                super().log_error(error, context)

        classifier = ErrorClassifier()
        executor = RetryExecutor(classifier, RecordingReporter(classifier), sleep=sleep)
        error = UserRejectedRequestError()
        operation, _ = scripted_operation([error])

        with pytest.raises(UserRejectedRequestError):
            await executor.with_retry(operation, context="approve")

        assert reported == [(error, "approve")]
