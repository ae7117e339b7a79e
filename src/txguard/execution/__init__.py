"""Execution helpers: retry and failure capture for async operations."""

from txguard.execution.handling import OperationOutcome, with_error_handling
from txguard.execution.retry import RetryExecutor, with_retry

__all__ = [
    "OperationOutcome",
    "RetryExecutor",
    "with_error_handling",
    "with_retry",
]
