"""Error kinds and retry policies.

Contains the closed error taxonomy used throughout txguard.

This module provides:
- ErrorKind: The eight actionable failure kinds
- RetryPolicy: Retry recommendation derived from a kind
- get_retry_strategy(): Deterministic kind -> policy lookup

Retry Policy Table
==================

    | Kind                  | Retry | Delay  | Max retries |
    |-----------------------|-------|--------|-------------|
    | NETWORK_ERROR         | Yes   | 2000ms | 3           |
    | CONTRACT_ERROR        | Yes   | 1000ms | 2           |
    | UNKNOWN               | Yes   | 1000ms | 1           |
    | USER_REJECTED         | No    | N/A    | N/A         |
    | INSUFFICIENT_FUNDS    | No    | N/A    | N/A         |
    | INSUFFICIENT_LIQUIDITY| No    | N/A    | N/A         |
    | INVALID_AMOUNT        | No    | N/A    | N/A         |
    | WALLET_NOT_CONNECTED  | No    | N/A    | N/A         |

User-driven and validation-driven kinds are never retried: repeating the
same transaction cannot change their outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Actionable failure kinds produced by classification."""

    USER_REJECTED = "user_rejected"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    INVALID_AMOUNT = "invalid_amount"
    NETWORK_ERROR = "network_error"
    CONTRACT_ERROR = "contract_error"
    WALLET_NOT_CONNECTED = "wallet_not_connected"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> ErrorKind:
        """Resolve a kind from its value or member name, case-insensitively.

        Raises:
            ValueError: If the value names no kind.
        """
        normalized = value.strip().lower().replace("-", "_")
        for kind in cls:
            if normalized in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(f"Unknown error kind: {value!r}")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry recommendation for one error kind.

    When ``should_retry`` is False the delay and bound are None and must
    not be consulted.
    """

    should_retry: bool
    retry_delay_ms: int | None = None
    max_retries: int | None = None

    def __post_init__(self) -> None:
        if self.should_retry and (self.retry_delay_ms is None or self.max_retries is None):
            raise ValueError("Retryable policies need retry_delay_ms and max_retries")

    @property
    def retry_delay_seconds(self) -> float | None:
        if self.retry_delay_ms is None:
            return None
        return self.retry_delay_ms / 1000

    def allows_attempt(self, retries_so_far: int) -> bool:
        """Whether another retry is allowed after ``retries_so_far`` retries."""
        if not self.should_retry:
            return False
        return retries_so_far < (self.max_retries or 0)


NO_RETRY = RetryPolicy(should_retry=False)

_RETRY_POLICIES: dict[ErrorKind, RetryPolicy] = {
    ErrorKind.NETWORK_ERROR: RetryPolicy(should_retry=True, retry_delay_ms=2000, max_retries=3),
    ErrorKind.CONTRACT_ERROR: RetryPolicy(should_retry=True, retry_delay_ms=1000, max_retries=2),
    ErrorKind.USER_REJECTED: NO_RETRY,
    ErrorKind.INSUFFICIENT_FUNDS: NO_RETRY,
    ErrorKind.INSUFFICIENT_LIQUIDITY: NO_RETRY,
    ErrorKind.INVALID_AMOUNT: NO_RETRY,
    ErrorKind.WALLET_NOT_CONNECTED: NO_RETRY,
    ErrorKind.UNKNOWN: RetryPolicy(should_retry=True, retry_delay_ms=1000, max_retries=1),
}


def get_retry_strategy(kind: ErrorKind) -> RetryPolicy:
    """Return the retry policy for an error kind."""
    return _RETRY_POLICIES[kind]


RETRYABLE_KINDS = frozenset(kind for kind, policy in _RETRY_POLICIES.items() if policy.should_retry)
"""Kinds that the retry executor re-attempts locally."""
