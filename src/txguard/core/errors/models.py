"""Data models for error classification.

This module provides:
- RemediationAction: Optional one-shot callback attached to a classified error
- ParsedError: Immutable classification result with user-facing text
- TransportError and subclasses: Failure shapes raised by a wallet transport
  adapter, recognized by the classifier without importing the transport
"""

from __future__ import annotations

import webbrowser
from collections.abc import Callable
from dataclasses import dataclass

from .codes import ErrorKind, RetryPolicy, get_retry_strategy


@dataclass(frozen=True)
class RemediationAction:
    """A labelled callback the user can trigger to fix a failure."""

    label: str
    invoke: Callable[[], None]

    def __call__(self) -> None:
        self.invoke()


def open_url_action(
    label: str,
    url: str,
    opener: Callable[[str], object] | None = None,
) -> RemediationAction:
    """Build an action that opens ``url`` when invoked.

    Nothing is opened until the action is invoked.

    Args:
        label: Button label shown to the user.
        url: Resource to open.
        opener: Callable receiving the URL. Defaults to ``webbrowser.open``.
    """
    def _open() -> None:
        (opener or webbrowser.open)(url)

    return RemediationAction(label=label, invoke=_open)


@dataclass(frozen=True)
class ParsedError:
    """A failure mapped onto the closed ErrorKind taxonomy.

    ``title`` and ``message`` are always non-empty user-facing strings.
    """

    kind: ErrorKind
    title: str
    message: str
    suggestion: str | None = None
    action: RemediationAction | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.message:
            raise ValueError("ParsedError requires a non-empty title and message")

    @property
    def retry_policy(self) -> RetryPolicy:
        return get_retry_strategy(self.kind)

    @property
    def is_retryable(self) -> bool:
        return self.retry_policy.should_retry

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary (the action is reduced to its label)."""
        return {
            "kind": self.kind.value,
            "title": self.title,
            "message": self.message,
            "suggestion": self.suggestion,
            "action": self.action.label if self.action else None,
        }


# =============================================================================
# Transport failure shapes
# =============================================================================


class TransportError(Exception):
    """Base failure raised by a wallet/RPC transport adapter.

    Attributes:
        message: Full (often verbose) error text.
        short_message: One-line summary suitable for display.
        details: Raw detail string reported by the node or wallet.
    """

    def __init__(
        self,
        message: str = "",
        *,
        short_message: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message or short_message or details or "")
        self.message = message or short_message or ""
        self.short_message = short_message
        self.details = details


class UserRejectedRequestError(TransportError):
    """The wallet reported that the user declined to sign."""

    def __init__(
        self,
        message: str = "User rejected the request.",
        *,
        short_message: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, short_message=short_message or message, details=details)


class ContractRevertError(TransportError):
    """A contract call reverted.

    Attributes:
        reason: Discrete revert code (custom error name or require string),
            None when the node did not decode one.
    """

    def __init__(
        self,
        message: str = "Execution reverted.",
        *,
        reason: str | None = None,
        short_message: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, short_message=short_message, details=details)
        self.reason = reason


class WalletNotConnectedError(TransportError):
    """An operation needed a connected account and none was available."""

    def __init__(
        self,
        message: str = "No wallet is connected.",
        *,
        short_message: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, short_message=short_message, details=details)
