"""Field probing and fixed result templates for error classification.

Raw failures arrive in several shapes: plain strings, exceptions, transport
errors with ``short_message``/``details`` attributes, and decoded JSON
mappings from a wallet bridge that use camelCase keys. The helpers here read
those shapes without assuming which one they were given.

This module provides:
- read_text(): First non-empty string among candidate field names
- message_of(): The "message" of an exception, object or mapping
- read_revert_reason(): Structured revert code, when one is carried
- contains_any(): Case-insensitive phrase test
- Fixed ParsedError templates and the default revert reason table
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from txguard.core.constants import USER_REJECTION_PHRASES

from .codes import ErrorKind
from .models import ContractRevertError, ParsedError, RemediationAction

TEXT_FIELDS: tuple[tuple[str, ...], ...] = (
    ("message",),
    ("details",),
    ("short_message", "shortMessage"),
)
"""Textual fields probed for rejection phrases, in priority order."""

_REVERT_FIELDS: tuple[str, ...] = ("revert_reason", "revertReason")
_ERROR_NAME_FIELDS: tuple[str, ...] = ("error_name", "errorName")


def _get_field(raw: object, names: Iterable[str]) -> object | None:
    for name in names:
        if isinstance(raw, Mapping):
            value = raw.get(name)
        else:
            value = getattr(raw, name, None)
        if value is not None:
            return value
    return None


def read_text(raw: object, names: Iterable[str]) -> str | None:
    """Return the first non-empty string stored under one of ``names``."""
    for name in names:
        value = _get_field(raw, (name,))
        if isinstance(value, str) and value:
            return value
    return None


def message_of(raw: object) -> str | None:
    """Return the message carried by an exception, object or mapping.

    Exceptions without a ``message`` attribute fall back to ``str(exc)``.
    """
    text = read_text(raw, ("message",))
    if text is None and isinstance(raw, BaseException):
        text = str(raw) or None
    return text


def short_message_of(raw: object) -> str | None:
    return read_text(raw, ("short_message", "shortMessage"))


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in phrases)


def is_rejection_text(text: str | None) -> bool:
    return text is not None and contains_any(text, USER_REJECTION_PHRASES)


@dataclass(frozen=True)
class RevertReason:
    """A structured revert carried by a failure.

    ``code`` is None when the failure is a revert but no reason was decoded.
    """

    code: str | None


def read_revert_reason(raw: object) -> RevertReason | None:
    """Extract a structured revert reason, or None when ``raw`` carries none.

    Checked shapes, in order: ContractRevertError (``reason``, then its short
    message), a ``revert_reason``/``revertReason`` field, and a nested
    ``data.errorName``/``data.error_name`` field.
    """
    if isinstance(raw, ContractRevertError):
        return RevertReason(raw.reason or raw.short_message or None)

    if isinstance(raw, str):
        return None

    code = read_text(raw, _REVERT_FIELDS)
    if code is not None:
        return RevertReason(code)

    data = _get_field(raw, ("data",))
    if data is not None and not isinstance(data, (str, bytes)):
        name = read_text(data, _ERROR_NAME_FIELDS)
        if name is not None:
            return RevertReason(name)
    return None


# =============================================================================
# Fixed result templates
# =============================================================================

USER_REJECTED = ParsedError(
    kind=ErrorKind.USER_REJECTED,
    title="Transaction Cancelled",
    message="You cancelled the transaction in your wallet.",
    suggestion="Try again when you're ready to proceed.",
)

INVALID_AMOUNT = ParsedError(
    kind=ErrorKind.INVALID_AMOUNT,
    title="Invalid Amount",
    message="Please enter a valid ETH amount greater than 0.",
    suggestion="Check the minimum swap amount (0.001 ETH).",
)

INSUFFICIENT_LIQUIDITY = ParsedError(
    kind=ErrorKind.INSUFFICIENT_LIQUIDITY,
    title="Insufficient Liquidity",
    message="The pool doesn't have enough tokens for this swap.",
    suggestion="Try a smaller amount or add liquidity to the pool.",
)

TRANSFER_FAILED = ParsedError(
    kind=ErrorKind.CONTRACT_ERROR,
    title="Transfer Failed",
    message="The token transfer could not be completed.",
    suggestion="This might be a temporary issue. Please try again.",
)

WALLET_NOT_CONNECTED = ParsedError(
    kind=ErrorKind.WALLET_NOT_CONNECTED,
    title="Wallet Not Connected",
    message="Please connect your wallet to continue.",
    suggestion="Connect a wallet and try again.",
)

UNKNOWN_FALLBACK = ParsedError(
    kind=ErrorKind.UNKNOWN,
    title="Unknown Error",
    message="An unexpected error occurred.",
    suggestion="Please refresh the page and try again.",
)

DEFAULT_REVERT_REASONS: Mapping[str, ParsedError] = {
    "InsufficientETH": INVALID_AMOUNT,
    "Must send ETH": INVALID_AMOUNT,
    "InsufficientTokenLiquidity": INSUFFICIENT_LIQUIDITY,
    "Insufficient token liquidity": INSUFFICIENT_LIQUIDITY,
    "TransferFailed": TRANSFER_FAILED,
    "Token transfer failed": TRANSFER_FAILED,
}
"""Known revert codes (custom error names and require strings)."""


def unrecognized_revert(code: str | None) -> ParsedError:
    return ParsedError(
        kind=ErrorKind.CONTRACT_ERROR,
        title="Contract Error",
        message=code or "The smart contract rejected the transaction.",
        suggestion="Please check your transaction parameters and try again.",
    )


def insufficient_funds(
    action_factory: Callable[[], RemediationAction | None] | None = None,
    message: str = "You don't have enough ETH to complete this transaction.",
) -> ParsedError:
    return ParsedError(
        kind=ErrorKind.INSUFFICIENT_FUNDS,
        title="Insufficient Funds",
        message=message,
        suggestion="Make sure you have enough ETH for both the swap and gas fees.",
        action=action_factory() if action_factory else None,
    )


def network_error(message: str) -> ParsedError:
    return ParsedError(
        kind=ErrorKind.NETWORK_ERROR,
        title="Network Error",
        message=message,
        suggestion="Check your internet connection and try again.",
    )


def transaction_error(message: str) -> ParsedError:
    return ParsedError(
        kind=ErrorKind.CONTRACT_ERROR,
        title="Transaction Error",
        message=message,
        suggestion="Please try again or contact support if the issue persists.",
    )


def unexpected_error(message: str) -> ParsedError:
    return ParsedError(
        kind=ErrorKind.UNKNOWN,
        title="Unexpected Error",
        message=message,
        suggestion="Please try again or refresh the page.",
    )


def string_error(message: str) -> ParsedError:
    return ParsedError(
        kind=ErrorKind.UNKNOWN,
        title="Error",
        message=message,
        suggestion="Please try again.",
    )
