"""ErrorClassifier implementation for wallet and transaction failures.

Maps an arbitrary failure value onto the closed ErrorKind taxonomy. The
failure's shape is not guaranteed by whatever raised it, so classification
runs an ordered chain of extractors and the first one to recognize the input
wins:

1. Rejection phrase in the string, ``message``, ``details`` or ``short_message``
2. Typed UserRejectedRequestError
3. Typed WalletNotConnectedError
4. Structured contract revert reason
5. Base transport error (short message text heuristics)
6. Generic exception or object with a message
7. Bare string
8. Generic fallback

Explicit rejection phrasing outranks everything else so that a wrapped
contract or transport failure never masks a user-initiated cancellation.

Classification is pure: it never logs and never raises. Logging of failures
is the job of ErrorReporter.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from txguard.core.constants import (
    DEFAULT_FAUCET_URL,
    GENERIC_NETWORK_PHRASES,
    INSUFFICIENT_FUNDS_PHRASES,
    TRANSPORT_NETWORK_PHRASES,
)

from .extractors import (
    DEFAULT_REVERT_REASONS,
    TEXT_FIELDS,
    UNKNOWN_FALLBACK,
    USER_REJECTED,
    WALLET_NOT_CONNECTED,
    contains_any,
    insufficient_funds,
    is_rejection_text,
    message_of,
    network_error,
    read_revert_reason,
    read_text,
    short_message_of,
    string_error,
    transaction_error,
    unexpected_error,
    unrecognized_revert,
)
from .models import (
    ParsedError,
    RemediationAction,
    TransportError,
    UserRejectedRequestError,
    WalletNotConnectedError,
    open_url_action,
)

if TYPE_CHECKING:
    from txguard.core.config import TxGuardConfig

Extractor = Callable[[object], ParsedError | None]

_SCALAR_TYPES = (bool, int, float, complex, bytes, bytearray)


class ErrorClassifier:
    """Classifies raw failures into ParsedError values."""

    def __init__(
        self,
        revert_reasons: Mapping[str, ParsedError] | None = None,
        funding_url: str = DEFAULT_FAUCET_URL,
        url_opener: Callable[[str], object] | None = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            revert_reasons: Extra revert codes mapped to results. Entries
                override the defaults with the same code.
            funding_url: Resource offered when the wallet lacks funds.
            url_opener: Callable used by the funding action to open the URL.
        """
        self.revert_reasons: dict[str, ParsedError] = {
            **DEFAULT_REVERT_REASONS,
            **(revert_reasons or {}),
        }
        self.funding_url = funding_url
        self._url_opener = url_opener
        self._extractors: tuple[Extractor, ...] = (
            self._extract_rejection_text,
            self._extract_typed_rejection,
            self._extract_wallet_not_connected,
            self._extract_revert_reason,
            self._extract_transport_error,
            self._extract_generic_error,
            self._extract_string,
        )

    @classmethod
    def from_config(cls, config: TxGuardConfig) -> ErrorClassifier:
        return cls(funding_url=config.links.faucet_url)

    def classify(self, raw: object) -> ParsedError:
        """Classify a raw failure. Never raises.

        Args:
            raw: Anything: a string, an exception, a mapping, None, ...

        Returns:
            The first extractor's result, or the generic Unknown result.
        """
        for extractor in self._extractors:
            try:
                result = extractor(raw)
            except Exception:
                # A foreign object whose attributes or __str__ raise cannot
                # be inspected further
                return UNKNOWN_FALLBACK
            if result is not None:
                return result
        return UNKNOWN_FALLBACK

    def funding_action(self) -> RemediationAction:
        return open_url_action("Get Testnet ETH", self.funding_url, self._url_opener)

    # -------------------------------------------------------------------------
    # Extractors, in priority order
    # -------------------------------------------------------------------------

    def _extract_rejection_text(self, raw: object) -> ParsedError | None:
        if isinstance(raw, str):
            return USER_REJECTED if is_rejection_text(raw) else None
        if raw is None or isinstance(raw, _SCALAR_TYPES):
            return None

        candidates = [message_of(raw)]
        candidates.extend(read_text(raw, names) for names in TEXT_FIELDS[1:])
        if any(is_rejection_text(text) for text in candidates):
            return USER_REJECTED
        return None

    def _extract_typed_rejection(self, raw: object) -> ParsedError | None:
        if isinstance(raw, UserRejectedRequestError):
            return USER_REJECTED
        return None

    def _extract_wallet_not_connected(self, raw: object) -> ParsedError | None:
        if isinstance(raw, WalletNotConnectedError):
            return WALLET_NOT_CONNECTED
        return None

    def _extract_revert_reason(self, raw: object) -> ParsedError | None:
        revert = read_revert_reason(raw)
        if revert is None:
            return None
        if revert.code is not None and revert.code in self.revert_reasons:
            return self.revert_reasons[revert.code]
        return unrecognized_revert(revert.code)

    def _extract_transport_error(self, raw: object) -> ParsedError | None:
        if isinstance(raw, str) or raw is None or isinstance(raw, _SCALAR_TYPES):
            return None
        short_message = short_message_of(raw)
        if not isinstance(raw, TransportError) and short_message is None:
            return None

        text = short_message or message_of(raw)
        if not text:
            return transaction_error("The transaction could not be completed.")

        if is_rejection_text(text):
            return USER_REJECTED
        if contains_any(text, INSUFFICIENT_FUNDS_PHRASES):
            return insufficient_funds(self.funding_action)
        if contains_any(text, TRANSPORT_NETWORK_PHRASES):
            return network_error("Unable to connect to the Ethereum network.")
        return transaction_error(text)

    def _extract_generic_error(self, raw: object) -> ParsedError | None:
        if isinstance(raw, str) or raw is None or isinstance(raw, _SCALAR_TYPES):
            return None
        text = message_of(raw)
        if text is None:
            if isinstance(raw, BaseException):
                return unexpected_error(UNKNOWN_FALLBACK.message)
            return None

        if is_rejection_text(text):
            return USER_REJECTED
        if contains_any(text, INSUFFICIENT_FUNDS_PHRASES[:1]):
            return insufficient_funds(message="You don't have enough ETH for this transaction.")
        if contains_any(text, GENERIC_NETWORK_PHRASES):
            return network_error("Unable to connect to the network.")
        return unexpected_error(text)

    def _extract_string(self, raw: object) -> ParsedError | None:
        if isinstance(raw, str) and raw:
            return string_error(raw)
        return None


_default_classifier = ErrorClassifier()


def classify(raw: object) -> ParsedError:
    """Classify ``raw`` with the default classifier."""
    return _default_classifier.classify(raw)
