"""Error classification and reporting."""

from txguard.core.errors.codes import (
    NO_RETRY,
    RETRYABLE_KINDS,
    ErrorKind,
    RetryPolicy,
    get_retry_strategy,
)
from txguard.core.errors.models import (
    ContractRevertError,
    ParsedError,
    RemediationAction,
    TransportError,
    UserRejectedRequestError,
    WalletNotConnectedError,
    open_url_action,
)
from txguard.core.errors.classifier import ErrorClassifier, classify
from txguard.core.errors.reporting import ErrorReporter

__all__ = [
    "NO_RETRY",
    "RETRYABLE_KINDS",
    "ErrorKind",
    "RetryPolicy",
    "get_retry_strategy",
    "ContractRevertError",
    "ParsedError",
    "RemediationAction",
    "TransportError",
    "UserRejectedRequestError",
    "WalletNotConnectedError",
    "open_url_action",
    "ErrorClassifier",
    "classify",
    "ErrorReporter",
]
