"""txguard: wallet error classification, classified retry and alert queueing.

Three components, composed top-down:

- ErrorClassifier maps any raw failure to a ParsedError.
- RetryExecutor re-attempts async operations according to the failure kind.
- NotificationQueue holds the bounded, time-expiring alerts shown to users.
"""

__version__ = "0.3.0"

from txguard.core.errors import (
    ErrorClassifier,
    ErrorKind,
    ErrorReporter,
    ParsedError,
    RetryPolicy,
    classify,
    get_retry_strategy,
)
from txguard.execution import RetryExecutor, with_error_handling, with_retry
from txguard.notifications import (
    Alert,
    AlertInput,
    AlertSeverity,
    NotificationQueue,
    TransactionAlerts,
)

__all__ = [
    "__version__",
    "Alert",
    "AlertInput",
    "AlertSeverity",
    "ErrorClassifier",
    "ErrorKind",
    "ErrorReporter",
    "NotificationQueue",
    "ParsedError",
    "RetryExecutor",
    "RetryPolicy",
    "TransactionAlerts",
    "classify",
    "get_retry_strategy",
    "with_error_handling",
    "with_retry",
]
