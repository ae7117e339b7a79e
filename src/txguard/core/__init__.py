"""Core domain models, configuration and error classification."""

from txguard.core.config import AlertQueueConfig, LinksConfig, LogConfig, TxGuardConfig
from txguard.core.errors import ErrorClassifier, ErrorKind, ParsedError, RetryPolicy

__all__ = [
    "AlertQueueConfig",
    "ErrorClassifier",
    "ErrorKind",
    "LinksConfig",
    "LogConfig",
    "ParsedError",
    "RetryPolicy",
    "TxGuardConfig",
]
