"""Error reporting for classified failures.

Keeps the logging side effect out of the classifier: callers that need a
failure recorded go through ErrorReporter, which classifies and emits one
structured log event per failure.
"""

from __future__ import annotations

from txguard.core.logging import TxGuardLogger, get_logger

from .classifier import ErrorClassifier
from .models import ParsedError


class ErrorReporter:
    """Classifies failures and records them in the structured log."""

    def __init__(
        self,
        classifier: ErrorClassifier | None = None,
        logger: TxGuardLogger | None = None,
    ) -> None:
        self.classifier = classifier or ErrorClassifier()
        self._logger = logger or get_logger("errors")

    def log_error(self, error: object, context: str | None = None) -> None:
        """Classify ``error`` and log it as ``operation_failed``.

        Args:
            error: The raw failure.
            context: Free-form label of the operation that failed (e.g. "swap").
        """
        self._record(error, self.classifier.classify(error), context)

    def handle_error(self, error: object, context: str | None = None) -> ParsedError:
        """Log ``error`` and return its classification for display.

        Use this where the caller shows the failure to the user, e.g. as an
        alert; the failure is logged once either way.
        """
        parsed = self.classifier.classify(error)
        self._record(error, parsed, context)
        return parsed

    def _record(self, error: object, parsed: ParsedError, context: str | None) -> None:
        self._logger.error(
            "operation_failed",
            context=context,
            kind=parsed.kind.value,
            title=parsed.title,
            message=parsed.message,
            error_type=type(error).__name__,
            original_error=repr(error),
        )
