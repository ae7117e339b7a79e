"""Transaction-oriented alert presets.

Ties the pieces together for a swap-style client:

    alerts = TransactionAlerts(queue)
    receipt = await alerts.submit(lambda: wallet.send(tx), context="swap")

``submit`` runs the operation through a RetryExecutor and, when the failure
is terminal, pushes exactly one persistent error alert built from the
failure's classification before re-raising the original exception.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from txguard.core.config import LinksConfig
from txguard.core.errors import ErrorClassifier, ParsedError
from txguard.execution.retry import RetryExecutor

from .models import AlertAction, AlertLink
from .queue import NotificationQueue

T = TypeVar("T")

Callback = Callable[[], None]


def _action(label: str, callback: Callback | None) -> AlertAction | None:
    return AlertAction(label, callback) if callback is not None else None


class TransactionAlerts:
    """Preset alerts for the lifecycle of a wallet transaction."""

    def __init__(
        self,
        queue: NotificationQueue,
        classifier: ErrorClassifier | None = None,
        executor: RetryExecutor | None = None,
        links: LinksConfig | None = None,
    ) -> None:
        self.queue = queue
        self.links = links or LinksConfig()
        self.classifier = classifier or ErrorClassifier(funding_url=self.links.faucet_url)
        self.executor = executor or RetryExecutor(self.classifier)

    def transaction_pending(self, tx_hash: str) -> str:
        return self.queue.loading(
            "Transaction Pending",
            "Your swap is being processed on the blockchain...",
            link=AlertLink("View on Etherscan", self.links.transaction_url(tx_hash)),
        )

    def transaction_success(self, tx_hash: str) -> str:
        return self.queue.success(
            "Swap Completed!",
            "Your tokens have been successfully swapped!",
            link=AlertLink("View Transaction", self.links.transaction_url(tx_hash)),
        )

    def transaction_error(self, message: str = "", on_retry: Callback | None = None) -> str:
        return self.queue.error(
            "Transaction Failed",
            message or "Unable to complete the swap. Please try again.",
            action=_action("Try Again", on_retry),
        )

    def wallet_not_connected(self, on_connect: Callback | None = None) -> str:
        return self.queue.warning(
            "Wallet Not Connected",
            "Please connect your wallet to continue with the swap.",
            action=_action("Connect Wallet", on_connect),
        )

    def insufficient_balance(self) -> str:
        return self.queue.warning(
            "Insufficient Balance",
            "You don't have enough ETH for this swap.",
            link=AlertLink("Get Testnet ETH", self.links.faucet_url),
        )

    def insufficient_liquidity(self, on_try_smaller: Callback | None = None) -> str:
        return self.queue.warning(
            "Insufficient Liquidity",
            "The pool doesn't have enough tokens for this swap amount.",
            action=_action("Try Smaller Amount", on_try_smaller),
        )

    def user_rejection(self, on_retry: Callback | None = None) -> str:
        return self.queue.info(
            "Transaction Cancelled",
            "You cancelled the transaction in your wallet. Try again when you're ready!",
            action=_action("Try Again", on_retry),
        )

    def parsed_error(self, parsed: ParsedError) -> str:
        """Queue the persistent error alert for a classified failure."""
        action = None
        if parsed.action is not None:
            action = AlertAction(parsed.action.label, parsed.action.invoke)
        return self.queue.error(parsed.title, parsed.message, action=action)

    async def submit(
        self,
        operation: Callable[[], Awaitable[T]],
        context: str | None = None,
    ) -> T:
        """Run ``operation`` with retries; alert once on terminal failure.

        Raises:
            Exception: The original failure, after the alert is queued.
        """
        try:
            return await self.executor.with_retry(operation, context)
        except Exception as exc:
            self.parsed_error(self.classifier.classify(exc))
            raise
