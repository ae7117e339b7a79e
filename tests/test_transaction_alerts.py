"""Tests for TransactionAlerts presets and the submit() flow."""

import pytest

from tests.helpers import RecordingSleep, scripted_operation
from txguard.core.config import LinksConfig
from txguard.core.errors import (
    ErrorClassifier,
    ErrorKind,
    TransportError,
    UserRejectedRequestError,
    WalletNotConnectedError,
)
from txguard.execution import RetryExecutor
from txguard.notifications import (
    AlertSeverity,
    ManualScheduler,
    NotificationQueue,
    TransactionAlerts,
)

TX_HASH = "0xabc123"


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def opened() -> list[str]:
    return []


@pytest.fixture
def alerts(queue: NotificationQueue, sleep: RecordingSleep, opened: list[str]) -> TransactionAlerts:
    links = LinksConfig(
        faucet_url="https://faucet.example/",
        explorer_tx_url="https://explorer.example/tx/{tx_hash}",
    )
    classifier = ErrorClassifier(funding_url=links.faucet_url, url_opener=opened.append)
    return TransactionAlerts(
        queue,
        classifier=classifier,
        executor=RetryExecutor(classifier, sleep=sleep),
        links=links,
    )


class TestPresets:
    """Preset alerts for transaction lifecycle events."""

    def test_pending_is_persistent_loading_with_link(
        self, alerts: TransactionAlerts, queue: NotificationQueue, scheduler: ManualScheduler
    ) -> None:
        alert_id = alerts.transaction_pending(TX_HASH)
        scheduler.advance(600)

        alert = queue.get(alert_id)
        assert alert is not None
        assert alert.severity is AlertSeverity.LOADING
        assert alert.persistent is True
        assert alert.link is not None
        assert alert.link.url == "https://explorer.example/tx/0xabc123"

    def test_success_expires(
        self, alerts: TransactionAlerts, queue: NotificationQueue, scheduler: ManualScheduler
    ) -> None:
        alert_id = alerts.transaction_success(TX_HASH)
        alert = queue.get(alert_id)
        assert alert is not None
        assert alert.severity is AlertSeverity.SUCCESS
        scheduler.advance(6.0)
        assert alert_id not in queue

    def test_transaction_error_default_message_and_retry(
        self, alerts: TransactionAlerts, queue: NotificationQueue
    ) -> None:
        calls: list[str] = []
        alert_id = alerts.transaction_error("", on_retry=lambda: calls.append("retry"))

        alert = queue.get(alert_id)
        assert alert is not None
        assert alert.severity is AlertSeverity.ERROR
        assert alert.persistent is True
        assert alert.message == "Unable to complete the swap. Please try again."
        assert alert.action is not None
        alert.action()
        assert calls == ["retry"]

    def test_actions_omitted_without_callbacks(
        self, alerts: TransactionAlerts, queue: NotificationQueue
    ) -> None:
        for alert_id in (
            alerts.wallet_not_connected(),
            alerts.insufficient_liquidity(),
            alerts.user_rejection(),
        ):
            alert = queue.get(alert_id)
            assert alert is not None
            assert alert.action is None

    def test_warning_presets(self, alerts: TransactionAlerts, queue: NotificationQueue) -> None:
        wallet = queue.get(alerts.wallet_not_connected(on_connect=lambda: None))
        balance = queue.get(alerts.insufficient_balance())

        assert wallet is not None and balance is not None
        assert wallet.severity is AlertSeverity.WARNING
        assert wallet.action is not None
        assert wallet.action.label == "Connect Wallet"
        assert balance.link is not None
        assert balance.link.url == "https://faucet.example/"

    def test_user_rejection_is_info(self, alerts: TransactionAlerts, queue: NotificationQueue) -> None:
        alert = queue.get(alerts.user_rejection())
        assert alert is not None
        assert alert.severity is AlertSeverity.INFO


class TestParsedErrorProjection:
    """ParsedError -> persistent error alert."""

    def test_projection_copies_text_and_action(
        self, alerts: TransactionAlerts, queue: NotificationQueue, opened: list[str]
    ) -> None:
        parsed = alerts.classifier.classify(TransportError(short_message="insufficient funds"))

        alert = queue.get(alerts.parsed_error(parsed))

        assert alert is not None
        assert alert.severity is AlertSeverity.ERROR
        assert alert.persistent is True
        assert alert.title == parsed.title
        assert alert.message == parsed.message
        assert alert.action is not None
        assert alert.action.label == "Get Testnet ETH"
        alert.action()
        assert opened == ["https://faucet.example/"]


class TestSubmit:
    """submit(): retry, then exactly one alert on terminal failure."""

    @pytest.mark.asyncio
    async def test_success_queues_nothing(
        self, alerts: TransactionAlerts, queue: NotificationQueue
    ) -> None:
        operation, _ = scripted_operation([TX_HASH])
        assert await alerts.submit(operation, context="swap") == TX_HASH
        assert len(queue) == 0

    @pytest.mark.asyncio
    async def test_terminal_failure_queues_one_alert(
        self, alerts: TransactionAlerts, queue: NotificationQueue, sleep: RecordingSleep
    ) -> None:
        errors = [Exception("Failed to fetch") for _ in range(4)]
        operation, calls = scripted_operation(errors)

        with pytest.raises(Exception) as exc_info:
            await alerts.submit(operation, context="swap")

        assert exc_info.value is errors[-1]
        assert calls[0] == 4
        assert len(sleep.delays) == 3
        assert len(queue) == 1
        alert = queue.alerts[0]
        assert alert.severity is AlertSeverity.ERROR
        assert alert.title == "Network Error"

    @pytest.mark.asyncio
    async def test_rejection_alert_without_retry(
        self, alerts: TransactionAlerts, queue: NotificationQueue, sleep: RecordingSleep
    ) -> None:
        operation, _ = scripted_operation([UserRejectedRequestError()])

        with pytest.raises(UserRejectedRequestError):
            await alerts.submit(operation)

        assert sleep.delays == []
        assert [alert.title for alert in queue.alerts] == ["Transaction Cancelled"]

    @pytest.mark.asyncio
    async def test_wallet_not_connected_alert(
        self, alerts: TransactionAlerts, queue: NotificationQueue, sleep: RecordingSleep
    ) -> None:
        operation, calls = scripted_operation([WalletNotConnectedError()])

        with pytest.raises(WalletNotConnectedError):
            await alerts.submit(operation, context="swap")

        assert calls[0] == 1
        assert sleep.delays == []
        assert [alert.title for alert in queue.alerts] == ["Wallet Not Connected"]

    def test_default_collaborators(self, queue: NotificationQueue) -> None:
        alerts = TransactionAlerts(queue)
        assert alerts.executor.classifier is alerts.classifier
        parsed = alerts.classifier.classify(TransportError(short_message="exceeds balance"))
        assert parsed.kind == ErrorKind.INSUFFICIENT_FUNDS
