"""Notification queue and resource link configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from txguard.core.constants import (
    DEFAULT_ALERT_DURATION_MS,
    DEFAULT_EXPLORER_TX_URL,
    DEFAULT_FAUCET_URL,
    DEFAULT_MAX_ALERTS,
)


class AlertQueueConfig(BaseModel):
    """Configuration for the bounded notification queue."""

    max_alerts: int = Field(
        default=DEFAULT_MAX_ALERTS,
        ge=1,
        description="Alerts kept before the oldest is evicted",
    )
    default_duration_ms: int = Field(
        default=DEFAULT_ALERT_DURATION_MS,
        ge=0,
        description="Auto-expiry applied to non-loading alerts without an explicit duration "
        "(0 disables auto-expiry)",
    )


class LinksConfig(BaseModel):
    """External resources referenced by alerts and remediation actions."""

    faucet_url: str = Field(
        default=DEFAULT_FAUCET_URL,
        description="Where users can obtain funds for an empty wallet",
    )
    explorer_tx_url: str = Field(
        default=DEFAULT_EXPLORER_TX_URL,
        description="Block explorer URL template; must contain '{tx_hash}'",
    )

    @field_validator("explorer_tx_url")
    @classmethod
    def _check_placeholder(cls, value: str) -> str:
        if "{tx_hash}" not in value:
            raise ValueError("explorer_tx_url must contain the '{tx_hash}' placeholder")
        return value

    def transaction_url(self, tx_hash: str) -> str:
        return self.explorer_tx_url.format(tx_hash=tx_hash)
