"""Global constants for txguard.

Centralizes the fixed texts, phrase tables and timing defaults used by the
classifier, the retry executor and the notification queue.
"""

# =============================================================================
# Notification Queue Defaults
# =============================================================================

DEFAULT_MAX_ALERTS = 5
"""Maximum number of alerts kept in the queue before the oldest is evicted."""

DEFAULT_ALERT_DURATION_MS = 6000
"""Auto-expiry for every severity except loading (6 seconds)."""

MS_PER_SECOND = 1000
"""Milliseconds in one second, for scheduler conversions."""

# =============================================================================
# Error Text Matching
# =============================================================================

USER_REJECTION_PHRASES: tuple[str, ...] = (
    "user rejected",
    "user denied",
    "user cancelled",
    "user canceled",
    "transaction signature",
    "metamask tx signature",
)
"""Lower-case phrases that mark a failure as a deliberate wallet rejection."""

INSUFFICIENT_FUNDS_PHRASES: tuple[str, ...] = ("insufficient funds", "exceeds balance")

TRANSPORT_NETWORK_PHRASES: tuple[str, ...] = ("network", "connection")
"""Network markers checked on transport-layer short messages."""

GENERIC_NETWORK_PHRASES: tuple[str, ...] = ("network", "fetch")
"""Network markers checked on generic exception messages."""

# =============================================================================
# External Resources
# =============================================================================

DEFAULT_FAUCET_URL = "https://sepoliafaucet.com/"
"""Where users are sent to fund an empty wallet."""

DEFAULT_EXPLORER_TX_URL = "https://sepolia.etherscan.io/tx/{tx_hash}"
"""Block explorer URL template for a transaction hash."""
