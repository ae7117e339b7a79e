"""Configuration models for txguard.

Pydantic models for loading and validating YAML configuration. All models
are re-exported from this ``__init__``.
"""

from txguard.core.config.app import LogConfig, TxGuardConfig
from txguard.core.config.notifications import AlertQueueConfig, LinksConfig

__all__ = [
    "AlertQueueConfig",
    "LinksConfig",
    "LogConfig",
    "TxGuardConfig",
]
