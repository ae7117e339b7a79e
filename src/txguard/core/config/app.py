"""Root configuration model for txguard."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from txguard.core.config.notifications import AlertQueueConfig, LinksConfig


class LogConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level to capture",
    )
    format: Literal["json", "console"] = Field(
        default="console",
        description="Output format: json for structured, console for human-readable",
    )
    file_path: Path | None = Field(
        default=None,
        description="Rotating log file; logs go to stderr when unset",
    )
    max_file_size_mb: int = Field(default=10, gt=0, le=1000)
    backup_count: int = Field(default=3, ge=0, le=100)


class TxGuardConfig(BaseModel):
    """Top-level txguard configuration, usually loaded from YAML."""

    alerts: AlertQueueConfig = Field(default_factory=AlertQueueConfig)
    links: LinksConfig = Field(default_factory=LinksConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @model_validator(mode="before")
    @classmethod
    def _empty_document(cls, data: object) -> object:
        # An empty YAML file loads as None
        return {} if data is None else data

    @classmethod
    def from_yaml(cls, path: Path) -> TxGuardConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)

    @classmethod
    def from_yaml_string(cls, yaml_str: str) -> TxGuardConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data)
