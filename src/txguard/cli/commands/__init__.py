"""CLI command implementations."""

from .classify import classify_command, retry_policy_command
from .config_cmd import config_app, load_config

__all__ = ["classify_command", "config_app", "load_config", "retry_policy_command"]
