"""Shared utilities for txguard.

Contains cross-cutting utilities used by multiple modules.
"""

from txguard.utils.time import utc_now

__all__ = ["utc_now"]
