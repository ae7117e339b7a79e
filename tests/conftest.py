"""Pytest fixtures for txguard tests."""

import logging
from collections.abc import Generator

import pytest
import structlog

from txguard.core.errors import ErrorClassifier
from txguard.notifications import ManualScheduler, NotificationQueue


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset structlog and root handlers around each test for isolation."""
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level

    yield

    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def classifier() -> ErrorClassifier:
    """Create a default ErrorClassifier instance."""
    return ErrorClassifier()


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual clock for alert expiry."""
    return ManualScheduler()


@pytest.fixture
def queue(scheduler: ManualScheduler) -> NotificationQueue:
    """Default-capacity queue driven by the virtual clock."""
    return NotificationQueue(scheduler=scheduler)
