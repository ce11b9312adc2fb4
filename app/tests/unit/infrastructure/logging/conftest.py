"""Fixtures for infrastructure.logging tests."""

import pytest

from infrastructure.configuration import CaptionSettings, Settings


@pytest.fixture
def dev_settings():
    """Development Settings: non-empty PREFIX, DEBUG level, default captions."""
    return Settings(PREFIX="dev-", LOG_LEVEL="DEBUG", captions=CaptionSettings())
