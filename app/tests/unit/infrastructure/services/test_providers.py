"""
Unit tests for application-scoped providers.

Tests cover:
- get_settings() caching behavior
- Cache reset between tests
"""

import pytest

from infrastructure.configuration import CaptionSettings, Settings
from infrastructure.services import get_settings


@pytest.mark.unit
class TestGetSettings:
    """Tests for get_settings() provider function."""

    def test_get_settings_returns_settings_instance(self):
        """get_settings() returns a Settings instance."""
        result = get_settings()
        assert isinstance(result, Settings)
        assert isinstance(result.captions, CaptionSettings)

    def test_get_settings_returns_cached_instance(self):
        """get_settings() returns the same instance (caching)."""
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        """get_settings() cache can be cleared for testing."""
        instance1 = get_settings()
        get_settings.cache_clear()
        instance2 = get_settings()
        assert instance1 is not instance2
