"""Root fixtures shared by the whole test suite."""

import pytest

from infrastructure.i18n.bundle import load_default_document
from infrastructure.logging import clear_activation_context
from infrastructure.services.providers import get_settings


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Reset process-wide caches so tests never see each other's state."""
    get_settings.cache_clear()
    load_default_document.cache_clear()
    yield
    get_settings.cache_clear()
    load_default_document.cache_clear()
    clear_activation_context()
