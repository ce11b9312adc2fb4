"""Feature-level fixtures for caption delivery tests.

Provides in-memory storage, a fake content origin and wired stores.
"""

import pytest

from infrastructure.i18n import (
    CaptionDatabase,
    CaptionResolver,
    MemoryContentCache,
    MemoryPreferenceStore,
    SQLiteContentCache,
    SQLitePreferenceStore,
)
from tests.factories.i18n import DEFAULT_DOCUMENT, make_session, make_store


@pytest.fixture
def session():
    """Fake content origin serving "es" and "fr" documents."""
    return make_session()


@pytest.fixture
def memory_cache():
    return MemoryContentCache()


@pytest.fixture
def memory_preferences():
    return MemoryPreferenceStore()


@pytest.fixture
def store(session, memory_cache, memory_preferences):
    """LocaleStore with in-memory storage, default locale active."""
    return make_store(
        session=session, cache=memory_cache, preferences=memory_preferences
    )


@pytest.fixture
def default_document():
    return DEFAULT_DOCUMENT


@pytest.fixture
def resolver(store, default_document):
    return CaptionResolver(store, default_document=default_document)


@pytest.fixture
def caption_database(tmp_path):
    """SQLite caption database in a temporary directory."""
    return CaptionDatabase(tmp_path / "cache" / "captions.db")


@pytest.fixture
def sqlite_cache(caption_database):
    return SQLiteContentCache(caption_database)


@pytest.fixture
def sqlite_preferences(caption_database):
    return SQLitePreferenceStore(caption_database)
