"""i18n system - incremental localized caption delivery.

Resolves dotted keys to text for the active locale, loading only the content
sections that are needed and keeping the fetched document of one
non-default locale in a persistent local cache.

Main components:
- models: LocaleState, CacheDescriptor, ResolutionStats, LoaderStats
- cache: ContentCache with SQLite and in-memory implementations
- preferences: PreferenceStore for the last activated locale
- loader: ContentLoader (cache first, then the content origin)
- store: LocaleStore owning the active locale and loaded sections
- resolver: CaptionResolver with fallback chain and interpolation
- factory: create_locale_store, create_caption_resolver
"""

from infrastructure.i18n.bundle import load_default_document
from infrastructure.i18n.cache import (
    ContentCache,
    MemoryContentCache,
    SQLiteContentCache,
)
from infrastructure.i18n.detection import detect_system_locale
from infrastructure.i18n.errors import (
    CacheStorageError,
    CaptionError,
    ContentFetchError,
    DetectionError,
    MalformedDocumentError,
    UnsupportedLocaleError,
)
from infrastructure.i18n.factory import create_caption_resolver, create_locale_store
from infrastructure.i18n.loader import ContentLoader
from infrastructure.i18n.models import (
    CacheDescriptor,
    ContentDocument,
    LoaderStats,
    LocaleState,
    ResolutionStats,
)
from infrastructure.i18n.preferences import (
    MemoryPreferenceStore,
    PreferenceStore,
    SQLitePreferenceStore,
)
from infrastructure.i18n.resolver import CaptionResolver
from infrastructure.i18n.storage import CaptionDatabase
from infrastructure.i18n.store import LocaleStore

__all__ = [
    "CacheDescriptor",
    "ContentDocument",
    "LocaleState",
    "LoaderStats",
    "ResolutionStats",
    "ContentCache",
    "MemoryContentCache",
    "SQLiteContentCache",
    "CaptionDatabase",
    "PreferenceStore",
    "MemoryPreferenceStore",
    "SQLitePreferenceStore",
    "ContentLoader",
    "LocaleStore",
    "CaptionResolver",
    "load_default_document",
    "detect_system_locale",
    "create_locale_store",
    "create_caption_resolver",
    "CaptionError",
    "ContentFetchError",
    "MalformedDocumentError",
    "CacheStorageError",
    "DetectionError",
    "UnsupportedLocaleError",
]
