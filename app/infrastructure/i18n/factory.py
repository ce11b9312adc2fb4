"""Factory functions for creating i18n components.

Wires the caption stack from settings: SQLite cache and preference store,
ContentLoader, LocaleStore and CaptionResolver.
"""

from pathlib import Path
from typing import Optional

import requests

from infrastructure.configuration import Settings
from infrastructure.i18n.cache import ContentCache, SQLiteContentCache
from infrastructure.i18n.detection import LocaleProbe, detect_system_locale
from infrastructure.i18n.loader import ContentLoader
from infrastructure.i18n.models import ContentDocument
from infrastructure.i18n.preferences import PreferenceStore, SQLitePreferenceStore
from infrastructure.i18n.resolver import CaptionResolver
from infrastructure.i18n.storage import CaptionDatabase
from infrastructure.i18n.store import LocaleStore
from infrastructure.logging import get_module_logger
from infrastructure.services.providers import get_settings

logger = get_module_logger()


def create_locale_store(
    settings: Optional[Settings] = None,
    cache: Optional[ContentCache] = None,
    preferences: Optional[PreferenceStore] = None,
    session: Optional[requests.Session] = None,
    device_locale_probe: Optional[LocaleProbe] = None,
) -> LocaleStore:
    """Create a LocaleStore configured from settings.

    Cache and preferences default to one SQLite file at
    ``settings.captions.CAPTION_CACHE_PATH``.

    Args:
        settings: Settings to use (default: application singleton).
        cache: Override for the content cache.
        preferences: Override for the preference store.
        session: Optional requests session for the loader.
        device_locale_probe: Probe used by initialize(). Defaults to the
            host locale probe when DEVICE_LOCALE_DETECTION is on.

    Returns:
        LocaleStore: Store holding the default locale and no content.

    Usage:
        store = create_locale_store()
        await store.initialize()
        resolver = create_caption_resolver(store)
        resolver.resolve("common.save")
    """
    settings = settings or get_settings()
    captions = settings.captions

    if cache is None or preferences is None:
        database = CaptionDatabase(Path(captions.CAPTION_CACHE_PATH))
        cache = cache or SQLiteContentCache(database)
        preferences = preferences or SQLitePreferenceStore(database)

    if device_locale_probe is None and captions.DEVICE_LOCALE_DETECTION:
        device_locale_probe = detect_system_locale

    loader = ContentLoader(
        base_url=captions.CONTENT_BASE_URL,
        cache=cache,
        default_locale=captions.default_locale,
        timeout=captions.request_timeout,
        session=session,
    )

    store = LocaleStore(
        loader=loader,
        cache=cache,
        preferences=preferences,
        supported_locales=captions.supported_locales,
        baseline_sections=captions.baseline_sections,
        device_locale_probe=device_locale_probe,
    )

    logger.info(
        "locale_store_created",
        supported_locales=list(captions.supported_locales),
        baseline_sections=list(captions.baseline_sections),
        base_url=captions.CONTENT_BASE_URL,
        cache_backend=cache.get_stats().get("backend"),
    )
    return store


def create_caption_resolver(
    store: LocaleStore,
    default_document: Optional[ContentDocument] = None,
) -> CaptionResolver:
    """Create a CaptionResolver with fresh statistics.

    Args:
        store: LocaleStore to resolve against.
        default_document: Default-locale document (default: bundled file).

    Returns:
        CaptionResolver
    """
    return CaptionResolver(store=store, default_document=default_document)
