"""Remote content loading with a local single-slot cache.

ContentLoader.load() returns the full content document of a locale, reading
the cache before the network and writing fetched documents back. It never
raises: every failure is logged, counted and turned into an empty document
so resolution degrades to the bundled default content.
"""

import asyncio
from typing import Optional

import requests

from infrastructure.i18n.cache import ContentCache
from infrastructure.i18n.errors import (
    ContentFetchError,
    MalformedDocumentError,
)
from infrastructure.i18n.models import (
    CacheDescriptor,
    ContentDocument,
    LoaderStats,
    validate_document,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class ContentLoader:
    """Loads content documents from cache or the content origin.

    Attributes:
        base_url: Base URL of the content origin.
        cache: Single-slot cache consulted before the network.
        default_locale: Locale whose content is bundled and never fetched.
        timeout: Request timeout in seconds, or None for no timeout.
        stats: Counters of cache hits, fetches and absorbed failures.
    """

    def __init__(
        self,
        base_url: str,
        cache: ContentCache,
        default_locale: str = "en",
        timeout: Optional[float] = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the content loader.

        Args:
            base_url: Base URL of the content origin (trailing slash ignored).
            cache: Cache to read from and write back to.
            default_locale: Locale that short-circuits to an empty document.
            timeout: Request timeout in seconds; None disables it.
            session: Optional requests session (injected in tests).
        """
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.default_locale = default_locale
        self.timeout = timeout
        self.stats = LoaderStats()
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def url_for(self, locale: str) -> str:
        """Endpoint of the content document for ``locale``."""
        return f"{self.base_url}/{locale}/en.json"

    async def load(self, locale: str) -> ContentDocument:
        """Return the full content document for ``locale``.

        Args:
            locale: Locale code to load.

        Returns:
            The document, or ``{}`` for the default locale and on any failure.
        """
        if locale == self.default_locale:
            return {}

        descriptor = CacheDescriptor(locale=locale)

        try:
            cached = await self.cache.get(descriptor)
        except Exception as e:  # pylint: disable=broad-except
            self._record_failure("content_cache_read_failed", locale, e)
            cached = None

        if cached is not None:
            self.stats.cache_hits += 1
            logger.info("loaded_from_cache", locale=locale, section_count=len(cached))
            return cached

        try:
            document = await asyncio.to_thread(self._fetch, locale)
        except (ContentFetchError, MalformedDocumentError) as e:
            self._record_failure("content_fetch_failed", locale, e)
            return {}
        except Exception as e:  # pylint: disable=broad-except
            self._record_failure("content_fetch_unexpected_error", locale, e)
            return {}

        self.stats.network_fetches += 1

        try:
            await self.cache.set(descriptor, document)
        except Exception as e:  # pylint: disable=broad-except
            self._record_failure("content_cache_write_failed", locale, e)

        return document

    def _fetch(self, locale: str) -> ContentDocument:
        url = self.url_for(locale)
        logger.info("fetching_content", locale=locale, url=url)

        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ContentFetchError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ContentFetchError(
                f"Failed to fetch content for {locale}: "
                f"{response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedDocumentError(
                f"Response for {locale} is not valid JSON: {e}"
            ) from e

        document = validate_document(data)
        logger.info("content_fetched", locale=locale, section_count=len(document))
        return document

    def _record_failure(self, event: str, locale: str, error: Exception) -> None:
        self.stats.failures += 1
        self.stats.last_error = str(error)
        logger.error(
            event,
            locale=locale,
            error=str(error),
            error_type=type(error).__name__,
            base_url=self.base_url,
        )
