"""Single-slot content cache.

Holds the content document of at most one non-default locale. Every call
carries an explicit CacheDescriptor; the locale marker is stored next to the
document so the two can never be read from different places.
"""

import asyncio
import copy
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from infrastructure.i18n.errors import CacheStorageError
from infrastructure.i18n.models import CacheDescriptor, ContentDocument
from infrastructure.i18n.storage import CURRENT_SLOT, CaptionDatabase
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class ContentCache(ABC):
    """Abstract base class for single-slot content caches.

    Implementations must guarantee that after ``set`` returns, the cache holds
    exactly the document for ``descriptor.locale`` and nothing else.
    """

    @abstractmethod
    async def get(self, descriptor: CacheDescriptor) -> Optional[ContentDocument]:
        """Return the cached document for ``descriptor.locale``.

        Args:
            descriptor: Slot being read.

        Returns:
            The document, or None when nothing is cached or the stored marker
            names a different locale.

        Raises:
            CacheStorageError: If the store cannot be read.
        """

    @abstractmethod
    async def set(self, descriptor: CacheDescriptor, document: ContentDocument) -> None:
        """Store ``document`` as the one cached locale.

        A different stored locale is cleared in the same step.

        Raises:
            CacheStorageError: If the store cannot be written.
        """

    @abstractmethod
    async def clear(self) -> None:
        """Remove any stored document unconditionally."""

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""

    async def close(self) -> None:
        """Release storage resources."""


class MemoryContentCache(ContentCache):
    """Process-local cache, for tests and ephemeral runs."""

    def __init__(self) -> None:
        self._entry: Optional[Tuple[str, ContentDocument]] = None
        self._lock = asyncio.Lock()

    async def get(self, descriptor: CacheDescriptor) -> Optional[ContentDocument]:
        if self._entry is None:
            return None
        locale, document = self._entry
        if locale != descriptor.locale:
            logger.debug(
                "cached_locale_mismatch",
                cached_locale=locale,
                requested_locale=descriptor.locale,
            )
            return None
        return copy.deepcopy(document)

    async def set(self, descriptor: CacheDescriptor, document: ContentDocument) -> None:
        async with self._lock:
            if self._entry is not None and self._entry[0] != descriptor.locale:
                logger.info(
                    "cleared_previous_locale",
                    previous_locale=self._entry[0],
                    locale=descriptor.locale,
                )
            self._entry = (descriptor.locale, copy.deepcopy(document))

    async def clear(self) -> None:
        async with self._lock:
            self._entry = None
        logger.info("cleared_content_cache", backend="memory")

    def get_stats(self) -> Dict[str, Any]:
        return {
            "backend": "memory",
            "locale": self._entry[0] if self._entry else None,
            "section_count": len(self._entry[1]) if self._entry else 0,
        }


class SQLiteContentCache(ContentCache):
    """SQLite-backed cache that survives process restarts.

    Uses the ``captions`` table of a CaptionDatabase:
    - PK: slot (always ``"current"``)
    - Attributes: locale (the marker), document (JSON), stored_at

    Clear-then-write on a locale switch runs in one transaction under an
    asyncio lock, so two switches cannot interleave.
    """

    def __init__(self, database: CaptionDatabase):
        self.database = database
        self._lock = asyncio.Lock()
        self._stats: Dict[str, Any] = {"locale": None, "section_count": 0}
        logger.info("initialized_sqlite_content_cache", db_path=str(database.db_path))

    async def get(self, descriptor: CacheDescriptor) -> Optional[ContentDocument]:
        async with self.database.connect() as conn:
            cursor = await conn.execute(
                "SELECT locale, document FROM captions WHERE slot = ?",
                (CURRENT_SLOT,),
            )
            row = await cursor.fetchone()

        if row is None:
            logger.debug("content_cache_miss", locale=descriptor.locale)
            return None

        if row["locale"] != descriptor.locale:
            logger.debug(
                "cached_locale_mismatch",
                cached_locale=row["locale"],
                requested_locale=descriptor.locale,
            )
            return None

        try:
            document = json.loads(row["document"])
        except json.JSONDecodeError as e:
            raise CacheStorageError(
                f"Cached document for {descriptor.locale} is corrupt: {e}"
            ) from e

        logger.debug("content_cache_hit", locale=descriptor.locale)
        return document

    async def set(self, descriptor: CacheDescriptor, document: ContentDocument) -> None:
        try:
            payload = json.dumps(document, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise CacheStorageError(
                f"Document for {descriptor.locale} is not serializable: {e}"
            ) from e

        async with self._lock:
            async with self.database.connect() as conn:
                await conn.execute("BEGIN IMMEDIATE")
                try:
                    cursor = await conn.execute(
                        "SELECT locale FROM captions WHERE slot = ?", (CURRENT_SLOT,)
                    )
                    row = await cursor.fetchone()
                    if row is not None and row["locale"] != descriptor.locale:
                        await conn.execute("DELETE FROM captions")
                        logger.info(
                            "cleared_previous_locale",
                            previous_locale=row["locale"],
                            locale=descriptor.locale,
                        )
                    await conn.execute(
                        "INSERT OR REPLACE INTO captions (slot, locale, document) "
                        "VALUES (?, ?, ?)",
                        (CURRENT_SLOT, descriptor.locale, payload),
                    )
                    await conn.commit()
                except BaseException:
                    await conn.rollback()
                    raise

        self._stats = {"locale": descriptor.locale, "section_count": len(document)}
        logger.info(
            "stored_content_document",
            locale=descriptor.locale,
            section_count=len(document),
        )

    async def clear(self) -> None:
        async with self._lock:
            async with self.database.connect() as conn:
                await conn.execute("DELETE FROM captions")
                await conn.commit()
        self._stats = {"locale": None, "section_count": 0}
        logger.info("cleared_content_cache", backend="sqlite")

    def get_stats(self) -> Dict[str, Any]:
        return {"backend": "sqlite", "db_path": str(self.database.db_path), **self._stats}
