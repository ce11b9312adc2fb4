"""Durable locale preference.

Stores the last activated locale code so the next initialization can
restore it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from infrastructure.i18n.storage import CaptionDatabase
from infrastructure.logging import get_module_logger

logger = get_module_logger()

LOCALE_PREFERENCE = "locale"


class PreferenceStore(ABC):
    """Abstract single-entry preference store."""

    @abstractmethod
    async def get(self) -> Optional[str]:
        """Return the stored locale code, or None if never set."""

    @abstractmethod
    async def set(self, locale: str) -> None:
        """Persist ``locale`` as the preferred locale."""

    @abstractmethod
    async def clear(self) -> None:
        """Forget the stored preference."""


class MemoryPreferenceStore(PreferenceStore):
    def __init__(self, locale: Optional[str] = None):
        self._locale = locale

    async def get(self) -> Optional[str]:
        return self._locale

    async def set(self, locale: str) -> None:
        self._locale = locale

    async def clear(self) -> None:
        self._locale = None


class SQLitePreferenceStore(PreferenceStore):
    """Preference kept in the ``preferences`` table of a CaptionDatabase."""

    def __init__(self, database: CaptionDatabase):
        self.database = database

    async def get(self) -> Optional[str]:
        async with self.database.connect() as conn:
            cursor = await conn.execute(
                "SELECT value FROM preferences WHERE name = ?", (LOCALE_PREFERENCE,)
            )
            row = await cursor.fetchone()
        return row["value"] if row else None

    async def set(self, locale: str) -> None:
        async with self.database.connect() as conn:
            await conn.execute(
                "INSERT OR REPLACE INTO preferences (name, value) VALUES (?, ?)",
                (LOCALE_PREFERENCE, locale),
            )
            await conn.commit()
        logger.debug("stored_locale_preference", locale=locale)

    async def clear(self) -> None:
        async with self.database.connect() as conn:
            await conn.execute(
                "DELETE FROM preferences WHERE name = ?", (LOCALE_PREFERENCE,)
            )
            await conn.commit()
