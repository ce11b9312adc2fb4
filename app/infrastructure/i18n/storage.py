"""SQLite database shared by the caption cache and the preference store.

One file, two tables:

- ``captions``: at most one row under the fixed slot ``"current"`` holding the
  cached locale marker and its document (JSON).
- ``preferences``: key/value strings; ``"locale"`` holds the last activated
  locale.

The schema version is tracked with ``PRAGMA user_version``.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from infrastructure.i18n.errors import CacheStorageError
from infrastructure.logging import get_module_logger

logger = get_module_logger()

SCHEMA_VERSION = 1
CURRENT_SLOT = "current"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS captions (
        slot TEXT PRIMARY KEY,
        locale TEXT NOT NULL,
        document TEXT NOT NULL,
        stored_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS preferences (
        name TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,
)


class CaptionDatabase:
    """Lazily initialized SQLite file with one connection per operation.

    Attributes:
        db_path: Path to the SQLite file. ``":memory:"`` is not supported
            since every operation opens its own connection.
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def _init_schema(self) -> None:
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:
                return
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                async with aiosqlite.connect(self.db_path) as conn:
                    cursor = await conn.execute("PRAGMA user_version")
                    row = await cursor.fetchone()
                    version = row[0] if row else 0
                    if version > SCHEMA_VERSION:
                        raise CacheStorageError(
                            f"Caption database {self.db_path} has schema version "
                            f"{version}, expected {SCHEMA_VERSION}"
                        )
                    for statement in _SCHEMA:
                        await conn.execute(statement)
                    await conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
                    await conn.commit()
            except (aiosqlite.Error, OSError) as e:
                raise CacheStorageError(
                    f"Failed to initialize caption database {self.db_path}: {e}"
                ) from e

            self._initialized = True
            logger.info(
                "caption_database_initialized",
                db_path=str(self.db_path),
                schema_version=SCHEMA_VERSION,
            )

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection to the initialized database.

        Raises:
            CacheStorageError: On any SQLite or filesystem error.
        """
        await self._init_schema()
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                conn.row_factory = aiosqlite.Row
                yield conn
        except (aiosqlite.Error, OSError) as e:
            raise CacheStorageError(
                f"Caption database operation failed on {self.db_path}: {e}"
            ) from e
