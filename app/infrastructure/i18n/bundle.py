"""Bundled default-locale content.

The default locale is never fetched: its document ships with the
application in ``app/locales/<default>.json`` and is read once per process.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from infrastructure.i18n.errors import MalformedDocumentError
from infrastructure.i18n.models import ContentDocument, validate_document
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# This file is at .../app/infrastructure/i18n/bundle.py
LOCALES_DIR = Path(__file__).resolve().parents[2] / "locales"


@lru_cache(maxsize=8)
def load_default_document(path: Optional[Path] = None) -> ContentDocument:
    """Load the bundled default-locale document.

    The result is cached per path; callers must treat it as read-only.

    Args:
        path: JSON file to read (default: ``app/locales/en.json``).

    Returns:
        The parsed ContentDocument.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedDocumentError: If the file is not a valid content document.
    """
    path = Path(path) if path is not None else LOCALES_DIR / "en.json"

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedDocumentError(f"Failed to parse {path}: {e}") from e

    document = validate_document(data)
    logger.info(
        "loaded_default_document",
        path=str(path),
        section_count=len(document),
    )
    return document
