"""Caption models for the i18n system.

Defines the data structures shared by the cache, loader, store and resolver.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from infrastructure.i18n.errors import MalformedDocumentError

# section -> leaf key -> template; leaves may nest further
ContentDocument = Dict[str, Dict[str, Any]]

_MISSING = object()


@dataclass(frozen=True)
class CacheDescriptor:
    """Identifies the single slot a cache call addresses.

    Passed explicitly to every cache call so the cache never reads the locale
    marker from anywhere but its own storage.

    Attributes:
        locale: Locale whose document is read or written.
    """

    locale: str


@dataclass
class LocaleState:
    """State owned by one LocaleStore.

    Attributes:
        active_locale: Locale whose sections are loaded.
        loaded_content: Partial document holding only the loaded sections.
        busy: Advisory flag set while a load is in flight.
        init_error: Reason the last initialization failed, if it did.
    """

    active_locale: str
    loaded_content: ContentDocument = field(default_factory=dict)
    busy: bool = False
    init_error: Optional[str] = None

    def snapshot(self) -> "LocaleState":
        """Return a deep copy safe to hand to listeners."""
        return copy.deepcopy(self)


@dataclass
class ResolutionStats:
    """Where resolved captions came from, for one resolver lifetime."""

    store_hits: int = 0
    fallback_hits: int = 0
    missing_keys: int = 0

    @property
    def total(self) -> int:
        return self.store_hits + self.fallback_hits + self.missing_keys

    def percentages(self) -> Dict[str, float]:
        """Share of each source in percent, rounded to one decimal."""
        total = self.total
        if not total:
            return {"store_hits": 0.0, "fallback_hits": 0.0, "missing_keys": 0.0}
        return {
            "store_hits": round(self.store_hits * 100 / total, 1),
            "fallback_hits": round(self.fallback_hits * 100 / total, 1),
            "missing_keys": round(self.missing_keys * 100 / total, 1),
        }


@dataclass
class LoaderStats:
    """Counters separating "nothing to load" from "load attempt failed"."""

    cache_hits: int = 0
    network_fetches: int = 0
    failures: int = 0
    last_error: Optional[str] = None


def get_nested_value(document: Any, path: str) -> Any:
    """Walk ``document`` along a dotted path.

    Args:
        document: Nested mapping to walk.
        path: Dot-separated key (e.g., "dashboard.welcome").

    Returns:
        The value at the path, or None if any segment is absent.
    """
    current = document
    for segment in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(segment, _MISSING)
        if current is _MISSING:
            return None
    return current


def filter_sections(document: ContentDocument, sections: Iterable[str]) -> ContentDocument:
    """Keep only the named sections that exist in ``document``."""
    return {name: document[name] for name in sections if name in document}


def validate_document(data: Any) -> ContentDocument:
    """Check that parsed JSON has the section -> mapping shape.

    Args:
        data: Parsed response body.

    Returns:
        The same object typed as a ContentDocument.

    Raises:
        MalformedDocumentError: If the top level is not a mapping of mappings.
    """
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"Content document must be an object, got {type(data).__name__}"
        )
    for name, section in data.items():
        if not isinstance(section, dict):
            raise MalformedDocumentError(
                f"Section {name!r} must be an object, got {type(section).__name__}"
            )
    return data
