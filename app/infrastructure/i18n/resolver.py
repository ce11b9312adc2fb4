"""Caption resolution with a fallback chain.

CaptionResolver turns a dotted key into display text:

1. the loaded content of the active locale (store hit),
2. the bundled default-locale document (fallback hit),
3. the caller's fallback text, else the key itself (missing key).

``{name}`` placeholders are then replaced from ``params``. Resolution never
raises; missing content shows up as visible text and in the statistics.
"""

import copy
import dataclasses
from typing import Any, Dict, Iterable, Mapping, Optional

from infrastructure.i18n.bundle import load_default_document
from infrastructure.i18n.models import ContentDocument, ResolutionStats, get_nested_value
from infrastructure.i18n.store import LocaleStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def _is_caption(value: Any) -> bool:
    # Sections and other containers are not captions; empty strings are
    # untranslated entries and fall through.
    return isinstance(value, str) and value != ""


def interpolate(template: str, params: Mapping[str, Any]) -> str:
    """Replace every ``{name}`` in ``template`` with ``str(params[name])``.

    Placeholders without a matching param are left verbatim and braces are
    never escaped.
    """
    for name, value in params.items():
        template = template.replace(f"{{{name}}}", str(value))
    return template


class CaptionResolver:
    """Resolves caption keys against a LocaleStore.

    Statistics live as long as the resolver; create a new resolver to reset
    them.

    Attributes:
        store: LocaleStore holding the active locale's content.
        default_document: Bundled default-locale document (read-only).
    """

    def __init__(
        self,
        store: LocaleStore,
        default_document: Optional[ContentDocument] = None,
    ):
        """Initialize the resolver.

        Args:
            store: LocaleStore to read loaded content from.
            default_document: Default-locale document. Loaded from the
                bundled file when omitted.
        """
        self.store = store
        self.default_document = (
            default_document
            if default_document is not None
            else copy.deepcopy(load_default_document())
        )
        self._stats = ResolutionStats()
        logger.debug("caption_resolver_initialized", locale=store.active_locale)

    @property
    def current_locale(self) -> str:
        return self.store.active_locale

    @property
    def is_loading(self) -> bool:
        return self.store.busy

    def resolve(
        self,
        key: str,
        fallback: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Get the caption for ``key``.

        Args:
            key: Dotted key (e.g., "dashboard.welcome").
            fallback: Text used when the key is found nowhere.
            params: Values for ``{name}`` placeholders.

        Returns:
            The resolved and interpolated text. On any internal error,
            ``fallback`` if given, else ``key``.
        """
        try:
            text = get_nested_value(self.store.loaded_content, key)
            if _is_caption(text):
                self._stats.store_hits += 1
                source = "store"
            else:
                text = get_nested_value(self.default_document, key)
                if _is_caption(text):
                    self._stats.fallback_hits += 1
                    source = "default"
                else:
                    text = fallback if fallback is not None else key
                    self._stats.missing_keys += 1
                    source = "custom_fallback" if fallback is not None else "key"
                    logger.warning(
                        "caption_missing",
                        key=key,
                        source=source,
                        locale=self.store.active_locale,
                    )

            if params:
                text = interpolate(text, params)

            logger.debug("caption_resolved", key=key, source=source)
            return text
        except Exception as e:  # pylint: disable=broad-except
            logger.error("caption_resolution_failed", key=key, error=str(e))
            return fallback if fallback is not None else key

    def exists(self, key: str) -> bool:
        """True if ``key`` resolves to a caption in the active locale's loaded content.

        Only non-empty strings count, the same rule ``resolve`` applies to a
        store hit. A section key such as ``"common"`` or an empty entry is
        not a caption and returns False; use ``is_section_loaded`` for
        sections.
        """
        return _is_caption(get_nested_value(self.store.loaded_content, key))

    def resolve_many(self, keys: Iterable[str]) -> Dict[str, str]:
        """Resolve each key independently."""
        return {key: self.resolve(key) for key in keys}

    def stats(self) -> ResolutionStats:
        """Snapshot of the resolution statistics."""
        return dataclasses.replace(self._stats)

    def log_stats(self) -> Dict[str, Any]:
        """Log and return a summary of where captions came from."""
        summary = {
            "total": self._stats.total,
            "store_hits": self._stats.store_hits,
            "fallback_hits": self._stats.fallback_hits,
            "missing_keys": self._stats.missing_keys,
            "percentages": self._stats.percentages(),
            "current_locale": self.store.active_locale,
        }
        logger.info("caption_statistics", **summary)
        return summary

    def is_section_loaded(self, section: str) -> bool:
        return self.store.is_section_loaded(section)

    async def load_section(self, section: str) -> None:
        """Load an extra section through the store. Never raises."""
        try:
            await self.store.load_section(section)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("load_section_failed", section=section, error=str(e))
