"""Locale state container.

LocaleStore owns the one LocaleState of a process: the active locale, the
sections loaded for it and an advisory busy flag. It decides which sections
to request from the ContentLoader and how results are applied:

- activate() replaces the loaded content wholesale (full context switch),
- load_section() merges one extra section for the already active locale.

Every activate() takes a monotonically increasing request token and all loads
run one at a time under a lock. A load whose token is no longer the newest
when it completes is discarded, so the last *issued* activation wins.
"""

import asyncio
from typing import Callable, Iterable, List, Optional, Sequence

from infrastructure.i18n.cache import ContentCache
from infrastructure.i18n.detection import LocaleProbe
from infrastructure.i18n.errors import CaptionError, UnsupportedLocaleError
from infrastructure.i18n.loader import ContentLoader
from infrastructure.i18n.models import ContentDocument, LocaleState, filter_sections
from infrastructure.i18n.preferences import PreferenceStore
from infrastructure.logging import bind_activation_context, get_module_logger

logger = get_module_logger()

DEFAULT_BASELINE_SECTIONS = ("common", "error", "footer")

StateListener = Callable[[LocaleState], None]


class LocaleStore:
    """Owns the active locale and its loaded content sections.

    Attributes:
        loader: ContentLoader used for every load.
        cache: Cache behind the loader; cleared by clear_cache().
        preferences: Durable store of the last activated locale.
        supported_locales: Supported codes; the first is the default locale.
        baseline_sections: Sections retained on every activation.
    """

    def __init__(
        self,
        loader: ContentLoader,
        cache: ContentCache,
        preferences: PreferenceStore,
        supported_locales: Sequence[str] = ("en", "es", "fr"),
        baseline_sections: Iterable[str] = DEFAULT_BASELINE_SECTIONS,
        device_locale_probe: Optional[LocaleProbe] = None,
    ):
        """Initialize the store with the default locale and no content.

        Args:
            loader: ContentLoader for full documents.
            cache: The loader's cache.
            preferences: Store of the preferred locale.
            supported_locales: Supported locale codes, default first.
            baseline_sections: Sections always retained by activate().
            device_locale_probe: Optional async probe used by initialize().

        Raises:
            ValueError: If supported_locales is empty.
        """
        if not supported_locales:
            raise ValueError("supported_locales must contain at least one locale")

        self.loader = loader
        self.cache = cache
        self.preferences = preferences
        self.supported_locales = tuple(supported_locales)
        self.baseline_sections = tuple(baseline_sections)
        self.device_locale_probe = device_locale_probe

        self._state = LocaleState(active_locale=self.default_locale)
        self._lock = asyncio.Lock()
        self._request_token = 0
        self._pending = 0
        self._listeners: List[StateListener] = []

    @property
    def default_locale(self) -> str:
        return self.supported_locales[0]

    @property
    def state(self) -> LocaleState:
        """The live state. Mutate it only through the store's operations."""
        return self._state

    @property
    def active_locale(self) -> str:
        return self._state.active_locale

    @property
    def loaded_content(self) -> ContentDocument:
        return self._state.loaded_content

    @property
    def busy(self) -> bool:
        return self._state.busy

    @property
    def init_error(self) -> Optional[str]:
        return self._state.init_error

    def is_supported(self, locale: str) -> bool:
        return locale in self.supported_locales

    def sections_for(self, section: Optional[str] = None) -> List[str]:
        """Sections an activation retains: the baseline plus ``section``."""
        sections = list(self.baseline_sections)
        if section and section not in sections:
            sections.append(section)
        return sections

    async def activate(self, locale: str, section: Optional[str] = None) -> bool:
        """Switch to ``locale`` and load the baseline plus ``section``.

        Loaded content is replaced wholesale; sections missing from the
        document are omitted. The locale is persisted as the preference.
        Loader failures already degrade to an empty document, so this only
        raises for an unsupported locale.

        Args:
            locale: Supported locale code to activate.
            section: Optional extra section to retain.

        Returns:
            True if the result was applied, False if a newer activation
            superseded it.

        Raises:
            UnsupportedLocaleError: If ``locale`` is not supported.
        """
        if not self.is_supported(locale):
            raise UnsupportedLocaleError(
                f"Unsupported locale: {locale} (supported: {', '.join(self.supported_locales)})"
            )

        self._request_token += 1
        token = self._request_token

        with bind_activation_context(locale=locale, section=section, request_token=token):
            self._begin()
            try:
                async with self._lock:
                    if token != self._request_token:
                        logger.info("activation_superseded", stage="queued")
                        return False

                    document = await self.loader.load(locale)

                    if token != self._request_token:
                        logger.info("activation_superseded", stage="loaded")
                        return False

                    sections = self.sections_for(section)
                    self._state.loaded_content = filter_sections(document, sections)
                    self._state.active_locale = locale
                    await self._persist_preference(locale)

                    logger.info(
                        "activated_locale",
                        requested_sections=sections,
                        loaded_sections=sorted(self._state.loaded_content),
                    )
            except CaptionError as e:
                logger.error("activation_failed", error=str(e), error_type=type(e).__name__)
                self._state.loaded_content = {}
            finally:
                self._end()

        self._notify()
        return True

    async def initialize(self) -> bool:
        """Pick the starting locale and activate it.

        Order: persisted preference, then the device probe result (when a
        probe is configured and the result is supported), then the default
        locale. Never raises; a failure is recorded in ``state.init_error``
        so the caller can offer a retry.

        Returns:
            True on success, False if initialization failed.
        """
        try:
            locale = await self._initial_locale()
            await self.activate(locale)
        except Exception as e:  # pylint: disable=broad-except
            self._state.init_error = str(e) or type(e).__name__
            logger.error(
                "locale_initialization_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        self._state.init_error = None
        logger.info("locale_initialized", locale=self._state.active_locale)
        return True

    async def load_section(self, section_name: str) -> None:
        """Merge ``section_name`` of the active locale into the loaded content.

        No-op for the default locale, whose content is bundled. Existing
        sections are kept; a section absent from the document is ignored.
        """
        if self._state.active_locale == self.default_locale:
            logger.debug("load_section_skipped_default_locale", section=section_name)
            return

        self._begin()
        try:
            async with self._lock:
                locale = self._state.active_locale
                token = self._request_token
                document = await self.loader.load(locale)

                if token != self._request_token or locale != self._state.active_locale:
                    logger.info(
                        "section_load_superseded", section=section_name, locale=locale
                    )
                    return

                if section_name in document:
                    self._state.loaded_content = {
                        **self._state.loaded_content,
                        section_name: document[section_name],
                    }
                    logger.info("loaded_section", section=section_name, locale=locale)
                else:
                    logger.warning("section_not_in_document", section=section_name, locale=locale)
        except CaptionError as e:
            logger.error("load_section_failed", section=section_name, error=str(e))
        finally:
            self._end()

    def is_section_loaded(self, section: str) -> bool:
        return section in self._state.loaded_content

    async def clear_cache(self) -> None:
        """Remove the cached document."""
        await self.cache.clear()
        logger.info("language_cache_cleared")

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with a state snapshot after every applied activation.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def close(self) -> None:
        """Release the cache's storage resources."""
        self._listeners.clear()
        await self.cache.close()

    async def _initial_locale(self) -> str:
        try:
            preferred = await self.preferences.get()
        except CaptionError as e:
            logger.warning("locale_preference_unreadable", error=str(e))
            preferred = None

        if preferred:
            if self.is_supported(preferred):
                return preferred
            logger.warning("ignored_unsupported_preference", preferred=preferred)

        if self.device_locale_probe is not None:
            try:
                detected = (await self.device_locale_probe())[:2].lower()
            except Exception as e:  # pylint: disable=broad-except
                logger.warning(
                    "device_locale_detection_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
            else:
                if self.is_supported(detected):
                    return detected
                logger.info("device_locale_unsupported", detected=detected)

        return self.default_locale

    async def _persist_preference(self, locale: str) -> None:
        try:
            await self.preferences.set(locale)
        except CaptionError as e:
            logger.error("locale_preference_write_failed", error=str(e))

    def _begin(self) -> None:
        self._pending += 1
        self._state.busy = True

    def _end(self) -> None:
        self._pending -= 1
        self._state.busy = self._pending > 0

    def _notify(self) -> None:
        snapshot = self._state.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:  # pylint: disable=broad-except
                logger.error("state_listener_failed", error=str(e))
