"""Caption delivery feature settings."""

from typing import Tuple

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


class CaptionSettings(FeatureSettings):
    """Localized caption delivery configuration.

    Environment Variables:
        CONTENT_BASE_URL: Base URL of the remote content origin. Documents are
            fetched from ``{CONTENT_BASE_URL}/{locale}/en.json``.
        CONTENT_REQUEST_TIMEOUT_SECONDS: Timeout for a single content request
            (default: 30, 0 disables the timeout)
        SUPPORTED_LOCALES: Comma separated locale codes. The first entry is
            the default locale and is never fetched remotely (default: en,es,fr)
        BASELINE_SECTIONS: Sections always retained on activation
            (default: common,error,footer)
        CAPTION_CACHE_PATH: SQLite file holding the cached document and the
            locale preference (default: .cache/captions.db)
        DEVICE_LOCALE_DETECTION: Probe the host locale on initialization
            (default: True)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        url = settings.captions.CONTENT_BASE_URL
        default_locale = settings.captions.default_locale
        ```
    """

    CONTENT_BASE_URL: str = Field(default="", alias="CONTENT_BASE_URL")
    CONTENT_REQUEST_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        alias="CONTENT_REQUEST_TIMEOUT_SECONDS",
        ge=0,
        description="Timeout for one content request; 0 disables the timeout",
    )
    SUPPORTED_LOCALES: str = Field(
        default="en,es,fr",
        alias="SUPPORTED_LOCALES",
        description="Comma separated locale codes, default locale first",
    )
    BASELINE_SECTIONS: str = Field(
        default="common,error,footer",
        alias="BASELINE_SECTIONS",
        description="Comma separated sections retained on every activation",
    )
    CAPTION_CACHE_PATH: str = Field(
        default=".cache/captions.db", alias="CAPTION_CACHE_PATH"
    )
    DEVICE_LOCALE_DETECTION: bool = Field(
        default=True, alias="DEVICE_LOCALE_DETECTION"
    )

    @field_validator("SUPPORTED_LOCALES")
    @classmethod
    def _require_default_locale(cls, value: str) -> str:
        if not _split_csv(value):
            raise ValueError("SUPPORTED_LOCALES must name at least one locale")
        return value

    @property
    def supported_locales(self) -> Tuple[str, ...]:
        """Supported locale codes in configured order."""
        return _split_csv(self.SUPPORTED_LOCALES)

    @property
    def baseline_sections(self) -> Tuple[str, ...]:
        """Sections every activation retains."""
        return _split_csv(self.BASELINE_SECTIONS)

    @property
    def default_locale(self) -> str:
        """The first supported locale; its content is bundled, never fetched."""
        return self.supported_locales[0]

    @property
    def request_timeout(self) -> float | None:
        """Timeout for ``requests``, or None when disabled."""
        return self.CONTENT_REQUEST_TIMEOUT_SECONDS or None
