"""Caption delivery errors.

Every error except UnsupportedLocaleError is absorbed where it originates and
surfaced only as a structured log record and a counter.
"""


class CaptionError(Exception):
    """Base class for caption delivery errors."""


class ContentFetchError(CaptionError):
    """The content origin returned a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedDocumentError(CaptionError):
    """The response body is not a section -> entries mapping."""


class CacheStorageError(CaptionError):
    """The persistent cache or preference store failed to read or write."""


class DetectionError(CaptionError):
    """The device locale probe is unavailable or failed."""


class UnsupportedLocaleError(CaptionError, ValueError):
    """A locale outside the supported set was requested."""
