"""Host locale probe.

Stands in for the device-language probe of client platforms: reads the
process locale and the usual environment variables and reduces the result to
a two-letter language code.
"""

import asyncio
import locale
import os
from typing import Awaitable, Callable, Optional

from infrastructure.i18n.errors import DetectionError

# Async callable returning a language code or raising
LocaleProbe = Callable[[], Awaitable[str]]

_ENV_VARIABLES = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")


def _language_code(raw: Optional[str]) -> Optional[str]:
    if not raw or raw in ("C", "POSIX") or raw.startswith("C."):
        return None
    code = raw.split(":")[0].split(".")[0].replace("-", "_").split("_")[0]
    code = code.strip().lower()
    return code[:2] if len(code) >= 2 and code.isalpha() else None


def _detect() -> str:
    for name in _ENV_VARIABLES:
        code = _language_code(os.environ.get(name))
        if code:
            return code

    try:
        current, _ = locale.getlocale()
    except ValueError as e:
        raise DetectionError(f"Could not read process locale: {e}") from e

    code = _language_code(current)
    if code:
        return code
    raise DetectionError("No locale configured for this process")


async def detect_system_locale() -> str:
    """Return the two-letter language code of the host.

    Raises:
        DetectionError: If no usable locale is configured.
    """
    return await asyncio.to_thread(_detect)
