"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    CaptionSettings: Caption delivery settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    base_url = settings.captions.CONTENT_BASE_URL
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import CaptionSettings

__all__ = ["Settings", "CaptionSettings"]
