"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.captions import CaptionSettings

__all__ = [
    "CaptionSettings",
]
