"""Custom log formatters for structured logging.

Processors that keep caption logs readable: content documents are reduced
to a section summary, long strings are truncated and credentials embedded in
content URLs are masked.

Usage:
    from infrastructure.logging.formatters import summarize_documents
"""

import re
from typing import Any

# Keys whose values are always masked
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "access_token",
        "auth_token",
    }
)

# Query string credentials in URLs, e.g. ``?token=abc`` or ``&api_key=abc``
_URL_CREDENTIAL = re.compile(
    r"([?&](?:token|api_key|apikey|key|signature)=)[^&\s]+", re.IGNORECASE
)


def summarize_documents(max_sections: int = 10):
    """Create a processor that replaces content documents with a summary.

    A value counts as a content document when it is a dict whose values are
    all dicts (section -> entries). It is replaced by
    ``{"sections": [...], "section_count": n}`` so whole documents never end
    up in log output.

    Args:
        max_sections: Maximum section names listed in the summary.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in list(event_dict.items()):
            if (
                isinstance(value, dict)
                and value
                and all(isinstance(section, dict) for section in value.values())
            ):
                names = sorted(value)
                event_dict[key] = {
                    "sections": names[:max_sections],
                    "section_count": len(names),
                }
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks sensitive data in log entries.

    Values of keys containing a sensitive pattern are replaced entirely;
    string values have URL query credentials masked in place.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra key patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked_dict = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            if value is not None and any(p in key_lower for p in patterns):
                masked_dict[key] = mask_value
            elif isinstance(value, str):
                masked_dict[key] = _URL_CREDENTIAL.sub(r"\1" + mask_value, value)
            else:
                masked_dict[key] = value
        return masked_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates overly large string values.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
