"""Structured logging infrastructure.

Centralized logging configuration and utilities built on structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_activation_context(): Context manager tagging one locale activation
    - get_correlation_id(): Get current correlation ID from context
    - clear_activation_context(): Clear all bound context

Formatters:
    - summarize_documents(): Processor replacing content documents with a summary
    - mask_sensitive_data(): Processor to redact sensitive fields and URL credentials
    - truncate_large_values(): Processor to limit string lengths

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_activation_context,
    clear_activation_context,
    get_correlation_id,
)

from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    mask_sensitive_data,
    summarize_documents,
    truncate_large_values,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_module_logger",
    # Context
    "bind_activation_context",
    "clear_activation_context",
    "get_correlation_id",
    # Formatters
    "summarize_documents",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
