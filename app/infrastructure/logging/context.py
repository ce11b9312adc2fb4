"""Activation context binding for structured logging.

Binds a correlation id and the requested locale to every log entry emitted
while one locale activation is in flight, so the cache, loader and store
records of that activation can be joined.

Usage:
    from infrastructure.logging import bind_activation_context

    with bind_activation_context(locale="es", section="dashboard"):
        logger.info("activation_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_activation_context(
    correlation_id: Optional[str] = None,
    locale: Optional[str] = None,
    section: Optional[str] = None,
    request_token: Optional[int] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind activation-scoped context to all logs within the block.

    Args:
        correlation_id: Identifier for this activation. Generated if missing.
        locale: Locale being activated.
        section: Extra section requested with the activation.
        request_token: Store request token of the activation.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id in use.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if locale is not None:
        context["locale"] = locale
    if section is not None:
        context["section"] = section
    if request_token is not None:
        context["request_token"] = request_token

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_activation_context() -> None:
    """Clear all context bound to the logging context."""
    structlog.contextvars.clear_contextvars()
