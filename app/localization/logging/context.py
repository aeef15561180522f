"""Locale-switch context binding for structured logging.

Every log entry emitted while a locale switch is in flight carries the
switch id and the requested locale, so the namespace fetches, fallback
decisions and handler failures of one switch can be correlated even when
several switches overlap.

Usage:
    from localization.logging import bind_locale_context

    with bind_locale_context(requested_locale="es"):
        logger.info("loading_bundle")  # includes switch_id, requested_locale

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_locale_context(
    requested_locale: str,
    switch_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind a locale switch's context to all logs within the block.

    Args:
        requested_locale: Locale the switch was asked for.
        switch_id: Identifier of the switch. Generated when not provided.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The switch id bound for the block.
    """
    context: dict[str, Any] = {
        "switch_id": switch_id or uuid.uuid4().hex[:12],
        "requested_locale": requested_locale,
    }
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["switch_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_switch_id() -> Optional[str]:
    """Switch id bound in the current context, if any."""
    return structlog.contextvars.get_contextvars().get("switch_id")
