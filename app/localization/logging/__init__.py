"""Structured logging for the locale engine, built on structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Logger bound to a name
    - get_module_logger(): Logger bound to the calling module
    - bind_locale_context(): Correlate the log lines of one locale switch

Example:
    from localization.logging import configure_logging, get_module_logger

    configure_logging()
    logger = get_module_logger()
    logger.info("module_initialized")
"""

from localization.logging.context import bind_locale_context, get_switch_id
from localization.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "bind_locale_context",
    "get_switch_id",
]
