"""Structlog configuration and logger setup.

Development output goes through structlog's console renderer, production
output is one JSON object per line. Under pytest nothing is emitted.

Usage:
    from localization.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("locale_changed", locale="es")

Dependencies:
    - localization.configuration.Settings
"""

import inspect
import logging
import sys
from typing import Any, Callable, List, Optional, Sequence

import structlog
from structlog.stdlib import BoundLogger

from localization.configuration import settings

Processor = Callable[[Any, str, dict], dict]

# Third-party loggers that only add noise at INFO
QUIET_LOGGERS = ("asyncio", "babel")


def _is_test_environment() -> bool:
    """True when running under pytest."""
    return "pytest" in sys.modules


def _build_processors(
    prod_mode: bool,
    extra_processors: Sequence[Processor] = (),
) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    processors.extend(extra_processors)
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def _configure_silent() -> BoundLogger:
    # Processors stay valid so log calls work; the root level drops everything
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=logging.CRITICAL + 1,
        force=True,
    )
    return structlog.stdlib.get_logger()


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    extra_processors: Sequence[Processor] = (),
) -> BoundLogger:
    """Configure structured logging.

    Args:
        log_level: Log level name; defaults to settings.LOG_LEVEL.
        is_production: JSON output when True, console output when False.
            Defaults to settings.is_production.
        extra_processors: Processors run just before rendering.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        return _configure_silent()

    prod_mode = is_production if is_production is not None else settings.is_production

    structlog.configure(
        processors=_build_processors(prod_mode, extra_processors),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Logger bound to ``name``, or to the calling module when omitted."""
    if name:
        return logger.bind(logger_name=name)

    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return logger

    module = inspect.getmodule(current_frame.f_back)
    if module:
        return logger.bind(logger_name=module.__name__)

    return logger.bind(logger_name="unknown")


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module.

    Binds ``component`` (last dotted segment) and ``module_path``.

    Example:
        # In localization/i18n/loader.py
        logger = get_module_logger()
        # context: {"component": "loader", "module_path": "localization.i18n.loader"}
    """
    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return logger

    module = inspect.getmodule(current_frame.f_back)
    if module:
        module_name = module.__name__
        return logger.bind(
            component=module_name.rsplit(".", 1)[-1],
            module_path=module_name,
        )

    return logger.bind(component="unknown")
