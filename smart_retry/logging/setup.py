"""Logging for smart_retry.

Importing the package never touches global logging state: module loggers are
lazy structlog proxies that pick up whatever configuration is active when
they first emit. Applications that want smart_retry's own output format call
configure_logging() once at startup.

Usage:
    from smart_retry.logging import configure_logging

    configure_logging(log_level="DEBUG")
"""

import inspect
import logging
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from smart_retry.configuration import get_settings

DEFAULT_LOGGER_NAME = "smart_retry"


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Route structlog through the standard library and pick a renderer.

    Console output in development, one JSON object per line in production.
    Root handlers that are already installed are left in place.

    Args:
        log_level: Level name, defaults to settings.LOG_LEVEL
        is_production: Render JSON when True, defaults to settings.is_production

    Returns:
        A logger using the new configuration
    """
    settings = get_settings()
    prod_mode = is_production if is_production is not None else settings.is_production

    processors = [
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

    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(format="%(message)s")
    logging.getLogger(DEFAULT_LOGGER_NAME).setLevel(
        getattr(logging, level_name, logging.INFO)
    )

    return structlog.stdlib.get_logger(DEFAULT_LOGGER_NAME)


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a lazy logger with a logger_name bound.

    Args:
        name: Logger name, defaults to "smart_retry"
    """
    name = name or DEFAULT_LOGGER_NAME
    return structlog.stdlib.get_logger(name, logger_name=name)


def get_module_logger() -> BoundLogger:
    """Get a lazy logger for the calling module.

    Binds component (last dotted part of the module name) and module_path.

    Example:
        # In smart_retry/retry/executor.py
        logger = get_module_logger()
        # context: {"component": "executor", "module_path": "smart_retry.retry.executor"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None

    if module is None:
        return structlog.stdlib.get_logger(DEFAULT_LOGGER_NAME, component="unknown")

    module_name = module.__name__
    return structlog.stdlib.get_logger(
        module_name,
        component=module_name.split(".")[-1],
        module_path=module_name,
    )
