"""
Logging configuration for the storefront core.

Wires structlog onto the standard library logging module so that component
loggers obtained with ``structlog.get_logger(__name__)`` share one handler
and one output format. Nothing is configured at import time; the embedding
application calls :func:`configure_logging` once.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings


def configure_logging(
    log_level: Optional[str] = None,
    use_json: Optional[bool] = None,
) -> structlog.stdlib.BoundLogger:
    """
    Configure structured logging.

    Args:
        log_level: Logging level name, defaults to ``settings.LOG_LEVEL``
        use_json: Render JSON lines instead of console output,
                  defaults to ``settings.LOG_JSON``

    Returns:
        Logger bound to the application name
    """
    level_name = (log_level or settings.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    if use_json is None:
        use_json = settings.LOG_JSON

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(settings.APP_NAME)
