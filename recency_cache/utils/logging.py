import logging
import sys
from typing import Optional

import structlog

from ..core.config import get_settings


def setup_logging(
    log_level: Optional[str] = None, json_output: Optional[bool] = None
) -> None:
    """Set up logging for applications embedding the cache.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the configured ``log_level`` setting.
        json_output: Render structlog events as JSON instead of console text.
            Defaults to the configured ``log_json`` setting.
    """
    settings = get_settings()
    if log_level is None:
        log_level = settings.log_level
    if json_output is None:
        json_output = settings.log_json

    level = getattr(logging, log_level.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            (
                structlog.processors.JSONRenderer()
                if json_output
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger, defaulting to the package logger."""
    if name is None:
        name = "recency_cache"
    return structlog.get_logger(name)
