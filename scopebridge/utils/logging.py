"""
Logging utilities for ScopeBridge.
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from scopebridge.utils.config import Config, get_config


def setup_logging(config: Optional[Config] = None) -> None:
    """
    Setup structured logging for ScopeBridge.

    Applications call this once at startup; the library never configures
    logging on import.

    Args:
        config: Configuration object (uses global config if None)
    """
    config = config or get_config()
    level = getattr(logging, config.log_level.upper())

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if config.log_format.lower() == "json":
        processors.extend([
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
        ])
    else:
        processors.extend([
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer()
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **context: Any) -> structlog.BoundLogger:
    """
    Get a configured logger with optional context.

    Args:
        name: Logger name
        **context: Additional context to bind

    Returns:
        Configured logger
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


def add_context(**context: Any) -> None:
    """
    Add context to all loggers in the current context.

    Args:
        **context: Context to add
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()

