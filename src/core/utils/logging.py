"""
Structured logging utilities.

Configures structlog for the service and provides a context manager for
timed operation logging.
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from src.core.config.logging_config import LoggingConfig

logger = structlog.get_logger(__name__)


def configure_logging(logging_config: LoggingConfig) -> None:
    """
    Route structlog through the standard library and pick a renderer.

    Args:
        logging_config: Level and output format (console or json).
    """
    level = getattr(logging, logging_config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    renderer: Any
    if logging_config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def log_operation(operation: str, **context: Any) -> AsyncIterator[None]:
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        **context: Additional context to include in logs

    Example:
        async with log_operation("installation_token_exchange", installation_id=42):
            token = await exchanger.exchange(42)
    """
    start_time = time.monotonic()
    logger.info(f"{operation}_started", **context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.monotonic() - start_time) * 1000)
        logger.error(
            f"{operation}_failed",
            error=str(e),
            error_type=type(e).__name__,
            latency_ms=latency_ms,
            **context,
        )
        raise
    else:
        latency_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(f"{operation}_completed", latency_ms=latency_ms, **context)
