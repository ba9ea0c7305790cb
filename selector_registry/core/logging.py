"""
Logging configuration for the Selector Registry service.
Provides structured logging for export loading, fetching and lookups.
"""

import logging
import sys
from typing import Any, Dict
import structlog
from structlog.stdlib import LoggerFactory

from selector_registry.core.config import settings


def setup_logging() -> None:
    """
    Configure structured logging for the application.
    Sets up different log formats for development and production environments.
    """

    # Configure structlog
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
            _get_processor(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    # Set specific logger levels
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _get_processor():
    """
    Get the appropriate processor based on environment and LOG_FORMAT.

    Returns:
        Processor function for structlog
    """
    if settings.ENVIRONMENT == "production" or settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    else:
        return structlog.dev.ConsoleRenderer(colors=True)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance
    """
    return structlog.get_logger(name)


# Specialized logging functions for registry operations

def log_registry_load(
    source: str,
    lines: int,
    selectors: int,
    signatures: int,
    skipped: int = 0,
    **kwargs
) -> None:
    """
    Log a completed bulk load of an export payload.

    Args:
        source: Where the payload came from (file path or "raw")
        lines: Number of lines read
        selectors: Number of distinct selectors indexed
        signatures: Number of signatures indexed
        skipped: Records dropped because their signature text did not parse
        **kwargs: Additional context
    """
    logger = get_logger("registry.load")
    logger.info(
        "Selector registry loaded",
        source=source,
        lines=lines,
        selectors=selectors,
        signatures=signatures,
        skipped=skipped,
        **kwargs
    )


def log_export_download(
    url: str,
    size: int,
    duration: float,
    **kwargs
) -> None:
    """
    Log a completed download of the signature export.

    Args:
        url: Export URL
        size: Payload size in characters
        duration: Download duration in seconds
        **kwargs: Additional context
    """
    logger = get_logger("export.download")
    logger.info(
        "Signature export downloaded",
        url=url,
        size=size,
        duration=duration,
        **kwargs
    )


def log_error(error: Exception, context: Dict[str, Any] = None) -> None:
    """
    Log an error with context.

    Args:
        error: Exception instance
        context: Additional context information
    """
    logger = get_logger("error")
    logger.error(
        "An error occurred",
        error=str(error),
        error_type=type(error).__name__,
        context=context or {},
        exc_info=True
    )
