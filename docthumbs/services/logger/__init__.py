"""
Centralized Logger Service Module.

Usage:
    from docthumbs.services.logger import get_service_logger
    from docthumbs.enums import LoggerName, LogSource

    logger = get_service_logger(LoggerName.THUMBNAIL_PIPELINE, LogSource.PIPELINE)
    logger.info("Generated thumbnail", extra_context={"node": "/files/report.pdf"})
"""

# Re-export commonly used enums for convenience
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .logger_service import configure_logging, get_service_logger

__all__ = [
    "configure_logging",
    "get_service_logger",
    # Enums
    "LogLevel",
    "LogSource",
    "LoggerName",
    "LogEmoji",
]
