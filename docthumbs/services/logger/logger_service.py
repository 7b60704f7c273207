# docthumbs/services/logger/logger_service.py
"""
Centralized Logger Service for the thumbnail pipeline.

Thin, type-safe layer over loguru:
- Enum-based logger names and sources bound into every record
- Emoji-prefixed messages with a three-tier emoji priority
- Structured context passed as loguru extras
- One place to install sinks (configure_logging)
"""

import sys
from typing import Any, Dict, Optional, Union

from loguru import logger

from ...constants import LOG_FILE_RETENTION, LOG_FILE_ROTATION, LOG_FORMAT
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource


def _format_record(record) -> str:
    if "logger_name" in record["extra"]:
        return LOG_FORMAT + "\n{exception}"
    # Records from code outside the package carry no service extras
    return LOG_FORMAT.replace("{extra[logger_name]}", LoggerName.SYSTEM.value) + "\n{exception}"


def configure_logging(
    level: Union[LogLevel, str] = LogLevel.INFO,
    log_file: Optional[str] = None,
) -> None:
    """
    Install the console sink and, optionally, a rotating file sink.

    Replaces any sinks loguru already has, so calling it twice is safe.

    Args:
        level: Minimum level for all sinks
        log_file: Optional path of a log file (rotated and retained)
    """
    level_name = level.value if isinstance(level, LogLevel) else str(level).upper()

    logger.remove()
    logger.add(sys.stderr, level=level_name, format=_format_record, backtrace=False)
    if log_file:
        logger.add(
            log_file,
            level=level_name,
            format=_format_record,
            rotation=LOG_FILE_ROTATION,
            retention=LOG_FILE_RETENTION,
            enqueue=True,
        )


def _format_message(message: str, emoji: LogEmoji) -> str:
    return f"{emoji.value} {message.strip()}"


def get_service_logger(
    logger_name: LoggerName,
    source: LogSource = LogSource.SYSTEM,
    default_emoji: Optional[LogEmoji] = None,
):
    """
    Factory function to create a pre-configured logger for a specific service.

    Returns a logger with simplified methods that automatically include
    the correct source and logger_name.

    Emoji priority system (highest to lowest):
    1. Direct: Emoji passed directly to log method call
    2. Instance-set: Default emoji set when creating the service logger
    3. Fallback: Default emoji based on log level (ERROR, WARNING, INFO, DEBUG)

    Args:
        logger_name: The logger name enum to use for all calls
        source: The log source enum to use for all calls (defaults to SYSTEM)
        default_emoji: Instance-level default emoji that overrides level-based fallbacks

    Returns:
        ServiceLogger instance with error, warning, info, debug methods

    Example:
        logger = get_service_logger(LoggerName.PDF_RENDERER, LogSource.CONVERTER)
        logger.error("Rendering failed", exception=e)
        logger.debug("Rendered page", extra_context={"page": 0})
    """
    bound = logger.bind(logger_name=logger_name.value, source=source.value)

    def _resolve_emoji(
        method_emoji: Optional[LogEmoji], fallback_emoji: LogEmoji
    ) -> LogEmoji:
        if method_emoji is not None:
            return method_emoji
        if default_emoji is not None:
            return default_emoji
        return fallback_emoji

    def _emit(
        level: LogLevel,
        message: str,
        emoji: LogEmoji,
        context: Optional[Dict[str, Any]],
        exception: Optional[BaseException] = None,
    ) -> None:
        record_logger = bound.bind(context=context or {})
        if exception is not None:
            record_logger = record_logger.opt(exception=exception)
        record_logger.log(level.value, _format_message(message, emoji))

    class ServiceLogger:
        name = logger_name

        @staticmethod
        def error(
            message: str,
            exception: Optional[BaseException] = None,
            error_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log an error, attaching the exception traceback when given."""
            context = dict(error_context or kwargs.get("extra_context") or {})
            _emit(
                LogLevel.ERROR,
                message,
                _resolve_emoji(emoji, LogEmoji.ERROR),
                context,
                exception,
            )

        @staticmethod
        def warning(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log a warning with emoji priority system."""
            _emit(
                LogLevel.WARNING,
                message,
                _resolve_emoji(emoji, LogEmoji.WARNING),
                extra_context,
            )

        @staticmethod
        def info(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log an info message with emoji priority system."""
            _emit(
                LogLevel.INFO, message, _resolve_emoji(emoji, LogEmoji.INFO), extra_context
            )

        @staticmethod
        def debug(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log a debug message with emoji priority system."""
            _emit(
                LogLevel.DEBUG,
                message,
                _resolve_emoji(emoji, LogEmoji.DEBUG),
                extra_context,
            )

    return ServiceLogger()
