"""Logging helpers for femtologging integration.

Reeve emits pre-formatted, percent-interpolated messages through femtologging.
The helpers here normalise level names and keep the call sites terse.

Example:
>>> from reeve.logging import get_logger, log_debug
>>> logger = get_logger(__name__)
>>> log_debug(logger, "resolved workspace %s", "ws-1")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log levels understood by femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_DEFAULT_LEVEL = LogLevel.WARNING


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Normalise a log level name and report whether it was invalid.

    Parameters
    ----------
    level : str | None
        Raw level name, typically read from ``REEVE_LOG_LEVEL``.

    Returns
    -------
    tuple[str, bool]
        The normalised level and ``True`` when the input had to be replaced by
        the default.

    """
    if not level or not level.strip():
        return (str(_DEFAULT_LEVEL), True)

    normalized = level.strip().upper()
    if normalized in LogLevel.__members__:
        return (normalized, False)

    return (str(_DEFAULT_LEVEL), True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging and return the level actually applied."""
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


class SupportsLog(typ.Protocol):
    """Protocol for femtologging-compatible loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: SupportsLog,
    level: LogLevel,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    message = template % args if args else template
    logger.log(str(level), message, exc_info=exc_info, stack_info=False)


def log_trace(logger: SupportsLog, template: str, *args: object) -> None:
    """Log a TRACE message with percent-style formatting."""
    _emit(logger, LogLevel.TRACE, template, args, None)


def log_debug(logger: SupportsLog, template: str, *args: object) -> None:
    """Log a DEBUG message with percent-style formatting."""
    _emit(logger, LogLevel.DEBUG, template, args, None)


def log_info(logger: SupportsLog, template: str, *args: object) -> None:
    """Log an INFO message with percent-style formatting."""
    _emit(logger, LogLevel.INFO, template, args, None)


def log_warning(
    logger: SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a WARNING message, optionally attaching exception information."""
    _emit(logger, LogLevel.WARNING, template, args, exc_info)


def log_error(
    logger: SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an ERROR message with percent-style formatting.

    Parameters
    ----------
    logger : SupportsLog
        Logger that receives the formatted message.
    template : str
        Message template using percent-style placeholders.
    *args : object
        Values to interpolate into the template.
    exc_info : object | None, optional
        Exception information to attach to the log record.

    """
    _emit(logger, LogLevel.ERROR, template, args, exc_info)


__all__ = [
    "LogLevel",
    "SupportsLog",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_error",
    "log_info",
    "log_trace",
    "log_warning",
    "normalize_log_level",
]
