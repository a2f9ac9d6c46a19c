"""Structured logging for The Long Hall.

Engine modules log key/value events (seed, depth, action type) through
structlog. Logging is a side channel only: no value the simulation
computes is ever read back from it, so turning it up or off never changes
a replay.

Example:
    >>> from long_hall.core.logging import get_logger, log_context
    >>> logger = get_logger(__name__)
    >>> with log_context(seed="t1", depth=3):
    ...     logger.debug("Room generated", room_type="combat")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from long_hall.core.config import Settings


APP_NAME = "long_hall"
_STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application name."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def _renderer(json_format: bool) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        json_format: One JSON object per line instead of console text.
        log_file: Optional file that also receives stdlib records.
        stream: Where rendered lines go. Defaults to stderr so stdout
            stays free for run output.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    target = stream or sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_app_context,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer(json_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=target),
        cache_logger_on_first_use=False,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(target)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(format=_STDLIB_FORMAT, level=numeric_level, handlers=handlers, force=True)


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from ``LONG_HALL_LOG_LEVEL`` and ``LONG_HALL_LOG_JSON``."""
    if settings is None:
        from long_hall.core.config import get_settings

        settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structlog logger, usually ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind keys that appear in every later entry until cleared."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind keys for the duration of a block, restoring the previous values after.

    Example:
        >>> with log_context(seed="t1", depth=0):
        ...     get_logger().info("Run created")
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "APP_NAME",
    "add_app_context",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
