"""
Route structlog events into a sinklog logger.

The event name becomes the record message; every other key of the event dict
is passed as a mapping argument, so sink templates can reference bound values
directly (``"{level_name} {msg} user={user_id}"``).
"""

from __future__ import annotations

from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .levels import LevelName, LogLevel, coerce_level
from .logger import Logger
from .record import LogRecord

_METHOD_LEVELS = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "critical": LogLevel.CRITICAL,
    "fatal": LogLevel.CRITICAL,
}


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger whose events carry ``name`` as the record's logger name."""
    return structlog.get_logger(_name=name or "root")


# =============================================================================
# Structlog Processors
# =============================================================================


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Move the bound ``_name`` to the ``logger`` key."""
    event_dict["logger"] = event_dict.pop("_name", "root")
    return event_dict


class SinklogRenderer:
    """Final processor: dispatch the event to ``target`` and return an empty string."""

    def __init__(self, target: Logger) -> None:
        self._target = target

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        level = _METHOD_LEVELS.get(str(event_dict.pop("level", method_name)).lower(), LogLevel.INFO)
        if not self._target.is_enabled_for(level):
            return ""

        msg = str(event_dict.pop("event", ""))
        logger_name = str(event_dict.pop("logger", self._target.name))
        event_dict.pop("timestamp", None)

        self._target.dispatch(
            LogRecord(
                msg=msg,
                args=[dict(event_dict)] if event_dict else [],
                level=level,
                logger_name=logger_name,
            )
        )
        return ""


def configure_structlog(target: Logger, level: LevelName | int = "NOTSET") -> None:
    """Configure structlog to render every event through ``target``."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            SinklogRenderer(target),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(int(coerce_level(level))),
        context_class=dict,
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
