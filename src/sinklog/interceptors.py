"""
Interceptors for capturing standard library and third-party logs.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .levels import LogLevel
from .logger import Logger
from .record import LogRecord


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging events to a sinklog logger.
    This lets third-party logs (httpx, uvicorn, etc.) pass through the same
    sink pipeline as application logs.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Skip our own records to avoid feedback loops
            if record.name == "sinklog" or record.name.startswith("sinklog."):
                return

            # Format message using stdlib's formatting (handles %s args)
            msg = self.format(record)

            level = _map_level(record.levelno)
            if not self._logger.is_enabled_for(level):
                return

            # the stdlib logger name is exposed to templates as {source}
            self._logger.dispatch(
                LogRecord(msg=msg, args=[{"source": record.name}], level=level, logger_name=self._logger.name)
            )
        except Exception:
            self.handleError(record)


def _map_level(levelno: int) -> int:
    # stdlib and sinklog share the same numeric scale; clamp custom levels into it
    if levelno >= LogLevel.CRITICAL:
        return LogLevel.CRITICAL
    if levelno <= LogLevel.NOTSET:
        return LogLevel.NOTSET
    return levelno


def intercept_stdlib(logger: Logger, *, names: Iterable[str] = ("",), level: int = logging.NOTSET) -> RedirectStdLibHandler:
    """Replace the handlers of the given stdlib loggers (root by default) with a redirect."""
    handler = RedirectStdLibHandler(logger)

    for name in names:
        lg = logging.getLogger(name or None)
        lg.handlers = [handler]
        if level:
            lg.setLevel(level)
        if name:
            lg.propagate = False

    return handler
