"""
Dispatcher: owns a level gate and a sink list, builds records and fans them
out to sinks in registration order.
"""

from __future__ import annotations

from typing import Any, Sequence

from .diagnostics import get_diagnostics_logger
from .formatters import as_string, render, strip_color
from .levels import LevelName, LogLevel, coerce_level, get_level_name, is_enabled
from .record import LogRecord
from .sinks import BaseSink

diagnostics = get_diagnostics_logger("sinklog.logger")


def args_to_string(args: Sequence[Any]) -> str:
    if not args:
        return ""
    if len(args) == 1:
        return as_string(args[0])
    return " ".join(as_string(arg) for arg in args).strip()


def msg_format(fmt: str, args: Sequence[Any]) -> str:
    """Interpolate ``{0}`` / ``{key}`` placeholders from call arguments."""
    if not args:
        return fmt
    return render(fmt, args=args)


class _LevelMethods:
    """``debug`` .. ``critical`` and their ``*_format`` twins."""

    def _log(self, level: int, args: Sequence[Any], *, fmt: str | None = None) -> str | None:
        raise NotImplementedError

    def log(self, level: LevelName | int, *args: Any) -> str | None:
        return self._log(coerce_level(level), args)

    def debug(self, *args: Any) -> str | None:
        return self._log(LogLevel.DEBUG, args)

    def debug_format(self, fmt: str, *args: Any) -> str | None:
        return self._log(LogLevel.DEBUG, args, fmt=fmt)

    def info(self, *args: Any) -> str | None:
        return self._log(LogLevel.INFO, args)

    def info_format(self, fmt: str, *args: Any) -> str | None:
        return self._log(LogLevel.INFO, args, fmt=fmt)

    def warning(self, *args: Any) -> str | None:
        return self._log(LogLevel.WARNING, args)

    def warning_format(self, fmt: str, *args: Any) -> str | None:
        return self._log(LogLevel.WARNING, args, fmt=fmt)

    def error(self, *args: Any) -> str | None:
        return self._log(LogLevel.ERROR, args)

    def error_format(self, fmt: str, *args: Any) -> str | None:
        return self._log(LogLevel.ERROR, args, fmt=fmt)

    def critical(self, *args: Any) -> str | None:
        return self._log(LogLevel.CRITICAL, args)

    def critical_format(self, fmt: str, *args: Any) -> str | None:
        return self._log(LogLevel.CRITICAL, args, fmt=fmt)


class Logger(_LevelMethods):
    """Named dispatcher.

    A call whose level is below the logger's threshold builds no record. When
    the first argument is a callable it is only invoked once the gate has
    passed, and its return value replaces it.

    With ``return_result`` enabled every call returns the color-stripped
    message (``None`` for a gated call with a deferred callable).
    """

    def __init__(
        self,
        name: str,
        level: LevelName | int = "NOTSET",
        *,
        sinks: Sequence[BaseSink] | None = None,
        return_result: bool = False,
    ) -> None:
        self._name = name
        self._level = coerce_level(level)
        self._sinks: list[BaseSink] = list(sinks or [])
        self.return_result = return_result

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: LevelName | int) -> None:
        self._level = coerce_level(value)

    @property
    def level_name(self) -> str:
        return get_level_name(self._level)

    @level_name.setter
    def level_name(self, value: LevelName) -> None:
        self._level = coerce_level(value)

    @property
    def sinks(self) -> list[BaseSink]:
        return self._sinks

    @sinks.setter
    def sinks(self, value: Sequence[BaseSink]) -> None:
        self._sinks = list(value)

    def is_enabled_for(self, level: int) -> bool:
        return is_enabled(self._level, level)

    def _log(
        self,
        level: int,
        args: Sequence[Any],
        *,
        fmt: str | None = None,
        category: str | None = None,
    ) -> str | None:
        # only a plain call defers its message; format arguments are passed through
        deferred = fmt is None and bool(args) and callable(args[0])

        if not self.is_enabled_for(level):
            if not self.return_result or deferred:
                return None
            return strip_color(msg_format(fmt, args) if fmt is not None else args_to_string(args))

        if deferred:
            args = (args[0](), *args[1:])

        if fmt is not None:
            msg = msg_format(fmt, args)
            # category records carry the rendered message only
            record_args = () if category else args
        else:
            msg = args_to_string(args)
            record_args = args

        record = LogRecord(
            msg=msg,
            args=record_args,
            level=level,
            logger_name=self._name,
            category=category,
        )
        self.dispatch(record)

        return record.clear_msg if self.return_result else None

    def dispatch(self, record: LogRecord) -> None:
        """Hand a record to every sink; a failing sink does not affect its siblings."""
        for sink in self._sinks:
            try:
                sink.handle(record)
            except Exception as exc:
                diagnostics.error(
                    "sink_handle_failed",
                    logger=self._name,
                    sink=type(sink).__name__,
                    error=str(exc),
                )

    def __repr__(self) -> str:
        return f"<Logger {self._name} level={self.level_name} sinks={len(self._sinks)}>"


class CategoryLogger(_LevelMethods):
    """Stamps a category label on records, delegating everything else to a logger."""

    def __init__(self, category: str, logger: Logger) -> None:
        self._category = category
        self._logger = logger

    @property
    def category(self) -> str:
        return self._category

    @property
    def logger(self) -> Logger:
        return self._logger

    def _log(self, level: int, args: Sequence[Any], *, fmt: str | None = None) -> str | None:
        return self._logger._log(level, args, fmt=fmt, category=self._category)
