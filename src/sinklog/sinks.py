"""
Log sink contract and the console sink.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Callable, TextIO

from .diagnostics import get_diagnostics_logger
from .formatters import (
    COLORS,
    DEFAULT_DATETIME_FORMAT,
    CallbackFormatter,
    DateFormatter,
    Formatter,
    colorize,
    default_date_formatter,
    as_formatter,
    render,
    split_template,
    strip_color,
)
from .levels import LevelName, LogLevel, coerce_level, get_level_name, is_enabled
from .record import LogRecord

diagnostics = get_diagnostics_logger("sinklog.sinks")


class SinkState(str, Enum):
    UNCONFIGURED = "unconfigured"
    READY = "ready"
    DESTROYED = "destroyed"


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink:
    """Base class for log sinks.

    Lifecycle: ``UNCONFIGURED -> READY`` on :meth:`setup`, ``-> DESTROYED`` on
    :meth:`destroy`. Subclasses override :meth:`log` to produce their side
    effect, and :meth:`_open` / :meth:`_close` to manage resources.

    Args:
        level: Threshold level name or number.
        formatter: Template string, callable, or a formatter variant.
        datetime_format: strftime pattern used for ``{datetime}``.
        no_color: Strip ANSI colors from formatted output.
        date_formatter: ``(format, datetime) -> str`` used for ``{datetime}``.
    """

    no_color_default = True

    def __init__(
        self,
        level: LevelName | int = "NOTSET",
        *,
        formatter: Formatter | str | Callable[[LogRecord], str] | None = None,
        datetime_format: str | None = None,
        no_color: bool | None = None,
        date_formatter: DateFormatter | None = None,
    ) -> None:
        self.level = coerce_level(level)
        self.formatter = as_formatter(formatter)
        self.datetime_format = datetime_format or DEFAULT_DATETIME_FORMAT
        self.no_color = self.no_color_default if no_color is None else no_color
        self.date_formatter = date_formatter or default_date_formatter
        self._state = SinkState.UNCONFIGURED

    @property
    def level_name(self) -> str:
        return get_level_name(self.level)

    @property
    def state(self) -> SinkState:
        return self._state

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def setup(self) -> None:
        """Acquire resources. Errors propagate after partial resources are released."""
        try:
            await self._open()
        except BaseException:
            self._release()
            raise
        self._state = SinkState.READY

    async def destroy(self) -> None:
        """Release resources. Idempotent and never raises."""
        if self._state is SinkState.DESTROYED:
            return
        try:
            await self._close()
        except Exception as exc:
            diagnostics.error("sink_destroy_failed", sink=type(self).__name__, error=str(exc))
        finally:
            self._state = SinkState.DESTROYED

    async def _open(self) -> None:
        pass

    async def _close(self) -> None:
        pass

    def _release(self) -> None:
        """Synchronously drop whatever ``_open`` managed to acquire."""
        pass

    # -------------------------------------------------------------------------
    # Record Handling
    # -------------------------------------------------------------------------

    def handle(self, record: LogRecord) -> None:
        if self._state is SinkState.DESTROYED:
            return
        if not is_enabled(self.level, record.level):
            return

        msg = self.format(record)
        self.log(strip_color(msg) if self.no_color else msg)

    def format(self, record: LogRecord) -> str:
        if isinstance(self.formatter, CallbackFormatter):
            return self.formatter.callback(record)
        return self._render(self.formatter.template, record)

    def format_and_prefix(self, record: LogRecord) -> tuple[str | None, str]:
        """Format a record as ``(prefix, msg)``, split at the first ``{msg}``."""
        if isinstance(self.formatter, CallbackFormatter):
            return None, self.formatter.callback(record)

        prefix, rest = split_template(self.formatter.template)
        msg = self._render(rest, record) if rest else ""
        return (self._render(prefix, record) if prefix else None), msg

    def _render(self, template: str, record: LogRecord) -> str:
        return render(
            template,
            record=record,
            datetime_format=self.datetime_format,
            date_formatter=self.date_formatter,
        )

    def log(self, msg: str) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} level={self.level_name} state={self._state.value}>"


class ConsoleSink(BaseSink):
    """Terminal sink with level-dependent coloring.

    Args:
        level: Threshold level.
        stream: Output stream (default: stdout)
    """

    no_color_default = False

    def __init__(self, level: LevelName | int = "NOTSET", *, stream: TextIO | None = None, **options: Any):
        super().__init__(level, **options)
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def format(self, record: LogRecord) -> str:
        if self.no_color:
            return super().format(record)

        prefix, msg = self.format_and_prefix(record)
        prefix = prefix or ""

        if record.level == LogLevel.INFO:
            return (colorize(prefix, "blue") if prefix else "") + msg
        if record.level == LogLevel.WARNING:
            return (colorize(prefix, "yellow") if prefix else "") + msg
        if record.level == LogLevel.ERROR:
            return colorize(prefix + msg, "red")
        if record.level >= LogLevel.CRITICAL:
            return COLORS["bold"] + colorize(prefix + msg, "red")
        return prefix + msg

    def log(self, msg: str) -> None:
        self.stream.write(msg + "\n")
        self.stream.flush()

