"""
Immutable snapshot of one log event.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from .formatters import strip_color
from .levels import get_level_name


class LogRecord:
    """A single log event as handed to sinks.

    ``args`` and ``datetime`` return fresh copies on every access so that a
    sink cannot mutate what its siblings see.
    """

    __slots__ = ("_msg", "_args", "_level", "_level_name", "_logger_name", "_category", "_datetime")

    def __init__(
        self,
        *,
        msg: str,
        args: Sequence[Any] = (),
        level: int,
        logger_name: str,
        category: str | None = None,
    ) -> None:
        self._msg = msg
        self._args = list(args)
        self._level = int(level)
        self._level_name = get_level_name(level)
        self._logger_name = logger_name
        self._category = category or None
        self._datetime = datetime.now().astimezone()

    @property
    def msg(self) -> str:
        return self._msg

    @property
    def clear_msg(self) -> str:
        return strip_color(self._msg)

    @property
    def args(self) -> list[Any]:
        return list(self._args)

    @property
    def level(self) -> int:
        return self._level

    @property
    def level_name(self) -> str:
        return self._level_name

    @property
    def logger_name(self) -> str:
        return self._logger_name

    @property
    def category(self) -> str | None:
        return self._category

    @property
    def datetime(self) -> datetime:
        # datetime objects are immutable; replace() still hands out a distinct instance
        return self._datetime.replace()

    def __repr__(self) -> str:
        return f"<LogRecord {self._logger_name} {self._level_name} {self._msg!r}>"
