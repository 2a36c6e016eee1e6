"""
Log levels and the level gate.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Literal

LevelName = Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogLevel(IntEnum):
    NOTSET = 0
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


def get_level_by_name(name: str) -> LogLevel:
    """Resolve a level name (case-insensitive) to its numeric level."""
    try:
        return LogLevel[str(name).strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r}") from None


def get_level_name(level: int) -> str:
    try:
        return LogLevel(level).name
    except ValueError:
        return f"Level {level}"


def is_enabled(threshold: int, level: int) -> bool:
    """Gate check: a record passes when its level is at or above the threshold."""
    return level >= threshold


def coerce_level(level: str | int) -> LogLevel | int:
    if isinstance(level, str):
        return get_level_by_name(level)
    try:
        return LogLevel(level)
    except ValueError:
        return int(level)
