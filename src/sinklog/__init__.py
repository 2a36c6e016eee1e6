"""
sinklog: structured logging with pluggable sinks.

Records pass a level gate, are rendered by a ``{placeholder}`` template engine
and fanned out to sinks:
- console: colored terminal output
- file / rotating: local files, size-bounded with numbered backups
- telegram: queued, non-blocking delivery to a Telegram chat

The module-level functions below use a process-wide :class:`LogManager`;
applications that want isolated state create and pass their own manager.
"""

from __future__ import annotations

from typing import Any

from .config import LoggingSettings, build_config
from .exceptions import SinkSetupError, SinkStateError, SinklogError
from .files import FileMode, FileSink, RotatingFileSink
from .formatters import CallbackFormatter, TemplateFormatter, json_formatter
from .levels import LevelName, LogLevel, get_level_by_name, get_level_name
from .logger import CategoryLogger, Logger
from .manager import LogConfig, LoggerConfig, LogManager
from .record import LogRecord
from .sinks import BaseSink, ConsoleSink, SinkState
from .telegram import TelegramSink

manager = LogManager()


async def setup(config: LogConfig) -> None:
    await manager.setup(config)


async def shutdown() -> None:
    await manager.shutdown()


def get_logger(name: str | None = None) -> Logger:
    return manager.get_logger(name)


def category_logger(category: str = "default", logger_name: str | None = None) -> CategoryLogger:
    return manager.category_logger(category, logger_name)


def debug(*args: Any) -> str | None:
    return manager.get_logger().debug(*args)


def info(*args: Any) -> str | None:
    return manager.get_logger().info(*args)


def warning(*args: Any) -> str | None:
    return manager.get_logger().warning(*args)


def error(*args: Any) -> str | None:
    return manager.get_logger().error(*args)


def critical(*args: Any) -> str | None:
    return manager.get_logger().critical(*args)


def debug_format(fmt: str, *args: Any) -> str | None:
    return manager.get_logger().debug_format(fmt, *args)


def info_format(fmt: str, *args: Any) -> str | None:
    return manager.get_logger().info_format(fmt, *args)


def warning_format(fmt: str, *args: Any) -> str | None:
    return manager.get_logger().warning_format(fmt, *args)


def error_format(fmt: str, *args: Any) -> str | None:
    return manager.get_logger().error_format(fmt, *args)


def critical_format(fmt: str, *args: Any) -> str | None:
    return manager.get_logger().critical_format(fmt, *args)


__all__ = [
    "BaseSink",
    "CallbackFormatter",
    "CategoryLogger",
    "ConsoleSink",
    "FileMode",
    "FileSink",
    "LevelName",
    "LogConfig",
    "LogLevel",
    "LogManager",
    "LogRecord",
    "Logger",
    "LoggerConfig",
    "LoggingSettings",
    "RotatingFileSink",
    "SinkSetupError",
    "SinkState",
    "SinkStateError",
    "SinklogError",
    "TelegramSink",
    "TemplateFormatter",
    "build_config",
    "category_logger",
    "critical",
    "critical_format",
    "debug",
    "debug_format",
    "error",
    "error_format",
    "get_level_by_name",
    "get_level_name",
    "get_logger",
    "info",
    "info_format",
    "json_formatter",
    "manager",
    "setup",
    "shutdown",
    "warning",
    "warning_format",
]
