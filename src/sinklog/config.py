"""
Logging Configuration.

Settings are read from ``SINKLOG_*`` environment variables (and ``.env``) and
turned into a :class:`~sinklog.manager.LogConfig` by :func:`build_config`.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .files import FileMode, FileSink, RotatingFileSink
from .formatters import DEFAULT_DATETIME_FORMAT, DEFAULT_TEMPLATE
from .manager import DEFAULT_NAME, LogConfig, LoggerConfig
from .sinks import BaseSink, ConsoleSink
from .telegram import DEFAULT_DRAIN_INTERVAL, TELEGRAM_API_BASE, TelegramSink


class LogLevelName(str, Enum):
    NOTSET = "NOTSET"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SINKLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevelName = Field(default=LogLevelName.INFO, description="Log level")
    sinks: str = Field(default="console", description="Comma-separated sink names (console, file, rotating, telegram)")
    formatter: str = Field(default=DEFAULT_TEMPLATE, description="Record template")
    datetime_format: str = Field(default=DEFAULT_DATETIME_FORMAT, description="strftime pattern for {datetime}")
    no_color: bool = Field(default=False, description="Strip ANSI colors from console output")

    file_path: str = Field(default="logs/sinklog.log", description="Path for file sinks")
    file_mode: FileMode = Field(default=FileMode.APPEND, description="File open mode (a, w, x)")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1, description="Rotation threshold in bytes")
    max_backup_count: int = Field(default=5, ge=1, description="Number of rotated backups to keep")

    telegram_bot_token: SecretStr | None = Field(default=None, description="Telegram bot token")
    telegram_chat_id: str | None = Field(default=None, description="Telegram destination chat id")
    telegram_project_name: str | None = Field(default=None, description="Label prepended to Telegram messages")
    telegram_level: LogLevelName = Field(default=LogLevelName.ERROR, description="Telegram sink threshold")
    telegram_drain_interval: float = Field(default=DEFAULT_DRAIN_INTERVAL, gt=0, description="Seconds between deliveries")
    telegram_api_base: str = Field(default=TELEGRAM_API_BASE, description="Telegram Bot API base URL")


def _build_sink(name: str, settings: LoggingSettings) -> BaseSink:
    common = {
        "formatter": settings.formatter,
        "datetime_format": settings.datetime_format,
    }
    level = settings.level.value

    if name == "console":
        return ConsoleSink(level, no_color=settings.no_color, **common)
    if name == "file":
        return FileSink(level, filename=settings.file_path, mode=settings.file_mode, **common)
    if name == "rotating":
        return RotatingFileSink(
            level,
            filename=settings.file_path,
            mode=settings.file_mode,
            max_bytes=settings.max_bytes,
            max_backup_count=settings.max_backup_count,
            **common,
        )
    if name == "telegram":
        token = settings.telegram_bot_token
        return TelegramSink(
            settings.telegram_level.value,
            bot_token=token.get_secret_value() if token else "",
            chat_id=settings.telegram_chat_id or "",
            project_name=settings.telegram_project_name,
            drain_interval=settings.telegram_drain_interval,
            api_base=settings.telegram_api_base,
            **common,
        )
    raise ValueError(f"Unknown sink: {name!r}")


def build_config(settings: LoggingSettings | None = None) -> LogConfig:
    """Build a config whose ``default`` logger writes to the requested sinks."""
    settings = settings or LoggingSettings()

    sink_names = [s.strip().lower() for s in settings.sinks.split(",") if s.strip()]
    sinks = {name: _build_sink(name, settings) for name in sink_names}

    return LogConfig(
        sinks=sinks,
        loggers={DEFAULT_NAME: LoggerConfig(level=settings.level.value, sinks=list(sinks))},
    )
