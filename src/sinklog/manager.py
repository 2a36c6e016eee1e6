"""
Logger registry.

``LogManager`` holds the sinks and loggers of one process (or one test). It is
explicit state: nothing is torn down automatically, call :meth:`shutdown`
before exiting to flush and close sinks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .levels import LevelName
from .logger import CategoryLogger, Logger
from .sinks import BaseSink, ConsoleSink

DEFAULT_LEVEL: LevelName = "INFO"
DEFAULT_NAME = "default"


@dataclass
class LoggerConfig:
    level: LevelName | int = DEFAULT_LEVEL
    sinks: list[str] = field(default_factory=list)


@dataclass
class LogConfig:
    sinks: dict[str, BaseSink] = field(default_factory=dict)
    loggers: dict[str, LoggerConfig] = field(default_factory=dict)


def default_config() -> LogConfig:
    return LogConfig(
        sinks={DEFAULT_NAME: ConsoleSink(DEFAULT_LEVEL)},
        loggers={DEFAULT_NAME: LoggerConfig(level=DEFAULT_LEVEL, sinks=[DEFAULT_NAME])},
    )


class LogManager:
    """Registry of named sinks and loggers built from a :class:`LogConfig`.

    A fresh manager already serves a ``default`` logger writing INFO and above
    to the console; the console sink needs no resources, so no setup call is
    required for that.
    """

    def __init__(self) -> None:
        self._config = default_config()
        self._sinks: dict[str, BaseSink] = dict(self._config.sinks)
        self._loggers: dict[str, Logger] = {}
        self._build_loggers()

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def sinks(self) -> dict[str, BaseSink]:
        return dict(self._sinks)

    async def setup(self, config: LogConfig) -> None:
        """Replace the current configuration.

        Previously registered sinks are destroyed, the new sinks are set up in
        declaration order (a setup failure propagates to the caller) and the
        loggers are rebuilt. Entries named ``default`` override the defaults.
        """
        defaults = default_config()
        self._config = LogConfig(
            sinks={**defaults.sinks, **config.sinks},
            loggers={**defaults.loggers, **config.loggers},
        )

        for sink in self._sinks.values():
            await sink.destroy()
        self._sinks.clear()

        try:
            for name, sink in self._config.sinks.items():
                await sink.setup()
                self._sinks[name] = sink
        finally:
            # on a failed setup loggers keep only the sinks that came up
            self._build_loggers()

    async def shutdown(self) -> None:
        """Destroy every registered sink."""
        for sink in self._sinks.values():
            await sink.destroy()

    def _build_loggers(self) -> None:
        """Rewire loggers in place, so references already handed out follow the new sinks."""
        registered = list(self._sinks.values())
        for name, logger in self._loggers.items():
            if name not in self._config.loggers:
                logger.sinks = [s for s in logger.sinks if any(s is r for r in registered)]

        for name, logger_config in self._config.loggers.items():
            sinks = [self._sinks[s] for s in logger_config.sinks if s in self._sinks]
            logger = self._loggers.get(name)
            if logger is None:
                self._loggers[name] = Logger(name, logger_config.level, sinks=sinks)
            else:
                logger.level = logger_config.level
                logger.sinks = sinks

    def get_logger(self, name: str | None = None) -> Logger:
        """Return a configured logger, or register a NOTSET logger without sinks."""
        if not name:
            return self._loggers[DEFAULT_NAME]

        logger = self._loggers.get(name)
        if logger is None:
            logger = Logger(name, "NOTSET")
            self._loggers[name] = logger
        return logger

    def category_logger(self, category: str = DEFAULT_NAME, logger_name: str | None = None) -> CategoryLogger:
        return CategoryLogger(category, self.get_logger(logger_name))
