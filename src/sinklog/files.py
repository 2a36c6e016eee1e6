"""
File sinks: plain append/truncate/exclusive file sink and the size-bounded
rotating file sink.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, TextIO

from .exceptions import InvalidRotationConfig, LogFileExists, SinkStateError
from .levels import LevelName, LogLevel
from .record import LogRecord
from .sinks import BaseSink


class FileMode(str, Enum):
    APPEND = "a"
    WRITE = "w"
    EXCLUSIVE = "x"


class FileSink(BaseSink):
    """Local file sink.

    Output is buffered; records above ERROR are flushed immediately.

    Args:
        level: Threshold level.
        filename: Path of the log file. Parent directories are created on setup.
        mode: ``"a"`` append, ``"w"`` truncate, ``"x"`` fail if the file exists.
        encoding: Text encoding of the file.
    """

    def __init__(
        self,
        level: LevelName | int = "NOTSET",
        *,
        filename: str | Path,
        mode: FileMode | str = FileMode.APPEND,
        encoding: str = "utf-8",
        **options: Any,
    ) -> None:
        super().__init__(level, **options)
        self._path = Path(filename)
        self._mode = FileMode(mode)
        self._encoding = encoding
        self._file: TextIO | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def mode(self) -> FileMode:
        return self._mode

    async def _open(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._open_file()

    def _open_file(self) -> None:
        try:
            # newline="" keeps "\n" as a single byte so size accounting stays exact
            self._file = open(self._path, self._mode.value, encoding=self._encoding, newline="")
        except FileExistsError:
            raise LogFileExists(path=str(self._path)) from None

    async def _close(self) -> None:
        self._release()

    def _release(self) -> None:
        if self._file is None:
            return
        try:
            self._file.flush()
        finally:
            self._file.close()
            self._file = None

    def handle(self, record: LogRecord) -> None:
        super().handle(record)

        if record.level > LogLevel.ERROR:
            self.flush()

    def log(self, msg: str) -> None:
        self._require_file().write(msg + "\n")

    def flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def _require_file(self) -> TextIO:
        if self._file is None:
            raise SinkStateError(sink=type(self).__name__, state=self.state.value)
        return self._file


class RotatingFileSink(FileSink):
    """File sink bounded by ``max_bytes`` with numbered backups.

    Backups live at ``<filename>.1`` (newest) through
    ``<filename>.<max_backup_count>`` (oldest). Rotation happens before the
    write that would push the active segment past ``max_bytes``; a single
    message larger than ``max_bytes`` is still written, alone, to a fresh
    segment. Sizes are counted in encoded bytes plus one for the newline.
    """

    def __init__(
        self,
        level: LevelName | int = "NOTSET",
        *,
        filename: str | Path,
        max_bytes: int,
        max_backup_count: int,
        **options: Any,
    ) -> None:
        super().__init__(level, filename=filename, **options)
        self._max_bytes = max_bytes
        self._max_backup_count = max_backup_count
        self._current_size = 0

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @property
    def max_backup_count(self) -> int:
        return self._max_backup_count

    @property
    def current_size(self) -> int:
        return self._current_size

    def backup_path(self, index: int) -> Path:
        if index == 0:
            return self._path
        return self._path.with_name(f"{self._path.name}.{index}")

    async def _open(self) -> None:
        if self._max_bytes < 1:
            raise InvalidRotationConfig(field="max_bytes", value=self._max_bytes)
        if self._max_backup_count < 1:
            raise InvalidRotationConfig(field="max_backup_count", value=self._max_backup_count)

        if self._mode is FileMode.EXCLUSIVE:
            for i in range(1, self._max_backup_count + 1):
                if self.backup_path(i).exists():
                    raise LogFileExists(path=str(self.backup_path(i)), backup=True)

        await super()._open()

        if self._mode is FileMode.WRITE:
            # truncating the active file also discards its backups
            for i in range(1, self._max_backup_count + 1):
                self.backup_path(i).unlink(missing_ok=True)

        self._current_size = os.fstat(self._file.fileno()).st_size if self._mode is FileMode.APPEND else 0

    def log(self, msg: str) -> None:
        self._require_file()
        size = len(msg.encode(self._encoding)) + 1

        if self._current_size + size > self._max_bytes:
            self.rotate()

        self._file.write(msg + "\n")
        self._current_size += size

    def rotate(self) -> None:
        """Close the active segment, shift backups up by one, open a fresh segment."""
        self._release()

        for i in range(self._max_backup_count - 1, -1, -1):
            source = self.backup_path(i)
            if source.exists():
                os.replace(source, self.backup_path(i + 1))

        self._open_file()
        self._current_size = 0
