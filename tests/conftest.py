import pytest

from sinklog.record import LogRecord
from sinklog.sinks import BaseSink


class RecordingSink(BaseSink):
    """Sink that keeps every record it sees and every message it would log."""

    def __init__(self, level="NOTSET", **options):
        super().__init__(level, **options)
        self.records: list[LogRecord] = []
        self.messages: list[str] = []

    def handle(self, record: LogRecord) -> None:
        self.records.append(record)
        super().handle(record)

    def log(self, msg: str) -> None:
        self.messages.append(msg)


@pytest.fixture
def recording_sink():
    return RecordingSink("DEBUG")


@pytest.fixture
def make_record():
    def _make(msg="hello", *, args=(), level=20, logger_name="test", category=None):
        return LogRecord(msg=msg, args=args, level=level, logger_name=logger_name, category=category)

    return _make


@pytest.fixture
def sink_cls():
    return RecordingSink
