"""
Level gate and log record unit tests.
"""

from __future__ import annotations

import pytest

from sinklog.levels import LogLevel, get_level_by_name, get_level_name, is_enabled
from sinklog.record import LogRecord

ORDERED = [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARNING, LogLevel.ERROR, LogLevel.CRITICAL]


class TestLevels:
    def test_total_order(self) -> None:
        assert LogLevel.NOTSET < LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR < LogLevel.CRITICAL

    @pytest.mark.parametrize("threshold", ORDERED)
    @pytest.mark.parametrize("level", ORDERED)
    def test_gate_passes_iff_level_at_or_above_threshold(self, threshold: LogLevel, level: LogLevel) -> None:
        assert is_enabled(threshold, level) is (level >= threshold)

    def test_lookup_by_name_is_case_insensitive(self) -> None:
        assert get_level_by_name("warning") is LogLevel.WARNING
        assert get_level_by_name(" ERROR ") is LogLevel.ERROR

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ValueError, match="VERBOSE"):
            get_level_by_name("VERBOSE")

    def test_level_name(self) -> None:
        assert get_level_name(30) == "WARNING"
        assert get_level_name(25) == "Level 25"


class TestLogRecord:
    def test_level_name_derived_from_level(self, make_record) -> None:
        record = make_record(level=LogLevel.CRITICAL)
        assert record.level == 50
        assert record.level_name == "CRITICAL"

    def test_args_are_copied_on_access(self) -> None:
        source = ["a", {"k": 1}]
        record = LogRecord(msg="m", args=source, level=20, logger_name="t")

        source.append("late")
        record.args.append("mutated")

        assert record.args == ["a", {"k": 1}]
        assert record.args is not record.args

    def test_datetime_is_a_fresh_instance(self, make_record) -> None:
        record = make_record()
        first, second = record.datetime, record.datetime
        assert first == second
        assert first is not second
        assert first.tzinfo is not None

    def test_attributes_are_read_only(self, make_record) -> None:
        record = make_record()
        with pytest.raises(AttributeError):
            record.msg = "changed"

    def test_clear_msg_strips_colors(self, make_record) -> None:
        record = make_record("\x1b[31mred\x1b[0m text")
        assert record.clear_msg == "red text"

    def test_empty_category_is_none(self, make_record) -> None:
        assert make_record(category="").category is None
        assert make_record(category="db").category == "db"
