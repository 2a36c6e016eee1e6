"""
stdlib logging and structlog bridge unit tests.
"""

from __future__ import annotations

import logging

import pytest
import structlog

from sinklog.interceptors import RedirectStdLibHandler, intercept_stdlib
from sinklog.logger import Logger
from sinklog.structlog_bridge import configure_structlog, get_logger


class TestStdlibRedirect:
    @pytest.fixture
    def stdlib_logger(self):
        lg = logging.getLogger("tests.bridge")
        saved = (lg.handlers[:], lg.level, lg.propagate)
        yield lg
        lg.handlers, lg.level, lg.propagate = saved

    def test_records_are_forwarded(self, stdlib_logger, sink_cls) -> None:
        sink = sink_cls("DEBUG", formatter="{level_name} {source}: {msg}")
        target = Logger("app", "DEBUG", sinks=[sink])
        intercept_stdlib(target, names=["tests.bridge"], level=logging.DEBUG)

        stdlib_logger.warning("disk at %d%%", 91)

        assert sink.messages == ["WARNING tests.bridge: disk at 91%"]
        assert sink.records[0].logger_name == "app"

    def test_gate_applies(self, stdlib_logger, recording_sink) -> None:
        target = Logger("app", "ERROR", sinks=[recording_sink])
        intercept_stdlib(target, names=["tests.bridge"], level=logging.DEBUG)

        stdlib_logger.info("ignored")

        assert recording_sink.records == []

    def test_own_records_are_skipped(self, recording_sink) -> None:
        handler = RedirectStdLibHandler(Logger("app", "DEBUG", sinks=[recording_sink]))
        record = logging.LogRecord("sinklog.telegram", logging.ERROR, __file__, 1, "loop", None, None)

        handler.emit(record)

        assert recording_sink.records == []


class TestStructlogBridge:
    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_event_and_keys_reach_sinks(self, sink_cls) -> None:
        sink = sink_cls("DEBUG", formatter="[{logger_name}] {level_name} {msg} user={user_id}")
        configure_structlog(Logger("app", "DEBUG", sinks=[sink]))

        get_logger("auth").info("login_succeeded", user_id=7)

        assert sink.messages == ["[auth] INFO login_succeeded user=7"]
        assert sink.records[0].args == [{"user_id": 7}]

    def test_levels_are_filtered(self, sink_cls) -> None:
        sink = sink_cls("DEBUG")
        configure_structlog(Logger("app", "DEBUG", sinks=[sink]), level="WARNING")

        log = get_logger("svc")
        log.info("quiet")
        log.error("loud")

        assert sink.messages == ["ERROR loud"]

    def test_target_gate_applies(self, recording_sink) -> None:
        configure_structlog(Logger("app", "CRITICAL", sinks=[recording_sink]))

        get_logger("svc").warning("below_gate")

        assert recording_sink.records == []

    def test_exception_is_rendered_into_args(self, recording_sink) -> None:
        configure_structlog(Logger("app", "DEBUG", sinks=[recording_sink]))

        try:
            raise RuntimeError("kaboom")
        except RuntimeError:
            get_logger("svc").exception("job_failed")

        record = recording_sink.records[0]
        assert record.level_name == "ERROR"
        assert "RuntimeError: kaboom" in record.args[0]["exception"]
