"""
Format engine unit tests.

Placeholders resolve against the record, then positional arguments by index,
then a mapping passed as the first argument. Anything unresolved stays
verbatim in the output.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import orjson
import pytest

from sinklog.formatters import (
    CallbackFormatter,
    TemplateFormatter,
    as_formatter,
    json_formatter,
    render,
    split_template,
    strip_color,
)


class TestRender:
    def test_record_fields(self, make_record) -> None:
        record = make_record("hello", level=30, logger_name="config")
        assert render("[{logger_name}] {level_name} {msg}", record=record) == "[config] WARNING hello"

    def test_unresolved_placeholder_is_left_verbatim(self, make_record) -> None:
        assert render("{level_name} {nope} {msg}", record=make_record("x")) == "INFO {nope} x"

    def test_missing_category_is_left_verbatim(self, make_record) -> None:
        assert render("{category}: {msg}", record=make_record("x")) == "{category}: x"

    def test_numeric_placeholders_resolve_by_index(self) -> None:
        assert render("{1} then {0}", args=["a", 2]) == "2 then a"

    def test_index_out_of_range_is_left_verbatim(self) -> None:
        assert render("{0} {5}", args=["a"]) == "a {5}"

    def test_named_placeholders_resolve_from_mapping(self) -> None:
        assert render("user={user} id={id}", args=[{"user": "alice", "id": 7}]) == "user=alice id=7"

    def test_named_placeholder_without_mapping_is_left_verbatim(self) -> None:
        assert render("user={user}", args=["alice"]) == "user={user}"

    def test_none_value_is_left_verbatim(self) -> None:
        assert render("{a} {0}", args=[{"a": None}]) == "{a} {'a': None}"

    def test_scalars_render_with_str(self) -> None:
        assert render("{0} {1}", args=[Decimal("1.5"), ValueError("boom")]) == "1.5 boom"

    def test_containers_render_with_repr(self) -> None:
        assert render("{0} {1}", args=[["a", 1], ("b",)]) == "['a', 1] ('b',)"

    def test_record_args_used_when_no_args_given(self, make_record) -> None:
        record = make_record("m", args=[{"path": "/tmp"}])
        assert render("{msg} at {path}", record=record) == "m at /tmp"

    def test_datetime_uses_injected_formatter(self, make_record) -> None:
        calls = []

        def fake(fmt: str, value: datetime) -> str:
            calls.append(fmt)
            return "NOW"

        out = render("{datetime} {msg}", record=make_record("x"), datetime_format="%H", date_formatter=fake)
        assert out == "NOW x"
        assert calls == ["%H"]

    def test_datetime_default_strftime(self, make_record) -> None:
        record = make_record("x")
        assert render("{datetime}", record=record, datetime_format="%Y") == str(record.datetime.year)


class TestSplitTemplate:
    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("{level_name} {msg}", ("{level_name} ", "{msg}")),
            ("{msg} tail", (None, "{msg} tail")),
            ("a {msg} b {msg}", ("a ", "{msg} b {msg}")),
            ("{level_name} only", (None, "{level_name} only")),
        ],
    )
    def test_split_at_first_msg(self, template: str, expected: tuple) -> None:
        assert split_template(template) == expected


class TestFormatterVariants:
    def test_string_becomes_template(self) -> None:
        assert as_formatter("{msg}") == TemplateFormatter("{msg}")

    def test_callable_becomes_callback(self) -> None:
        fn = lambda record: record.msg  # noqa: E731
        assert as_formatter(fn) == CallbackFormatter(fn)

    def test_none_is_default_template(self) -> None:
        assert as_formatter(None) == TemplateFormatter("{level_name} {msg}")

    def test_invalid_formatter_raises(self) -> None:
        with pytest.raises(TypeError):
            as_formatter(42)


class TestColorsAndJson:
    def test_strip_color(self) -> None:
        assert strip_color("\x1b[1m\x1b[31mboom\x1b[0m") == "boom"

    def test_json_formatter(self, make_record) -> None:
        record = make_record("\x1b[31mdisk full\x1b[0m", args=[{"free": 0}], level=40, category="disk")
        payload = orjson.loads(json_formatter(record))

        assert payload["message"] == "disk full"
        assert payload["level"] == "ERROR"
        assert payload["logger"] == "test"
        assert payload["category"] == "disk"
        assert payload["args"] == [{"free": 0}]
        assert "timestamp" in payload

    def test_json_formatter_handles_opaque_args(self, make_record) -> None:
        payload = orjson.loads(json_formatter(make_record("m", args=[object()])))
        assert payload["args"][0].startswith("<object object")
