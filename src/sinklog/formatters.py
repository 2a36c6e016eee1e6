"""
Format engine, formatter variants and color utilities.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Sequence, Union

import orjson

if TYPE_CHECKING:
    from .record import LogRecord

DEFAULT_TEMPLATE = "{level_name} {msg}"
DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DateFormatter = Callable[[str, datetime], str]

# =============================================================================
# Colors
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
}

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def strip_color(text: str) -> str:
    return _ANSI_PATTERN.sub("", text)


# =============================================================================
# Formatter Variants
# =============================================================================


@dataclass(frozen=True)
class TemplateFormatter:
    template: str = DEFAULT_TEMPLATE


@dataclass(frozen=True)
class CallbackFormatter:
    callback: Callable[["LogRecord"], str]


Formatter = Union[TemplateFormatter, CallbackFormatter]


def as_formatter(value: "Formatter | str | Callable[[LogRecord], str] | None") -> Formatter:
    """Normalize a sink's ``formatter`` option into a tagged variant."""
    if value is None:
        return TemplateFormatter()
    if isinstance(value, (TemplateFormatter, CallbackFormatter)):
        return value
    if isinstance(value, str):
        return TemplateFormatter(value)
    if callable(value):
        return CallbackFormatter(value)
    raise TypeError(f"formatter must be a template string or a callable, got {type(value).__name__}")


# =============================================================================
# Template Rendering
# =============================================================================

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

_RECORD_FIELDS = frozenset({"msg", "clear_msg", "level", "level_name", "logger_name", "category", "args"})


def default_date_formatter(fmt: str, value: datetime) -> str:
    return value.strftime(fmt)


def as_string(value: Any) -> str:
    """Render an opaque argument: strings verbatim, containers via repr, anything else via str."""
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, Sequence)):
        return repr(value)
    return str(value)


def _resolve_arg(name: str, args: Sequence[Any]) -> Any:
    if name.isascii() and name.isdigit():
        index = int(name)
        return args[index] if index < len(args) else None
    if args and isinstance(args[0], Mapping):
        return args[0].get(name)
    return None


def render(
    template: str,
    *,
    record: "LogRecord | None" = None,
    args: Sequence[Any] | None = None,
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
    date_formatter: DateFormatter = default_date_formatter,
) -> str:
    """Replace every ``{name}`` placeholder in ``template``.

    Resolution order: ``datetime`` and record attributes (when a record is
    given), then positional arguments by index, then keys of a mapping passed
    as the first argument. Placeholders that resolve to nothing are left in
    the output verbatim.
    """
    if args is None:
        args = record.args if record is not None else ()

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value: Any = None
        if record is not None and name == "datetime":
            value = date_formatter(datetime_format, record.datetime)
        elif record is not None and name in _RECORD_FIELDS:
            value = getattr(record, name)
            if value is not None and not isinstance(value, str):
                value = str(value)
        else:
            value = _resolve_arg(name, args)
            if value is not None:
                value = as_string(value)

        if value is None:
            return match.group(0)
        return value

    return _PLACEHOLDER.sub(substitute, template)


def split_template(template: str) -> tuple[str | None, str | None]:
    """Split a template at its first ``{msg}`` into ``(prefix, rest)``."""
    prefix, sep, rest = template.partition("{msg}")
    if not sep:
        return None, template or None
    return prefix or None, sep + rest


# =============================================================================
# JSON Formatter
# =============================================================================


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(
        v,
        default=default,
        option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS,
    ).decode()


def json_formatter(record: "LogRecord") -> str:
    """Callback formatter emitting one JSON object per record."""
    payload = {
        "timestamp": record.datetime,
        "level": record.level_name,
        "logger": record.logger_name,
        "message": record.clear_msg,
    }
    if record.category:
        payload["category"] = record.category
    args = record.args
    if args:
        payload["args"] = args
    return orjson_dumps(payload, default=repr)
