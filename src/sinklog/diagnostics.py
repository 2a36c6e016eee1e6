"""
Internal diagnostics logger.

Sinks report their own failures (delivery errors, close errors) here. The
logger is wrapped around a stderr ``PrintLogger`` with a private processor
chain, so it never re-enters the dispatcher even when structlog is globally
routed into sinklog.
"""

from __future__ import annotations

import sys

import structlog
from structlog.typing import EventDict, WrappedLogger


def add_component(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every diagnostic event with its originating component."""
    event_dict.setdefault("component", "sinklog")
    return event_dict


def get_diagnostics_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    return structlog.wrap_logger(
        structlog.PrintLogger(file=sys.stderr),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_component,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "component", "event"],
                drop_missing=True,
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        cache_logger_on_first_use=False,
    ).bind(component=name)
