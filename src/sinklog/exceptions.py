"""
sinklog exception hierarchy.

Setup-time validation failures are fatal and surface to the caller as
``SinkSetupError``. Runtime delivery failures never raise; they are reported
through the diagnostics logger instead.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SinklogError(Exception):
    """Base exception for sinklog.

    Carries a machine-readable ``code`` and optional ``details`` so callers
    can branch on the failure without parsing messages.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class SinkSetupError(SinklogError):
    """A sink could not be brought to the ready state.

    Raised after any partially acquired resource has been released.
    """

    pass


class InvalidRotationConfig(SinkSetupError):
    def __init__(self, *, field: str, value: int) -> None:
        super().__init__(
            f"{field} cannot be less than 1",
            code=f"invalid_{field}",
            details={"field": field, "value": value},
        )


class LogFileExists(SinkSetupError):
    """Exclusive-create mode found a pre-existing active file or backup."""

    def __init__(self, *, path: str, backup: bool = False) -> None:
        kind = "Backup log file" if backup else "Log file"
        super().__init__(
            f"{kind} {path} already exists",
            code="backup_exists" if backup else "file_exists",
            details={"path": path},
        )


class MissingCredentials(SinkSetupError):
    def __init__(self, *, field: str) -> None:
        super().__init__(
            f"{field} is required",
            code="missing_credentials",
            details={"field": field},
        )


class SinkStateError(SinklogError):
    """An operation was attempted on a sink without an open resource."""

    def __init__(self, *, sink: str, state: str) -> None:
        super().__init__(
            f"{sink} is not ready (state={state})",
            code="sink_not_ready",
            details={"sink": sink, "state": state},
        )
