"""Error taxonomy for the interpretation engine.

Every failure is a caller-input error with a machine-readable kind.
``str(exc)`` renders ``"<kind>: <detail>"`` so the outermost boundary can
present it verbatim while callers branch on :attr:`TimeError.kind`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Closed set of failure kinds."""

    INVALID_TIME = "invalid_time"
    INVALID_TIMEZONE = "invalid_timezone"
    INVALID_DURATION = "invalid_duration"
    INVALID_FORMAT = "invalid_format"
    INVALID_RELATIVE_TIME = "invalid_relative_time"


class TimeError(Exception):
    """Base class for all engine errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.kind}: {self.detail}"


class InvalidTimeError(TimeError):
    kind = ErrorKind.INVALID_TIME


class InvalidTimezoneError(TimeError):
    kind = ErrorKind.INVALID_TIMEZONE


class InvalidDurationError(TimeError):
    kind = ErrorKind.INVALID_DURATION


class InvalidFormatError(TimeError):
    kind = ErrorKind.INVALID_FORMAT


class InvalidRelativeTimeError(TimeError):
    kind = ErrorKind.INVALID_RELATIVE_TIME
