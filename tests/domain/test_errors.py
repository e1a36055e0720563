"""Tests for the engine error taxonomy."""

from __future__ import annotations

import pytest

from timectl.domain.errors import (
    ErrorKind,
    InvalidDurationError,
    InvalidFormatError,
    InvalidRelativeTimeError,
    InvalidTimeError,
    InvalidTimezoneError,
    TimeError,
)


class TestTimeError:
    @pytest.mark.parametrize(
        ("cls", "kind"),
        [
            (InvalidTimeError, ErrorKind.INVALID_TIME),
            (InvalidTimezoneError, ErrorKind.INVALID_TIMEZONE),
            (InvalidDurationError, ErrorKind.INVALID_DURATION),
            (InvalidFormatError, ErrorKind.INVALID_FORMAT),
            (InvalidRelativeTimeError, ErrorKind.INVALID_RELATIVE_TIME),
        ],
    )
    def test_kind_per_subclass(self, cls: type[TimeError], kind: ErrorKind) -> None:
        exc = cls("detail")
        assert exc.kind is kind
        assert isinstance(exc, TimeError)

    def test_str_prefixes_kind(self) -> None:
        exc = InvalidTimezoneError("Invalid IANA timezone name: Mars/Olympus")
        assert str(exc) == "invalid_timezone: Invalid IANA timezone name: Mars/Olympus"
        assert exc.detail == "Invalid IANA timezone name: Mars/Olympus"

    def test_kind_values_are_stable(self) -> None:
        assert [str(kind) for kind in ErrorKind] == [
            "invalid_time",
            "invalid_timezone",
            "invalid_duration",
            "invalid_format",
            "invalid_relative_time",
        ]
