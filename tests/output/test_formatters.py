"""Tests for output mode selection."""

from __future__ import annotations

import json

from timectl.output.formatters import OutputSettings, format_result
from timectl.services.result import ServiceError, ServiceResult

_OK = ServiceResult(ok=True, op="convert", data={"time": "2025-07-08T18:34:56+02:00"})
_ERR = ServiceResult(
    ok=False,
    op="convert",
    error=ServiceError(code="invalid_time", message="invalid_time: Unable to parse input time: x"),
)


class TestFormatResult:
    def test_human_default(self) -> None:
        assert format_result(_OK) == "OK  convert\n  time: 2025-07-08T18:34:56+02:00"

    def test_quiet(self) -> None:
        assert format_result(_OK, settings=OutputSettings(quiet=True)) == "2025-07-08T18:34:56+02:00"

    def test_json(self) -> None:
        payload = json.loads(format_result(_OK, settings=OutputSettings(json_output=True)))
        assert payload["ok"] is True
        assert payload["data"] == {"time": "2025-07-08T18:34:56+02:00"}
        assert "error" not in payload

    def test_json_wins_over_quiet(self) -> None:
        text = format_result(_ERR, settings=OutputSettings(json_output=True, quiet=True))
        payload = json.loads(text)
        assert payload["error"]["code"] == "invalid_time"

    def test_quiet_error_is_message(self) -> None:
        text = format_result(_ERR, settings=OutputSettings(quiet=True))
        assert text == "invalid_time: Unable to parse input time: x"
