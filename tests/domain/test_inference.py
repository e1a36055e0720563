"""Tests for heuristic layout inference."""

from __future__ import annotations

import pytest

from timectl.domain.errors import InvalidFormatError
from timectl.domain.inference import infer_layout


class TestInferLayout:
    @pytest.mark.parametrize(
        ("value", "layout"),
        [
            ("2025-07-08T12:34:56Z", "2006-01-02T15:04:05Z07:00"),
            ("2025-07-08T12:34:56+02:00", "2006-01-02T15:04:05-07:00"),
            ("2025-07-08T12:34:56-0400", "2006-01-02T15:04:05-0700"),
            ("2025-07-08T12:34:56.123+02:00", "2006-01-02T15:04:05.000-07:00"),
            ("2025-07-08T12:34:56.1Z", "2006-01-02T15:04:05.0Z07:00"),
            ("2025-07-08 12:34:56", "2006-01-02 15:04:05"),
            ("2025-07-08", "2006-01-02"),
            ("2025.07.08", "2006.01.02"),
            ("20250708", "20060102"),
            ("12:34", "15:04"),
            ("3:04PM", "3:04PM"),
            ("10am", "03pm"),
            ("Jul 8, 2025", "Jan 2, 2006"),
            ("July 8th 2025", "January 2th 2006"),
            ("Jan  7 15:04:05", "Jan _2 15:04:05"),
            ("Sat, 07 Jun 2025 12:34:56 MDT", "Mon, 02 Jan 2006 15:04:05 MST"),
            ("Tuesday, 08-Jul-25 12:34:56 UTC", "Monday, 02-Jan-06 15:04:05 MST"),
        ],
    )
    def test_shapes(self, value: str, layout: str) -> None:
        assert infer_layout(value).source == layout

    def test_month_first_when_ambiguous(self) -> None:
        assert infer_layout("07/08/2025").source == "01/02/2006"

    def test_day_first_when_first_part_exceeds_twelve(self) -> None:
        assert infer_layout("25/12/2025").source == "02/01/2006"

    def test_year_first_for_four_digit_lead(self) -> None:
        assert infer_layout("2025/12/25").source == "2006/01/02"

    def test_pure_function(self) -> None:
        assert infer_layout("2025-07-08").source == infer_layout("2025-07-08").source

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "hello",
            "Tuesday",
            "???",
            "2025-07-08 99",
            "13/13/2025",
            "2025.07",
        ],
    )
    def test_unrecognized(self, value: str) -> None:
        with pytest.raises(InvalidFormatError) as exc_info:
            infer_layout(value)
        assert exc_info.value.detail == f"Unable to parse format from input time: {value}"
