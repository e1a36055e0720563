"""Tests for parsing text against a committed layout."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

import pytest

from timectl.domain.layouts import LayoutPattern
from timectl.domain.parsing import LayoutMismatch, parse_layout
from timectl.domain.zones import UTC, load_zone, offset_seconds, zone_abbreviation


def _parse(value: str, layout: str, zone: tzinfo = UTC) -> datetime:
    return parse_layout(value, LayoutPattern.compile(layout), zone).moment


class TestFields:
    def test_rfc3339(self) -> None:
        moment = _parse("2025-07-08T12:34:56Z", "2006-01-02T15:04:05Z07:00")
        assert moment == datetime(2025, 7, 8, 12, 34, 56, tzinfo=UTC)
        assert moment.tzinfo is UTC

    def test_missing_date_defaults_to_2000(self) -> None:
        moment = _parse("15:04:05", "15:04:05")
        assert (moment.year, moment.month, moment.day) == (2000, 1, 1)
        assert (moment.hour, moment.minute, moment.second) == (15, 4, 5)

    def test_missing_time_defaults_to_midnight(self) -> None:
        moment = _parse("2025-07-08", "2006-01-02")
        assert (moment.hour, moment.minute, moment.second) == (0, 0, 0)

    @pytest.mark.parametrize(("value", "year"), [("68", 2068), ("69", 1969), ("99", 1999), ("00", 2000)])
    def test_two_digit_year_pivot(self, value: str, year: int) -> None:
        assert _parse(f"01/02/{value}", "01/02/06").year == year

    def test_month_names_case_insensitive(self) -> None:
        assert _parse("JULY 8 2025", "January 2 2006").month == 7
        assert _parse("jul 8 2025", "Jan 2 2006").month == 7

    def test_weekday_not_cross_checked(self) -> None:
        # 2025-07-08 is a Tuesday; the weekday is read but not verified.
        moment = _parse("Fri, 08 Jul 2025", "Mon, 02 Jan 2006")
        assert moment.day == 8

    def test_space_padded_day(self) -> None:
        assert _parse("Jul  8 12:00:00", "Jan _2 15:04:05").day == 8
        assert _parse("Jul 18 12:00:00", "Jan _2 15:04:05").day == 18

    def test_space_run_matches_several_spaces(self) -> None:
        assert _parse("2025-07-08   12:00", "2006-01-02 15:04").hour == 12

    def test_day_of_year(self) -> None:
        moment = _parse("2024.060", "2006.002")
        assert (moment.month, moment.day) == (2, 29)

    def test_day_of_year_out_of_range(self) -> None:
        with pytest.raises(LayoutMismatch):
            _parse("2025.366", "2006.002")

    @pytest.mark.parametrize(
        ("value", "hour"),
        [("12:00AM", 0), ("12:00PM", 12), ("3:04PM", 15), ("3:04am", 3)],
    )
    def test_meridiem(self, value: str, hour: int) -> None:
        assert _parse(value, "3:04PM").hour == hour


class TestFractions:
    def test_fixed_fraction(self) -> None:
        moment = parse_layout("12:00:00.123", LayoutPattern.compile("15:04:05.000"), UTC)
        assert moment.nanosecond == 123_000_000

    def test_fixed_fraction_requires_digits(self) -> None:
        with pytest.raises(LayoutMismatch):
            _parse("12:00:00.12", "15:04:05.000")

    def test_optional_fraction_absent(self) -> None:
        assert _parse("12:00:00", "15:04:05.999999999").microsecond == 0

    def test_optional_fraction_keeps_nanoseconds(self) -> None:
        instant = parse_layout("12:00:00.123456789", LayoutPattern.compile("15:04:05.999999999"), UTC)
        assert instant.moment.microsecond == 123456
        assert instant.nanos == 789

    def test_fraction_after_seconds_without_token(self) -> None:
        instant = parse_layout("12:00:00.5", LayoutPattern.compile("15:04:05"), UTC)
        assert instant.nanosecond == 500_000_000


class TestRejections:
    @pytest.mark.parametrize(
        ("value", "layout"),
        [
            ("2025-13-01", "2006-01-02"),
            ("2025-02-30", "2006-02-01"),
            ("2025-02-30", "2006-01-02"),
            ("25:00:00", "15:04:05"),
            ("12:60:00", "15:04:05"),
            ("2025-07-08 extra", "2006-01-02"),
            ("2025/07/08", "2006-01-02"),
            ("Foo 8 2025", "Jan 2 2006"),
            ("12:00XM", "3:04PM"),
            ("2025-7-08", "2006-01-02"),
        ],
    )
    def test_mismatch(self, value: str, layout: str) -> None:
        with pytest.raises(LayoutMismatch):
            _parse(value, layout)


class TestZonePrecedence:
    def test_embedded_offset_wins(self) -> None:
        moment = _parse("2025-07-08T12:00:00+02:00", "2006-01-02T15:04:05Z07:00", load_zone("America/New_York"))
        assert offset_seconds(moment) == 7200
        assert zone_abbreviation(moment) == ""

    def test_offset_matching_base_keeps_base_zone(self, new_york: tzinfo) -> None:
        moment = _parse("2025-06-07T12:34:56-04:00", "2006-01-02T15:04:05Z07:00", new_york)
        assert moment.tzinfo is new_york
        assert zone_abbreviation(moment) == "EDT"

    def test_z_is_utc(self, new_york: tzinfo) -> None:
        assert _parse("2025-06-07T12:34:56Z", "2006-01-02T15:04:05Z07:00", new_york).tzinfo is UTC

    def test_no_zone_uses_base(self, new_york: tzinfo) -> None:
        moment = _parse("2025-06-07 12:34:56", "2006-01-02 15:04:05", new_york)
        assert moment.tzinfo is new_york
        assert moment.hour == 12

    def test_abbreviation_used_by_base_zone(self, new_york: tzinfo) -> None:
        moment = _parse("Sat, 07 Jun 2025 12:34:56 EDT", "Mon, 02 Jan 2006 15:04:05 MST", new_york)
        assert moment.tzinfo is new_york

    def test_known_abbreviation_gets_table_offset(self) -> None:
        moment = _parse("Sat, 07 Jun 2025 12:34:56 MDT", "Mon, 02 Jan 2006 15:04:05 MST")
        assert zone_abbreviation(moment) == "MDT"
        assert offset_seconds(moment) == -6 * 3600
        assert moment.hour == 12

    def test_unknown_abbreviation_is_zero_offset(self) -> None:
        moment = _parse("12:00 XYZ", "15:04 MST")
        assert zone_abbreviation(moment) == "XYZ"
        assert offset_seconds(moment) == 0

    def test_utc_abbreviation(self) -> None:
        assert _parse("12:00 UTC", "15:04 MST", load_zone("Asia/Tokyo")).tzinfo is UTC

    @pytest.mark.parametrize(
        ("name", "value"),
        [("America/Sao_Paulo", "-03"), ("Asia/Colombo", "+0530")],
    )
    def test_numeric_abbreviation_of_base_zone(self, name: str, value: str) -> None:
        zone = load_zone(name)
        moment = _parse(f"Tue Jul  8 12:34:56 {value} 2025", "Mon Jan _2 15:04:05 MST 2006", zone)
        assert moment.tzinfo is zone
        assert moment.hour == 12

    def test_numeric_abbreviation_foreign_to_base(self) -> None:
        moment = _parse("12:00 +0530", "15:04 MST")
        assert moment.utcoffset() == timedelta(hours=5, minutes=30)
        assert zone_abbreviation(moment) == ""

    def test_numeric_abbreviation_out_of_range(self) -> None:
        with pytest.raises(LayoutMismatch):
            _parse("12:00 +2500", "15:04 MST")

    def test_numeric_offset_with_abbreviation(self) -> None:
        moment = _parse("2025-07-08 12:00:00 +0530 IST", "2006-01-02 15:04:05 -0700 MST")
        assert moment.utcoffset() == timedelta(hours=5, minutes=30)
        assert zone_abbreviation(moment) == "IST"

    @pytest.mark.parametrize(
        ("value", "layout", "seconds"),
        [
            ("+0530", "-0700", 19800),
            ("-07", "-07", -25200),
            ("+01:02:03", "-07:00:00", 3723),
            ("-010203", "-070000", -3723),
        ],
    )
    def test_offset_shapes(self, value: str, layout: str, seconds: int) -> None:
        moment = _parse(f"12:00 {value}", f"15:04 {layout}")
        assert moment.utcoffset() == timedelta(seconds=seconds)

    def test_offset_out_of_range(self) -> None:
        with pytest.raises(LayoutMismatch):
            _parse("12:00 +2500", "15:04 -0700")

    def test_z_not_accepted_by_plain_offset(self) -> None:
        with pytest.raises(LayoutMismatch):
            _parse("12:00 Z", "15:04 -0700")

    def test_fixed_zone_equality(self) -> None:
        moment = _parse("2025-07-08T12:00:00-05:00", "2006-01-02T15:04:05Z07:00")
        assert moment == datetime(2025, 7, 8, 17, tzinfo=timezone.utc)
