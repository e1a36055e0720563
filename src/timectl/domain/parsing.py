"""Parse text against a committed :class:`LayoutPattern`.

Literal text must match exactly (a run of spaces in the layout matches
one or more spaces in the value), every component is range-checked, and
trailing unparsed text is an error. Calendar fields absent from the
layout default to 2000-01-01; time fields default to midnight.

Zone precedence is decided here: an offset or abbreviation embedded in
the value wins over the base zone, except that an embedded zone the base
zone itself uses at that wall time keeps the base zone.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

from timectl.domain.instant import Instant
from timectl.domain.layouts import (
    FRACTION_KINDS,
    ISO8601_OFFSET_KINDS,
    LONG_MONTH_NAMES,
    LONG_WEEKDAY_NAMES,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    LayoutPattern,
    Token,
    TokenKind,
)
from timectl.domain.zones import (
    ABBREVIATIONS,
    UTC,
    fixed_zone,
    normalize,
    offset_seconds,
    zone_abbreviation,
)

DEFAULT_YEAR = 2000

_OFFSET_PATTERNS: dict[TokenKind, re.Pattern[str]] = {
    TokenKind.NUM_TZ: re.compile(r"([+-])(\d{2})(\d{2})"),
    TokenKind.ISO8601_TZ: re.compile(r"([+-])(\d{2})(\d{2})"),
    TokenKind.NUM_COLON_TZ: re.compile(r"([+-])(\d{2}):(\d{2})"),
    TokenKind.ISO8601_COLON_TZ: re.compile(r"([+-])(\d{2}):(\d{2})"),
    TokenKind.NUM_SHORT_TZ: re.compile(r"([+-])(\d{2})"),
    TokenKind.ISO8601_SHORT_TZ: re.compile(r"([+-])(\d{2})"),
    TokenKind.NUM_SECONDS_TZ: re.compile(r"([+-])(\d{2})(\d{2})(\d{2})"),
    TokenKind.ISO8601_SECONDS_TZ: re.compile(r"([+-])(\d{2})(\d{2})(\d{2})"),
    TokenKind.NUM_COLON_SECONDS_TZ: re.compile(r"([+-])(\d{2}):(\d{2}):(\d{2})"),
    TokenKind.ISO8601_COLON_SECONDS_TZ: re.compile(r"([+-])(\d{2}):(\d{2}):(\d{2})"),
}
_ABBREVIATION = re.compile(r"[A-Z]{3,5}")
# Zones with no letter abbreviation (America/Sao_Paulo) render "-03" here.
_NUMERIC_ABBREVIATION = re.compile(r"([+-])(\d{2})(\d{2})?")
_DIGITS = re.compile(r"\d+")


class LayoutMismatch(ValueError):
    """The value does not fit the layout."""


@dataclass
class _Fields:
    year: int | None = None
    month: int | None = None
    day: int | None = None
    yday: int | None = None
    hour: int = 0
    minute: int = 0
    second: int = 0
    nanosecond: int = 0
    pm: bool | None = None
    utc: bool = False
    offset: int | None = None
    zone_name: str = ""


def _number(value: str, *, fixed: bool, width: int = 2) -> tuple[int, str]:
    """Read a ``width``-digit number, or fewer digits unless *fixed*."""
    match = _DIGITS.match(value)
    if match is None:
        raise LayoutMismatch(f"expected a number at {value!r}")
    digits = match.group()[:width]
    if fixed and len(digits) != width:
        raise LayoutMismatch(f"expected {width} digits at {value!r}")
    return int(digits), value[len(digits) :]


def _ranged(value: int, low: int, high: int, what: str) -> int:
    if not low <= value <= high:
        raise LayoutMismatch(f"{what} out of range: {value}")
    return value


def _lookup(value: str, names: tuple[str, ...]) -> tuple[int, str]:
    folded = value.casefold()
    for index, name in enumerate(names):
        if folded.startswith(name.casefold()):
            return index, value[len(name) :]
    raise LayoutMismatch(f"unknown name at {value!r}")


def _nanoseconds(digits: str) -> int:
    return int(digits[:9].ljust(9, "0"))


def _skip_literal(value: str, literal: str) -> str:
    while literal:
        if literal[0] == " ":
            if value and value[0] != " ":
                raise LayoutMismatch(f"expected space at {value!r}")
            literal = literal.lstrip(" ")
            value = value.lstrip(" ")
            continue
        if not value or value[0] != literal[0]:
            raise LayoutMismatch(f"expected {literal!r} at {value!r}")
        literal = literal[1:]
        value = value[1:]
    return value


def _fraction(value: str, token: Token) -> tuple[int, str]:
    if token.kind is TokenKind.FRAC_SECOND9:
        if len(value) < 2 or value[0] not in ".," or not value[1].isdigit():
            return 0, value
        match = _DIGITS.match(value, 1)
        assert match is not None
        return _nanoseconds(match.group()), value[match.end() :]
    width = token.digits + 1
    if len(value) < width or value[0] not in ".," or not value[1:width].isdigit():
        raise LayoutMismatch(f"expected {token.digits}-digit fraction at {value!r}")
    return _nanoseconds(value[1:width]), value[width:]


def _offset(value: str, kind: TokenKind, fields: _Fields) -> str:
    if kind in ISO8601_OFFSET_KINDS and value.startswith("Z"):
        fields.utc = True
        return value[1:]
    match = _OFFSET_PATTERNS[kind].match(value)
    if match is None:
        raise LayoutMismatch(f"expected offset at {value!r}")
    sign, *parts = match.groups()
    hours, minutes, seconds = (int(p) for p in [*parts, "0", "0"][:3])
    _ranged(hours, 0, 23, "offset hour")
    _ranged(minutes, 0, 59, "offset minute")
    _ranged(seconds, 0, 59, "offset second")
    total = hours * 3600 + minutes * 60 + seconds
    fields.offset = -total if sign == "-" else total
    return value[match.end() :]


def _parse_token(value: str, token: Token, following: Token | None, fields: _Fields) -> str:
    kind = token.kind
    if kind is TokenKind.YEAR:
        year, value = _number(value, fixed=True)
        fields.year = year + (1900 if year >= 69 else 2000)
    elif kind is TokenKind.LONG_YEAR:
        fields.year, value = _number(value, fixed=True, width=4)
    elif kind in (TokenKind.MONTH, TokenKind.LONG_MONTH):
        names = MONTH_NAMES if kind is TokenKind.MONTH else LONG_MONTH_NAMES
        index, value = _lookup(value, names)
        fields.month = index + 1
    elif kind in (TokenKind.NUM_MONTH, TokenKind.ZERO_MONTH):
        month, value = _number(value, fixed=kind is TokenKind.ZERO_MONTH)
        fields.month = _ranged(month, 1, 12, "month")
    elif kind in (TokenKind.WEEKDAY, TokenKind.LONG_WEEKDAY):
        # Read but not cross-checked against the date.
        names = WEEKDAY_NAMES if kind is TokenKind.WEEKDAY else LONG_WEEKDAY_NAMES
        _, value = _lookup(value, names)
    elif kind in (TokenKind.DAY, TokenKind.UNDER_DAY, TokenKind.ZERO_DAY):
        if kind is TokenKind.UNDER_DAY and value.startswith(" "):
            value = value[1:]
        day, value = _number(value, fixed=kind is TokenKind.ZERO_DAY)
        fields.day = _ranged(day, 1, 31, "day")
    elif kind is TokenKind.UNDER_YEAR_DAY:
        stripped = value.lstrip(" ")
        width = max(3 - (len(value) - len(stripped)), 1)
        yday, value = _number(stripped, fixed=True, width=width)
        fields.yday = _ranged(yday, 1, 366, "day of year")
    elif kind is TokenKind.ZERO_YEAR_DAY:
        yday, value = _number(value, fixed=True, width=3)
        fields.yday = _ranged(yday, 1, 366, "day of year")
    elif kind is TokenKind.HOUR:
        hour, value = _number(value, fixed=False)
        fields.hour = _ranged(hour, 0, 23, "hour")
    elif kind in (TokenKind.HOUR12, TokenKind.ZERO_HOUR12):
        hour, value = _number(value, fixed=kind is TokenKind.ZERO_HOUR12)
        fields.hour = _ranged(hour, 0, 12, "hour")
    elif kind in (TokenKind.MINUTE, TokenKind.ZERO_MINUTE):
        minute, value = _number(value, fixed=kind is TokenKind.ZERO_MINUTE)
        fields.minute = _ranged(minute, 0, 59, "minute")
    elif kind in (TokenKind.SECOND, TokenKind.ZERO_SECOND):
        second, value = _number(value, fixed=kind is TokenKind.ZERO_SECOND)
        fields.second = _ranged(second, 0, 59, "second")
        # A fraction right after the seconds is accepted even when the
        # layout has no fraction token of its own.
        has_fraction = following is not None and following.kind in FRACTION_KINDS
        if not has_fraction and len(value) >= 2 and value[0] in ".," and value[1].isdigit():
            match = _DIGITS.match(value, 1)
            assert match is not None
            fields.nanosecond = _nanoseconds(match.group())
            value = value[match.end() :]
    elif kind in (TokenKind.PM, TokenKind.LOWER_PM):
        marker = value[:2].upper()
        if marker not in ("AM", "PM"):
            raise LayoutMismatch(f"expected AM/PM at {value!r}")
        fields.pm = marker == "PM"
        value = value[2:]
    elif kind is TokenKind.TZ:
        if value.startswith("UTC"):
            fields.zone_name = "UTC"
            return value[3:]
        numeric = _NUMERIC_ABBREVIATION.match(value)
        if numeric is not None:
            sign, hours, minutes = numeric.groups()
            total = _ranged(int(hours), 0, 23, "offset hour") * 3600
            total += _ranged(int(minutes or "0"), 0, 59, "offset minute") * 60
            fields.offset = -total if sign == "-" else total
            return value[numeric.end() :]
        match = _ABBREVIATION.match(value)
        if match is None:
            raise LayoutMismatch(f"expected zone abbreviation at {value!r}")
        fields.zone_name = match.group()
        value = value[match.end() :]
    elif kind in FRACTION_KINDS:
        fields.nanosecond, value = _fraction(value, token)
    else:
        value = _offset(value, kind, fields)
    return value


def _resolve_zone(naive: datetime, fields: _Fields, base_zone: tzinfo) -> tzinfo:
    if fields.utc:
        return UTC
    in_base = naive.replace(tzinfo=base_zone)
    if fields.offset is not None:
        if offset_seconds(in_base) == fields.offset:
            return base_zone
        return fixed_zone(fields.offset, fields.zone_name)
    if fields.zone_name:
        name = fields.zone_name
        if zone_abbreviation(in_base) == name or zone_abbreviation(in_base.replace(fold=1)) == name:
            return base_zone
        return fixed_zone(ABBREVIATIONS.get(name, 0), name)
    return base_zone


def _assemble(fields: _Fields, base_zone: tzinfo) -> Instant:
    year = fields.year if fields.year is not None else DEFAULT_YEAR
    hour = fields.hour
    if fields.pm is True and hour < 12:
        hour += 12
    elif fields.pm is False and hour == 12:
        hour = 0

    month, day = fields.month, fields.day
    if fields.yday is not None:
        days_in_year = 366 if calendar.isleap(year) else 365
        if fields.yday > days_in_year:
            raise LayoutMismatch(f"day of year out of range: {fields.yday}")
        from_yday = date(year, 1, 1) + timedelta(days=fields.yday - 1)
        if (month is not None and month != from_yday.month) or (
            day is not None and day != from_yday.day
        ):
            raise LayoutMismatch("day of year does not match month and day")
        month, day = from_yday.month, from_yday.day
    month = month or 1
    day = day or 1

    if not 1 <= year <= 9999:
        raise LayoutMismatch(f"year out of range: {year}")
    if day > calendar.monthrange(year, month)[1]:
        raise LayoutMismatch(f"day out of range: {year:04d}-{month:02d}-{day:02d}")

    micro, nanos = divmod(fields.nanosecond, 1000)
    naive = datetime(year, month, day, hour, fields.minute, fields.second, micro)
    zone = _resolve_zone(naive, fields, base_zone)
    return Instant(normalize(naive.replace(tzinfo=zone)), nanos)


def parse_layout(value: str, pattern: LayoutPattern, base_zone: tzinfo) -> Instant:
    """Parse *value* with *pattern*, interpreting zone-less fields in *base_zone*.

    Raises LayoutMismatch when the value does not fit.
    """
    fields = _Fields()
    rest = value
    components = [token for token in pattern.tokens if token.kind is not TokenKind.LITERAL]
    position = 0
    for token in pattern.tokens:
        if token.kind is TokenKind.LITERAL:
            rest = _skip_literal(rest, token.text)
            continue
        position += 1
        following = components[position] if position < len(components) else None
        rest = _parse_token(rest, token, following, fields)
    if rest:
        raise LayoutMismatch(f"extra text: {rest!r}")
    return _assemble(fields, base_zone)
