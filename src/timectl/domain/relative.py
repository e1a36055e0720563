"""Natural-language relative time expressions.

Parsing and interpretation are separate stages. :func:`parse_expression`
turns a phrase into a :class:`RelativeExpression` (a date term plus an
optional clock time); :func:`resolve_expression` evaluates it against a
reference instant. Supported shapes::

    now | today | yesterday | tomorrow
    <n> <unit> ago | <n> <unit> from now | in <n> <unit> | +<n> <unit>
    last|next <weekday | month name | day | week | month | year | ...>
    <weekday> | <month name> [<day>[st|nd|rd|th]] [<year>] | <day> [of] <month name>
    ... [at] <clock>    e.g. "at 5:30pm", "at noon", "22:45"
    <clock>             alone, on the reference date

Calendar rules:

- Day, week, month and year moves land on the start of the day unless a
  clock time is given; second, minute and hour moves are exact and keep
  the time of day.
- Month and year moves clamp to the last valid day of the target month
  (Jan 31 + 1 month is Feb 28, or Feb 29 in a leap year).
- ``last``/``next`` exclude the reference date (or month) itself; a bare
  weekday means the most recent one on or before the reference date.

The result always carries the reference instant's zone.
"""

from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from enum import StrEnum

from timectl.domain.errors import InvalidRelativeTimeError
from timectl.domain.instant import Instant
from timectl.domain.layouts import LONG_MONTH_NAMES, LONG_WEEKDAY_NAMES
from timectl.domain.zones import normalize

logger = logging.getLogger(__name__)


class Unit(StrEnum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


EXACT_UNITS: dict[Unit, int] = {
    Unit.SECOND: 1_000_000_000,
    Unit.MINUTE: 60_000_000_000,
    Unit.HOUR: 3_600_000_000_000,
}

_UNIT_WORDS: dict[str, Unit] = {
    "s": Unit.SECOND,
    "sec": Unit.SECOND,
    "secs": Unit.SECOND,
    "second": Unit.SECOND,
    "seconds": Unit.SECOND,
    "min": Unit.MINUTE,
    "mins": Unit.MINUTE,
    "minute": Unit.MINUTE,
    "minutes": Unit.MINUTE,
    "h": Unit.HOUR,
    "hr": Unit.HOUR,
    "hrs": Unit.HOUR,
    "hour": Unit.HOUR,
    "hours": Unit.HOUR,
    "day": Unit.DAY,
    "days": Unit.DAY,
    "week": Unit.WEEK,
    "weeks": Unit.WEEK,
    "month": Unit.MONTH,
    "months": Unit.MONTH,
    "year": Unit.YEAR,
    "years": Unit.YEAR,
}

_CARDINALS: dict[str, int] = {
    word: value
    for value, word in enumerate(
        (
            "zero one two three four five six seven eight nine ten eleven twelve "
            "thirteen fourteen fifteen sixteen seventeen eighteen nineteen twenty"
        ).split()
    )
}
_CARDINALS.update({"a": 1, "an": 1})

# Weekday numbers follow date.weekday(): Monday is 0.
_WEEKDAYS: dict[str, int] = {
    **{name.casefold(): index for index, name in enumerate(LONG_WEEKDAY_NAMES)},
    **{name.casefold()[:3]: index for index, name in enumerate(LONG_WEEKDAY_NAMES)},
    "tues": 1,
    "weds": 2,
    "thur": 3,
    "thurs": 3,
}

_MONTHS: dict[str, int] = {
    **{name.casefold(): index for index, name in enumerate(LONG_MONTH_NAMES, start=1)},
    **{name.casefold()[:3]: index for index, name in enumerate(LONG_MONTH_NAMES, start=1)},
    "sept": 9,
}

_ANCHORS = frozenset({"now", "today", "yesterday", "tomorrow"})
_DIRECTIONS = {"last": -1, "previous": -1, "prev": -1, "next": 1}
_MERIDIEMS = frozenset({"am", "pm"})
_ORDINALS = frozenset({"st", "nd", "rd", "th"})

_TOKEN = re.compile(
    r"\s+|,"
    r"|(?P<clock>[0-9]{1,2}:[0-9]{2}(?::[0-9]{2})?)"
    r"|(?P<number>[0-9]+)"
    r"|(?P<word>[a-z]+)"
    r"|(?P<sign>[+-])"
)


# -- syntax tree ---------------------------------------------------------


@dataclass(frozen=True)
class ClockTime:
    """Time of day on the 24-hour clock."""

    hour: int
    minute: int = 0
    second: int = 0

    def as_time(self) -> time:
        return time(self.hour, self.minute, self.second)


@dataclass(frozen=True)
class Anchor:
    """``now``, ``today``, ``yesterday`` or ``tomorrow``."""

    name: str


@dataclass(frozen=True)
class Offset:
    """Signed magnitude of a unit: ``3 days ago`` is ``Offset(-3, DAY)``."""

    amount: int
    unit: Unit


@dataclass(frozen=True)
class UnitShift:
    """``last week`` / ``next year``: one unit back or forward."""

    direction: int
    unit: Unit


@dataclass(frozen=True)
class WeekdayShift:
    """``last sunday`` / ``next friday``; weekday is Monday=0."""

    direction: int
    weekday: int


@dataclass(frozen=True)
class MonthShift:
    """``last january`` / ``next march``: first day of that month."""

    direction: int
    month: int


@dataclass(frozen=True)
class Weekday:
    """A bare weekday: the most recent one on or before the reference date."""

    weekday: int


@dataclass(frozen=True)
class MonthDay:
    """``December 25th``; year defaults to the reference year, day to 1."""

    month: int
    day: int = 1
    year: int | None = None


DateTerm = Anchor | Offset | UnitShift | WeekdayShift | MonthShift | Weekday | MonthDay


@dataclass(frozen=True)
class RelativeExpression:
    """A date term, a clock time, or both. At least one is set."""

    date: DateTerm | None = None
    clock: ClockTime | None = None


# -- parsing -------------------------------------------------------------


class _SyntaxError(Exception):
    pass


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    folded = text.casefold()
    position = 0
    while position < len(folded):
        match = _TOKEN.match(folded, position)
        if match is None:
            raise _SyntaxError(f"unexpected character {folded[position]!r}")
        if match.lastgroup is not None:
            tokens.append((match.lastgroup, match.group()))
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[tuple[str, str]]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self, ahead: int = 0) -> tuple[str, str]:
        index = self.pos + ahead
        return self.tokens[index] if index < len(self.tokens) else ("", "")

    def take(self) -> str:
        kind, text = self.peek()
        if not kind:
            raise _SyntaxError("unexpected end of expression")
        self.pos += 1
        return text

    def expect(self, word: str) -> None:
        if self.take() != word:
            raise _SyntaxError(f"expected {word!r}")

    @property
    def done(self) -> bool:
        return self.pos >= len(self.tokens)

    def expression(self) -> RelativeExpression:
        term = self.date_term()
        clock = self.clock(required=term is None)
        if not self.done:
            raise _SyntaxError(f"unexpected {self.peek()[1]!r}")
        return RelativeExpression(term, clock)

    # date terms

    def magnitude(self) -> int | None:
        kind, text = self.peek()
        if kind == "number":
            return int(text)
        if kind == "word" and text in _CARDINALS:
            return _CARDINALS[text]
        return None

    def unit(self) -> Unit:
        text = self.take()
        if text not in _UNIT_WORDS:
            raise _SyntaxError(f"unknown unit {text!r}")
        return _UNIT_WORDS[text]

    def date_term(self) -> DateTerm | None:
        kind, text = self.peek()
        if kind == "word" and text in _ANCHORS:
            self.pos += 1
            return Anchor(text)
        if kind == "word" and text in _DIRECTIONS:
            self.pos += 1
            return self.shift(_DIRECTIONS[text])
        if kind == "word" and text == "in":
            self.pos += 1
            amount = self.magnitude()
            if amount is None:
                raise _SyntaxError("expected a number after 'in'")
            self.pos += 1
            return Offset(amount, self.unit())
        if kind == "sign":
            self.pos += 1
            sign = -1 if text == "-" else 1
            amount = self.magnitude()
            if amount is None:
                raise _SyntaxError("expected a number after sign")
            self.pos += 1
            return Offset(sign * amount, self.unit())
        if kind == "word" and text in _WEEKDAYS:
            self.pos += 1
            return Weekday(_WEEKDAYS[text])
        if kind == "word" and text in _MONTHS:
            self.pos += 1
            return self.month_day(_MONTHS[text])

        amount = self.magnitude()
        if amount is not None:
            following = self.peek(1)[1]
            if following in _UNIT_WORDS:
                self.pos += 1
                return self.offset(amount)
            if kind == "number" and (following in _ORDINALS or following in _MONTHS or following == "of"):
                return self.day_month()
        return None

    def offset(self, amount: int) -> Offset:
        unit = self.unit()
        word = self.take()
        if word == "ago":
            return Offset(-amount, unit)
        if word in ("from", "after"):
            self.expect("now")
            return Offset(amount, unit)
        if word in ("later", "hence"):
            return Offset(amount, unit)
        raise _SyntaxError(f"expected 'ago' or 'from now', got {word!r}")

    def shift(self, direction: int) -> DateTerm:
        text = self.take()
        if text in _WEEKDAYS:
            return WeekdayShift(direction, _WEEKDAYS[text])
        if text in _MONTHS:
            return MonthShift(direction, _MONTHS[text])
        if text in _UNIT_WORDS:
            return UnitShift(direction, _UNIT_WORDS[text])
        raise _SyntaxError(f"cannot shift by {text!r}")

    def ordinal_day(self) -> int:
        day = int(self.take())
        if self.peek()[1] in _ORDINALS:
            self.pos += 1
        if not 1 <= day <= 31:
            raise _SyntaxError(f"day out of range: {day}")
        return day

    def year(self) -> int | None:
        kind, text = self.peek()
        if kind == "number" and len(text) == 4:
            self.pos += 1
            return int(text)
        return None

    def month_day(self, month: int) -> MonthDay:
        kind, text = self.peek()
        # "jan 2" is a day; "jan 2pm" and "jan 2:30" are clock times.
        if kind == "number" and len(text) <= 2 and self.peek(1)[1] not in _MERIDIEMS:
            return MonthDay(month, self.ordinal_day(), self.year())
        return MonthDay(month, 1, self.year())

    def day_month(self) -> MonthDay:
        day = self.ordinal_day()
        if self.peek()[1] == "of":
            self.pos += 1
        text = self.take()
        if text not in _MONTHS:
            raise _SyntaxError(f"expected a month name, got {text!r}")
        return MonthDay(_MONTHS[text], day, self.year())

    # clock times

    def clock(self, *, required: bool) -> ClockTime | None:
        explicit = self.peek()[1] == "at"
        if explicit:
            self.pos += 1
        kind, text = self.peek()
        if kind == "word" and text == "noon":
            self.pos += 1
            return ClockTime(12)
        if kind == "word" and text == "midnight":
            self.pos += 1
            return ClockTime(0)

        meridiem = self.peek(1)[1] if self.peek(1)[1] in _MERIDIEMS else ""
        if kind == "clock" or (kind == "number" and (meridiem or explicit)):
            self.pos += 1
            parts = [int(part) for part in text.split(":")]
            hour, minute, second = (parts + [0, 0])[:3]
            if meridiem:
                self.pos += 1
                if not 1 <= hour <= 12:
                    raise _SyntaxError(f"hour out of range for {meridiem}: {hour}")
                hour = hour % 12 + (12 if meridiem == "pm" else 0)
            if hour > 23 or minute > 59 or second > 59:
                raise _SyntaxError(f"invalid clock time {text!r}")
            return ClockTime(hour, minute, second)

        if explicit or required:
            raise _SyntaxError("expected a clock time")
        return None


def parse_expression(text: str) -> RelativeExpression:
    """Parse *text* into a :class:`RelativeExpression`.

    Raises InvalidRelativeTimeError when the phrase fits no known shape.
    """
    try:
        expression = _Parser(_tokenize(text)).expression()
    except _SyntaxError as exc:
        logger.debug("Relative expression %r rejected: %s", text, exc)
        raise InvalidRelativeTimeError(f"Unable to parse relative time: {text}") from exc
    logger.debug("Parsed relative expression %r as %r", text, expression)
    return expression


# -- interpretation ------------------------------------------------------


def add_months(day: date, months: int) -> date:
    """Move *day* by whole calendar months, clamping to the month's end."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def _at(day: date, clock: ClockTime | None, zone: tzinfo) -> Instant:
    wall = datetime.combine(day, clock.as_time() if clock else time())
    return Instant(normalize(wall.replace(tzinfo=zone)))


def _calendar_shift(day: date, unit: Unit, amount: int) -> date:
    if unit is Unit.DAY:
        return day + timedelta(days=amount)
    if unit is Unit.WEEK:
        return day + timedelta(weeks=amount)
    if unit is Unit.MONTH:
        return add_months(day, amount)
    return add_months(day, 12 * amount)


def _move(reference: Instant, unit: Unit, amount: int, clock: ClockTime | None) -> Instant:
    if unit in EXACT_UNITS:
        moved = reference.shift(amount * EXACT_UNITS[unit])
        if clock is None:
            return moved
        return _at(moved.moment.date(), clock, reference.zone)
    return _at(_calendar_shift(reference.moment.date(), unit, amount), clock, reference.zone)


def _target_day(term: DateTerm, today: date) -> date:
    if isinstance(term, WeekdayShift):
        if term.direction < 0:
            return today - timedelta(days=(today.weekday() - term.weekday) % 7 or 7)
        return today + timedelta(days=(term.weekday - today.weekday()) % 7 or 7)
    if isinstance(term, Weekday):
        return today - timedelta(days=(today.weekday() - term.weekday) % 7)
    if isinstance(term, MonthShift):
        if term.direction < 0:
            year = today.year if term.month < today.month else today.year - 1
        else:
            year = today.year if term.month > today.month else today.year + 1
        return date(year, term.month, 1)
    if isinstance(term, MonthDay):
        return date(term.year or today.year, term.month, term.day)
    raise TypeError(f"not a calendar term: {term!r}")


def resolve_expression(expression: RelativeExpression, reference: Instant) -> Instant:
    """Evaluate *expression* against *reference*, in the reference's zone.

    Raises ValueError or OverflowError when the target date does not
    exist or leaves the supported range.
    """
    term, clock = expression.date, expression.clock
    zone = reference.zone
    today = reference.moment.date()

    if term is None:
        return _at(today, clock, zone)
    if isinstance(term, Anchor):
        if term.name == "now":
            return reference if clock is None else _at(today, clock, zone)
        days = {"today": 0, "yesterday": -1, "tomorrow": 1}[term.name]
        return _at(today + timedelta(days=days), clock, zone)
    if isinstance(term, Offset):
        return _move(reference, term.unit, term.amount, clock)
    if isinstance(term, UnitShift):
        return _move(reference, term.unit, term.direction, clock)
    return _at(_target_day(term, today), clock, zone)


def resolve_relative(text: str, reference: Instant) -> Instant:
    """Parse and evaluate *text* relative to *reference*.

    Raises InvalidRelativeTimeError for an unknown phrase or a date that
    does not exist (e.g. ``February 30``).
    """
    expression = parse_expression(text)
    try:
        return resolve_expression(expression, reference)
    except (ValueError, OverflowError) as exc:
        logger.debug("Relative expression %r has no valid result: %s", text, exc)
        raise InvalidRelativeTimeError(f"Unable to parse relative time: {text}") from exc
