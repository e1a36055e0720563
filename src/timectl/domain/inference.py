"""Heuristic layout inference.

Given a raw time string with no declared layout, :func:`infer_layout`
scans it left to right, classifies each run of digits or letters as a
date/time component, and keeps everything else as literal separators.
The result is a layout string in reference-time notation.

Ambiguity rules for all-numeric dates (``a/b/c``, ``a-b-c``, ``a.b.c``):

- A 4-digit first part means year-month-day.
- Otherwise month-day-year, unless the first part cannot be a month
  (> 12) while the second can, which means day-month-year.

Inference is a pure function of the input, and the inferred layout is
always checked by parsing the input with it before being returned.
"""

from __future__ import annotations

import logging
import re

from timectl.domain.errors import InvalidFormatError
from timectl.domain.layouts import (
    LONG_MONTH_NAMES,
    LONG_WEEKDAY_NAMES,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    LayoutPattern,
    TokenKind,
    tokenize,
)
from timectl.domain.parsing import LayoutMismatch, parse_layout
from timectl.domain.zones import ABBREVIATIONS, UTC

logger = logging.getLogger(__name__)

_LEXEME = re.compile(r"[0-9]+|[A-Za-z]+|\s+|.", re.DOTALL)
_ORDINALS = frozenset({"st", "nd", "rd", "th"})
_MERIDIEMS = frozenset({"am", "pm"})
_DATE_SEPARATORS = frozenset({"-", "/", "."})
_DAY_TOKENS = frozenset({"2", "02", "_2"})

_MONTHS = {name.casefold(): name for name in LONG_MONTH_NAMES}
_MONTH_ABBREVIATIONS = {name.casefold(): name for name in MONTH_NAMES}
_WEEKDAYS = {name.casefold(): name for name in LONG_WEEKDAY_NAMES}
_WEEKDAY_ABBREVIATIONS = {name.casefold(): name for name in WEEKDAY_NAMES}


class _Unrecognized(Exception):
    """A run of characters fits no component and cannot be literal."""


def _is_digits(lexeme: str) -> bool:
    return lexeme.isascii() and lexeme.isdigit()


def _is_month_name(lexeme: str) -> bool:
    folded = lexeme.casefold()
    return folded in _MONTHS or folded in _MONTH_ABBREVIATIONS


class _Scanner:
    """Single-use left-to-right classifier over the lexemes of one input."""

    def __init__(self, value: str) -> None:
        self.lexemes: list[str] = _LEXEME.findall(value)
        self.pos = 0
        self.pieces: list[str] = []
        self.found = 0
        self.year = self.month = self.day = self.weekday = False
        self.hour = self.minute = self.second = False
        self.meridiem = self.offset = self.abbreviation = False
        self.hour_piece = -1
        self.hour_width = 0
        self.last = ""

    def peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.lexemes[index] if index < len(self.lexemes) else ""

    def emit(self, piece: str, field: str, consumed: int = 1) -> None:
        self.pieces.append(piece)
        if field != "weekday":
            # A weekday alone does not pin down a date.
            self.found += 1
        self.last = field
        self.pos += consumed

    def literal(self, text: str) -> None:
        if any(token.kind is not TokenKind.LITERAL for token in tokenize(text)):
            raise _Unrecognized(text)
        self.pieces.append(text)
        self.pos += 1

    @property
    def has_date(self) -> bool:
        return self.year or self.month or self.day

    def run(self) -> str:
        while self.pos < len(self.lexemes):
            lexeme = self.peek()
            if _is_digits(lexeme):
                self.digits(lexeme)
            elif lexeme.isascii() and lexeme.isalpha():
                self.word(lexeme)
            else:
                self.symbol(lexeme)
        return "".join(self.pieces)

    # -- digits ----------------------------------------------------------

    def digits(self, lexeme: str) -> None:
        width = len(lexeme)
        previous = self.lexemes[self.pos - 1] if self.pos else ""

        if self.hour and not self.minute and previous == ":" and width <= 2:
            self.minute = True
            self.emit("04" if width == 2 else "4", "minute")
        elif self.minute and not self.second and previous == ":" and width <= 2:
            self.second = True
            self.emit("05" if width == 2 else "5", "second")
        elif not self.hour and width <= 2 and self._clock_ahead():
            self.hour = True
            self.hour_piece = len(self.pieces)
            self.hour_width = width
            self.emit("15", "hour")
        elif not self.has_date and self.peek(1) in _DATE_SEPARATORS and _is_digits(self.peek(2)):
            self.date_group()
        elif not self.has_date and not self.hour and width == 8:
            self.year = self.month = self.day = True
            self.emit("20060102", "day")
        elif not self.has_date and not self.hour and width == 14:
            self.year = self.month = self.day = True
            self.hour = self.minute = self.second = True
            self.emit("20060102150405", "second")
        elif width == 4 and not self.year:
            self.year = True
            self.emit("2006", "year")
        elif width <= 2 and not self.day and (self.month or self._month_ahead()):
            self.day = True
            if width == 1 and self.pieces and self.pieces[-1].endswith("  "):
                # Space-padded day, as in "Jan  7".
                self.pieces[-1] = self.pieces[-1][:-1]
                self.emit("_2", "day")
            else:
                self.emit("02" if width == 2 else "2", "day")
        elif width == 2 and self.month and self.day and not self.year:
            self.year = True
            self.emit("06", "year")
        else:
            raise _Unrecognized(lexeme)

    def _clock_ahead(self) -> bool:
        if self.peek(1) == ":" and _is_digits(self.peek(2)):
            return True
        if self.peek(1).casefold() in _MERIDIEMS:
            return True
        return self.peek(1).isspace() and self.peek(2).casefold() in _MERIDIEMS

    def _month_ahead(self) -> bool:
        index = self.pos + 1
        while index < len(self.lexemes):
            lexeme = self.lexemes[index]
            if lexeme.isspace() or lexeme in ("-", "/", ".", ","):
                index += 1
                continue
            return _is_month_name(lexeme)
        return False

    def date_group(self) -> None:
        separator = self.peek(1)
        parts = [self.peek()]
        index = self.pos
        while (
            len(parts) < 3
            and index + 2 < len(self.lexemes)
            and self.lexemes[index + 1] == separator
            and _is_digits(self.lexemes[index + 2])
        ):
            parts.append(self.lexemes[index + 2])
            index += 2
        if separator == "." and len(parts) < 3:
            raise _Unrecognized(".".join(parts))

        numbers = [int(part) for part in parts]
        if len(parts[0]) == 4:
            order = ("year", "month", "day")
        elif numbers[0] > 12 and numbers[1] <= 12:
            order = ("day", "month", "year")
        else:
            order = ("month", "day", "year")
        order = order[: len(parts)]

        pieces: list[str] = []
        for field, part, number in zip(order, parts, numbers, strict=True):
            if field == "year":
                if len(part) not in (2, 4):
                    raise _Unrecognized(part)
                pieces.append("2006" if len(part) == 4 else "06")
            elif field == "month":
                if not 1 <= number <= 12 or len(part) > 2:
                    raise _Unrecognized(part)
                pieces.append("01" if len(part) == 2 else "1")
            else:
                if not 1 <= number <= 31 or len(part) > 2:
                    raise _Unrecognized(part)
                pieces.append("02" if len(part) == 2 else "2")
            setattr(self, field, True)

        self.pieces.append(separator.join(pieces))
        self.found += len(parts)
        self.last = order[-1]
        self.pos = index + 1

    # -- words -----------------------------------------------------------

    def word(self, lexeme: str) -> None:
        folded = lexeme.casefold()
        if folded in _MERIDIEMS and self.hour and not self.meridiem:
            self.meridiem = True
            if self.pieces[self.hour_piece] == "15":
                self.pieces[self.hour_piece] = "03" if self.hour_width == 2 else "3"
            self.emit("PM" if lexeme.isupper() else "pm", "meridiem")
        elif lexeme in ("Z", "z") and self.hour and not self.offset:
            self.offset = True
            self.emit("Z07:00", "zone")
        elif not self.weekday and folded in _WEEKDAYS:
            self.weekday = True
            self.emit("Monday", "weekday")
        elif not self.weekday and folded in _WEEKDAY_ABBREVIATIONS:
            self.weekday = True
            self.emit("Mon", "weekday")
        elif not self.month and folded in _MONTHS and len(folded) > 3:
            self.month = True
            self.emit("January", "month")
        elif not self.month and folded in _MONTH_ABBREVIATIONS:
            self.month = True
            self.emit("Jan", "month")
        elif folded in _ORDINALS and self.last == "day" and self.pieces[-1] in _DAY_TOKENS:
            self.pieces.append(lexeme)
            self.pos += 1
        elif self.hour and not self.abbreviation and self._is_abbreviation(lexeme):
            self.abbreviation = True
            self.emit("MST", "zone")
        else:
            self.literal(lexeme)

    @staticmethod
    def _is_abbreviation(lexeme: str) -> bool:
        return lexeme in ABBREVIATIONS or (lexeme.isupper() and 3 <= len(lexeme) <= 5)

    # -- symbols ---------------------------------------------------------

    def symbol(self, lexeme: str) -> None:
        following = self.peek(1)
        if lexeme in "+-" and self.hour and not self.offset and _is_digits(following):
            self.numeric_offset(following)
        elif lexeme in ".," and self.last == "second" and _is_digits(following):
            self.pieces.append(lexeme + "0" * len(following))
            self.found += 1
            self.last = "fraction"
            self.pos += 2
        else:
            self.literal(lexeme)

    def numeric_offset(self, hours: str) -> None:
        if len(hours) == 4:
            piece, consumed = "-0700", 2
        elif len(hours) == 6:
            piece, consumed = "-070000", 2
        elif len(hours) != 2:
            raise _Unrecognized(hours)
        elif self.peek(2) == ":" and len(self.peek(3)) == 2 and _is_digits(self.peek(3)):
            if self.peek(4) == ":" and len(self.peek(5)) == 2 and _is_digits(self.peek(5)):
                piece, consumed = "-07:00:00", 6
            else:
                piece, consumed = "-07:00", 4
        else:
            piece, consumed = "-07", 2
        self.offset = True
        self.emit(piece, "zone", consumed)


def infer_layout(value: str) -> LayoutPattern:
    """Infer the layout that produced *value*.

    Raises InvalidFormatError when no component can be identified, when a
    run of characters fits neither a component nor a literal, or when the
    inferred layout does not parse *value* back.
    """
    error = InvalidFormatError(f"Unable to parse format from input time: {value}")
    scanner = _Scanner(value)
    try:
        layout = scanner.run()
    except _Unrecognized as exc:
        logger.debug("Layout inference stopped at %r in %r", str(exc), value)
        raise error from exc
    if scanner.found == 0:
        raise error

    pattern = LayoutPattern.compile(layout)
    try:
        parse_layout(value, pattern, UTC)
    except LayoutMismatch as exc:
        logger.debug("Inferred layout %r does not parse %r: %s", layout, value, exc)
        raise error from exc
    logger.debug("Inferred layout %r for %r", layout, value)
    return pattern
