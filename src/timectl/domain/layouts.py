"""Layout patterns and the layout registry.

Layouts use reference-time notation: each component is written as it
would appear for the reference instant ``Mon Jan 2 15:04:05 MST 2006``.
``"2006-01-02"`` is a date, ``"3:04PM"`` a 12-hour clock, and anything
that is not a recognized component is literal text.

A :class:`LayoutPattern` is the compiled, immutable token sequence for
one such string. The :class:`LayoutRegistry` maps human-friendly names
(``RFC3339``, ``Kitchen``, ...) to compiled patterns.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from timectl.domain.errors import InvalidFormatError

LONG_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
LONG_WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MONTH_NAMES = tuple(name[:3] for name in LONG_MONTH_NAMES)
WEEKDAY_NAMES = tuple(name[:3] for name in LONG_WEEKDAY_NAMES)


class TokenKind(Enum):
    """Typed components of a layout pattern."""

    LITERAL = "literal"
    LONG_MONTH = "January"
    MONTH = "Jan"
    NUM_MONTH = "1"
    ZERO_MONTH = "01"
    LONG_WEEKDAY = "Monday"
    WEEKDAY = "Mon"
    DAY = "2"
    UNDER_DAY = "_2"
    ZERO_DAY = "02"
    UNDER_YEAR_DAY = "__2"
    ZERO_YEAR_DAY = "002"
    HOUR = "15"
    HOUR12 = "3"
    ZERO_HOUR12 = "03"
    MINUTE = "4"
    ZERO_MINUTE = "04"
    SECOND = "5"
    ZERO_SECOND = "05"
    LONG_YEAR = "2006"
    YEAR = "06"
    PM = "PM"
    LOWER_PM = "pm"
    TZ = "MST"
    ISO8601_TZ = "Z0700"
    ISO8601_SECONDS_TZ = "Z070000"
    ISO8601_SHORT_TZ = "Z07"
    ISO8601_COLON_TZ = "Z07:00"
    ISO8601_COLON_SECONDS_TZ = "Z07:00:00"
    NUM_TZ = "-0700"
    NUM_SECONDS_TZ = "-070000"
    NUM_SHORT_TZ = "-07"
    NUM_COLON_TZ = "-07:00"
    NUM_COLON_SECONDS_TZ = "-07:00:00"
    FRAC_SECOND0 = ".000"
    FRAC_SECOND9 = ".999"


TWELVE_HOUR_KINDS = frozenset({TokenKind.HOUR12, TokenKind.ZERO_HOUR12})
MERIDIEM_KINDS = frozenset({TokenKind.PM, TokenKind.LOWER_PM})
ISO8601_OFFSET_KINDS = frozenset(
    {
        TokenKind.ISO8601_TZ,
        TokenKind.ISO8601_SECONDS_TZ,
        TokenKind.ISO8601_SHORT_TZ,
        TokenKind.ISO8601_COLON_TZ,
        TokenKind.ISO8601_COLON_SECONDS_TZ,
    }
)
FRACTION_KINDS = frozenset({TokenKind.FRAC_SECOND0, TokenKind.FRAC_SECOND9})

# Offset layouts, longest first so that "-07:00:00" is not read as "-07".
_OFFSET_CANDIDATES = (
    TokenKind.NUM_SECONDS_TZ,
    TokenKind.NUM_COLON_SECONDS_TZ,
    TokenKind.NUM_TZ,
    TokenKind.NUM_COLON_TZ,
    TokenKind.NUM_SHORT_TZ,
)
_ISO_OFFSET_CANDIDATES = (
    TokenKind.ISO8601_SECONDS_TZ,
    TokenKind.ISO8601_COLON_SECONDS_TZ,
    TokenKind.ISO8601_TZ,
    TokenKind.ISO8601_COLON_TZ,
    TokenKind.ISO8601_SHORT_TZ,
)
_ZERO_PREFIXED = {
    "1": TokenKind.ZERO_MONTH,
    "2": TokenKind.ZERO_DAY,
    "3": TokenKind.ZERO_HOUR12,
    "4": TokenKind.ZERO_MINUTE,
    "5": TokenKind.ZERO_SECOND,
    "6": TokenKind.YEAR,
}


@dataclass(frozen=True)
class Token:
    """One component of a layout.

    ``text`` is the literal text for LITERAL tokens and the layout
    spelling otherwise. Fraction tokens carry their separator and digit
    count.
    """

    kind: TokenKind
    text: str
    digits: int = 0

    @property
    def separator(self) -> str:
        return self.text[0] if self.kind in FRACTION_KINDS else ""


def _starts_lower(layout: str, i: int) -> bool:
    return i < len(layout) and "a" <= layout[i] <= "z"


def _is_digit(layout: str, i: int) -> bool:
    return i < len(layout) and layout[i].isdigit()


def _match_at(layout: str, i: int) -> Token | None:
    """Return the component token starting at *i*, or None for literal text."""
    rest = layout[i:]
    c = rest[0]
    if c == "J" and rest.startswith("Jan"):
        if rest.startswith("January"):
            return Token(TokenKind.LONG_MONTH, "January")
        if not _starts_lower(layout, i + 3):
            return Token(TokenKind.MONTH, "Jan")
    elif c == "M":
        if rest.startswith("Mon"):
            if rest.startswith("Monday"):
                return Token(TokenKind.LONG_WEEKDAY, "Monday")
            if not _starts_lower(layout, i + 3):
                return Token(TokenKind.WEEKDAY, "Mon")
        if rest.startswith("MST"):
            return Token(TokenKind.TZ, "MST")
    elif c == "0":
        if len(rest) >= 2 and rest[1] in _ZERO_PREFIXED:
            return Token(_ZERO_PREFIXED[rest[1]], rest[:2])
        if rest.startswith("002"):
            return Token(TokenKind.ZERO_YEAR_DAY, "002")
    elif c == "1":
        if rest.startswith("15"):
            return Token(TokenKind.HOUR, "15")
        return Token(TokenKind.NUM_MONTH, "1")
    elif c == "2":
        if rest.startswith("2006"):
            return Token(TokenKind.LONG_YEAR, "2006")
        return Token(TokenKind.DAY, "2")
    elif c == "_":
        if rest.startswith("_2") and not rest.startswith("_2006"):
            return Token(TokenKind.UNDER_DAY, "_2")
        if rest.startswith("__2"):
            return Token(TokenKind.UNDER_YEAR_DAY, "__2")
    elif c == "3":
        return Token(TokenKind.HOUR12, "3")
    elif c == "4":
        return Token(TokenKind.MINUTE, "4")
    elif c == "5":
        return Token(TokenKind.SECOND, "5")
    elif c == "P" and rest.startswith("PM"):
        return Token(TokenKind.PM, "PM")
    elif c == "p" and rest.startswith("pm"):
        return Token(TokenKind.LOWER_PM, "pm")
    elif c == "-":
        for kind in _OFFSET_CANDIDATES:
            if rest.startswith(kind.value):
                return Token(kind, kind.value)
    elif c == "Z":
        for kind in _ISO_OFFSET_CANDIDATES:
            if rest.startswith(kind.value):
                return Token(kind, kind.value)
    elif c in ".," and len(rest) >= 2 and rest[1] in "09":
        j = 1
        while j < len(rest) and rest[j] == rest[1]:
            j += 1
        if not _is_digit(layout, i + j):
            kind = TokenKind.FRAC_SECOND0 if rest[1] == "0" else TokenKind.FRAC_SECOND9
            return Token(kind, rest[:j], digits=j - 1)
    return None


def tokenize(layout: str) -> tuple[Token, ...]:
    """Split a layout string into component and literal tokens."""
    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    while i < len(layout):
        token = _match_at(layout, i)
        if token is None:
            literal.append(layout[i])
            i += 1
            continue
        if literal:
            tokens.append(Token(TokenKind.LITERAL, "".join(literal)))
            literal.clear()
        tokens.append(token)
        i += len(token.text)
    if literal:
        tokens.append(Token(TokenKind.LITERAL, "".join(literal)))
    return tuple(tokens)


@dataclass(frozen=True)
class LayoutPattern:
    """Compiled, immutable layout.

    Build with :meth:`compile`; the constructor does not validate.
    """

    source: str
    tokens: tuple[Token, ...]

    @classmethod
    def compile(cls, source: str) -> LayoutPattern:
        """Tokenize *source*, rejecting a 12-hour clock without an AM/PM marker."""
        tokens = tokenize(source)
        kinds = {token.kind for token in tokens}
        if kinds & TWELVE_HOUR_KINDS and not kinds & MERIDIEM_KINDS:
            raise InvalidFormatError(f"12-hour clock without AM/PM marker in layout: {source}")
        return cls(source, tokens)


STANDARD_LAYOUTS: Mapping[str, str] = MappingProxyType(
    {
        "ANSIC": "Mon Jan _2 15:04:05 2006",
        "UnixDate": "Mon Jan _2 15:04:05 MST 2006",
        "RubyDate": "Mon Jan 02 15:04:05 -0700 2006",
        "RFC822": "02 Jan 06 15:04 MST",
        "RFC822Z": "02 Jan 06 15:04 -0700",
        "RFC850": "Monday, 02-Jan-06 15:04:05 MST",
        "RFC1123": "Mon, 02 Jan 2006 15:04:05 MST",
        "RFC1123Z": "Mon, 02 Jan 2006 15:04:05 -0700",
        "RFC3339": "2006-01-02T15:04:05Z07:00",
        "RFC3339Nano": "2006-01-02T15:04:05.999999999Z07:00",
        "Kitchen": "3:04PM",
        "Stamp": "Jan _2 15:04:05",
        "StampMilli": "Jan _2 15:04:05.000",
        "StampMicro": "Jan _2 15:04:05.000000",
        "StampNano": "Jan _2 15:04:05.000000000",
        "DateTime": "2006-01-02 15:04:05",
        "DateOnly": "2006-01-02",
        "TimeOnly": "15:04:05",
    }
)


class LayoutRegistry:
    """Read-only mapping of layout names to compiled patterns.

    Lookups try the exact name first, then a case-insensitive match so
    spellings such as ``Unixdate`` or ``RFC822z`` resolve too.
    """

    def __init__(self, layouts: Mapping[str, str] = STANDARD_LAYOUTS) -> None:
        self._patterns: Mapping[str, LayoutPattern] = MappingProxyType(
            {name: LayoutPattern.compile(source) for name, source in layouts.items()}
        )
        self._folded = {name.casefold(): name for name in self._patterns}

    def resolve(self, name: str) -> LayoutPattern | None:
        pattern = self._patterns.get(name)
        if pattern is None:
            canonical = self._folded.get(name.casefold())
            if canonical is not None:
                pattern = self._patterns[canonical]
        return pattern

    def names(self) -> list[str]:
        return list(self._patterns)

    def items(self) -> Iterator[tuple[str, LayoutPattern]]:
        yield from self._patterns.items()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __len__(self) -> int:
        return len(self._patterns)


def resolve_layout(name: str, registry: LayoutRegistry) -> LayoutPattern:
    """Registry pattern for *name*, or *name* compiled as a literal layout."""
    pattern = registry.resolve(name)
    if pattern is None:
        pattern = LayoutPattern.compile(name)
    return pattern
