"""Render instants as text.

Rendering is token substitution over a :class:`LayoutPattern`. The
output layout is chosen in this order: an explicit registry name or
literal pattern, then the layout inferred from the text the instant was
parsed from, then the configured default.
"""

from __future__ import annotations

import logging

from timectl.domain.engine import EngineConfig
from timectl.domain.errors import InvalidTimeError
from timectl.domain.inference import infer_layout
from timectl.domain.instant import Instant, ParsedTime
from timectl.domain.layouts import (
    ISO8601_OFFSET_KINDS,
    LONG_MONTH_NAMES,
    LONG_WEEKDAY_NAMES,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    LayoutPattern,
    Token,
    TokenKind,
)
from timectl.domain.zones import load_zone, offset_seconds, zone_abbreviation

logger = logging.getLogger(__name__)

_COLON_KINDS = {
    TokenKind.NUM_COLON_TZ,
    TokenKind.ISO8601_COLON_TZ,
    TokenKind.NUM_COLON_SECONDS_TZ,
    TokenKind.ISO8601_COLON_SECONDS_TZ,
}
_SHORT_KINDS = {TokenKind.NUM_SHORT_TZ, TokenKind.ISO8601_SHORT_TZ}
_SECONDS_KINDS = {
    TokenKind.NUM_SECONDS_TZ,
    TokenKind.ISO8601_SECONDS_TZ,
    TokenKind.NUM_COLON_SECONDS_TZ,
    TokenKind.ISO8601_COLON_SECONDS_TZ,
}


def format_offset(seconds: int, kind: TokenKind = TokenKind.NUM_TZ) -> str:
    """Render a UTC offset in the shape of the offset token *kind*."""
    if kind in ISO8601_OFFSET_KINDS and seconds == 0:
        return "Z"
    sign = "-" if seconds < 0 else "+"
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    sep = ":" if kind in _COLON_KINDS else ""
    text = f"{sign}{hours:02d}"
    if kind not in _SHORT_KINDS:
        text += f"{sep}{minutes:02d}"
    if kind in _SECONDS_KINDS:
        text += f"{sep}{secs:02d}"
    return text


def _fraction(nanosecond: int, token: Token) -> str:
    digits = f"{nanosecond:09d}"[: token.digits]
    if token.kind is TokenKind.FRAC_SECOND9:
        digits = digits.rstrip("0")
        if not digits:
            return ""
    return token.separator + digits


def _render_token(instant: Instant, token: Token) -> str:
    moment = instant.moment
    kind = token.kind
    hour12 = moment.hour % 12 or 12
    simple = {
        TokenKind.LITERAL: token.text,
        TokenKind.YEAR: f"{moment.year % 100:02d}",
        TokenKind.LONG_YEAR: f"{moment.year:04d}",
        TokenKind.MONTH: MONTH_NAMES[moment.month - 1],
        TokenKind.LONG_MONTH: LONG_MONTH_NAMES[moment.month - 1],
        TokenKind.NUM_MONTH: str(moment.month),
        TokenKind.ZERO_MONTH: f"{moment.month:02d}",
        TokenKind.WEEKDAY: WEEKDAY_NAMES[moment.weekday()],
        TokenKind.LONG_WEEKDAY: LONG_WEEKDAY_NAMES[moment.weekday()],
        TokenKind.DAY: str(moment.day),
        TokenKind.UNDER_DAY: f"{moment.day:>2}",
        TokenKind.ZERO_DAY: f"{moment.day:02d}",
        TokenKind.UNDER_YEAR_DAY: f"{moment.timetuple().tm_yday:>3}",
        TokenKind.ZERO_YEAR_DAY: f"{moment.timetuple().tm_yday:03d}",
        TokenKind.HOUR: f"{moment.hour:02d}",
        TokenKind.HOUR12: str(hour12),
        TokenKind.ZERO_HOUR12: f"{hour12:02d}",
        TokenKind.MINUTE: str(moment.minute),
        TokenKind.ZERO_MINUTE: f"{moment.minute:02d}",
        TokenKind.SECOND: str(moment.second),
        TokenKind.ZERO_SECOND: f"{moment.second:02d}",
        TokenKind.PM: "PM" if moment.hour >= 12 else "AM",
        TokenKind.LOWER_PM: "pm" if moment.hour >= 12 else "am",
    }
    if kind in simple:
        return simple[kind]
    if kind is TokenKind.TZ:
        return zone_abbreviation(moment) or format_offset(offset_seconds(moment))
    if kind in (TokenKind.FRAC_SECOND0, TokenKind.FRAC_SECOND9):
        return _fraction(instant.nanosecond, token)
    return format_offset(offset_seconds(moment), kind)


def render_layout(instant: Instant, pattern: LayoutPattern) -> str:
    """Substitute every token of *pattern* with *instant*'s fields."""
    return "".join(_render_token(instant, token) for token in pattern.tokens)


def render(parsed: ParsedTime, layout: str, timezone: str, config: EngineConfig) -> str:
    """Render *parsed* in *layout* and *timezone*.

    An empty *timezone* keeps the instant's own zone. An empty *layout*
    echoes the shape of the original input when there is one.

    Raises InvalidTimeError when the instant has no wall time in
    *timezone* (years 1 and 9999 near an offset boundary).
    """
    instant = parsed.instant
    if timezone:
        zone = load_zone(timezone)
        try:
            instant = instant.in_zone(zone)
        except OverflowError as exc:
            shown = parsed.source or instant.moment.isoformat()
            raise InvalidTimeError(f"Time out of range in {timezone}: {shown}") from exc

    pattern: LayoutPattern
    if layout:
        pattern = config.layout(layout)
    elif parsed.source:
        pattern = infer_layout(parsed.source)
    else:
        pattern = config.layout("")
    logger.debug("Rendering with layout %r", pattern.source)
    return render_layout(instant, pattern)
