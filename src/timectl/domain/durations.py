"""Fixed-length duration literals such as ``"1h30m"`` or ``"-1.5s"``.

A literal is an optional sign followed by one or more decimal numbers,
each with an optional fraction and a mandatory unit suffix. Valid units
are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and ``h``. The sign
applies to the whole literal. ``"0"`` is accepted without a unit.

Durations are never calendar-aware: a day is not a unit here. Calendar
offsets belong to the relative grammar instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from timectl.domain.errors import InvalidDurationError
from timectl.domain.instant import Instant

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

UNITS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # U+00B5 micro sign
    "μs": MICROSECOND,  # U+03BC greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

# Largest magnitude representable as a signed 64-bit nanosecond count.
MAX_NANOSECONDS = 2**63 - 1

_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


@dataclass(frozen=True)
class Duration:
    """An exact, signed span of time in nanoseconds."""

    nanoseconds: int

    @classmethod
    def parse(cls, literal: str) -> Duration:
        """Parse *literal*.

        Raises:
            InvalidDurationError: for an empty literal, a missing or unknown
                unit, a malformed number, or a total that overflows.
        """
        error = InvalidDurationError(f"Invalid duration format: {literal}")
        text = literal
        negative = False
        if text[:1] in ("-", "+"):
            negative = text[0] == "-"
            text = text[1:]
        if text == "0":
            return cls(0)
        if not text:
            raise error

        total = 0
        position = 0
        while position < len(text):
            match = _COMPONENT.match(text, position)
            if match is None or match.end() == position:
                raise error
            whole, fraction, unit = match.groups()
            fraction = fraction or ""
            if not whole and not fraction:
                raise error
            if unit not in UNITS:
                raise error
            scale = UNITS[unit]
            total += int(whole or "0") * scale
            if fraction:
                total += int(fraction) * scale // 10 ** len(fraction)
            if total > MAX_NANOSECONDS + negative:
                raise error
            position = match.end()

        return cls(-total if negative else total)


def apply_duration(instant: Instant, literal: str) -> Instant:
    """Shift *instant* by the duration *literal*, keeping its zone."""
    duration = Duration.parse(literal)
    try:
        return instant.shift(duration.nanoseconds)
    except OverflowError as exc:
        raise InvalidDurationError(f"Invalid duration format: {literal}") from exc
