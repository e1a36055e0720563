"""Total-order comparison of two independently parsed instants."""

from __future__ import annotations

from timectl.domain.engine import EngineConfig
from timectl.domain.errors import InvalidTimeError
from timectl.domain.instant import Instant
from timectl.domain.resolver import parse_any


def _parse_side(value: str, side: str, config: EngineConfig) -> Instant:
    try:
        return parse_any(value, config)
    except InvalidTimeError as exc:
        raise InvalidTimeError(f'invalid format for {side}: "{value}"') from exc


def compare(time_a: str, time_b: str, config: EngineConfig) -> int:
    """Return -1, 0 or 1 as *time_a* is before, equal to, or after *time_b*.

    Display zones are ignored: ``2025-01-01T00:00:00Z`` and
    ``2024-12-31T19:00:00-05:00`` compare equal.

    Raises:
        InvalidTimeError: naming ``timeA`` or ``timeB``, whichever side
            failed to parse first.
    """
    a = _parse_side(time_a, "timeA", config)
    b = _parse_side(time_b, "timeB", config)
    return a.compare(b)
