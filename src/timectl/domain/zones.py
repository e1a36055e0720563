"""Timezone resolution against the IANA database.

Zones are looked up on every call; validity is never assumed across
calls. Fixed offsets parsed out of input strings are represented as
:class:`datetime.timezone` instances, named when the input carried an
abbreviation and unnamed when it carried a bare numeric offset.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timectl.domain.errors import InvalidTimezoneError

UTC = timezone.utc

# Common abbreviations mapped to their UTC offset in seconds. Used only
# when the base zone does not itself use the abbreviation.
ABBREVIATIONS: dict[str, int] = {
    "UTC": 0,
    "UT": 0,
    "GMT": 0,
    "WET": 0,
    "WEST": 3600,
    "BST": 3600,
    "CET": 3600,
    "CEST": 7200,
    "EET": 7200,
    "EEST": 10800,
    "MSK": 10800,
    "IST": 19800,
    "SGT": 28800,
    "HKT": 28800,
    "AWST": 28800,
    "JST": 32400,
    "KST": 32400,
    "ACST": 34200,
    "AEST": 36000,
    "AEDT": 39600,
    "NZST": 43200,
    "NZDT": 46800,
    "HST": -36000,
    "AKST": -32400,
    "AKDT": -28800,
    "PST": -28800,
    "PDT": -25200,
    "MST": -25200,
    "MDT": -21600,
    "CST": -21600,
    "CDT": -18000,
    "EST": -18000,
    "EDT": -14400,
}

_UNNAMED_FIXED = re.compile(r"^UTC[+-]\d{2}:\d{2}(:\d{2})?$")


def load_zone(name: str, *, label: str = "IANA timezone name") -> tzinfo:
    """Resolve *name* against the IANA database.

    ``"UTC"`` maps to :data:`UTC`. Raises :class:`InvalidTimezoneError`
    (detail ``"Invalid <label>: <name>"``) for anything unresolvable.
    """
    if name == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezoneError(f"Invalid {label}: {name}") from exc


def fixed_zone(offset_seconds: int, name: str = "") -> tzinfo:
    """Build a fixed-offset zone, optionally carrying an abbreviation."""
    if offset_seconds == 0 and name in ("", "UTC"):
        return UTC
    delta = timedelta(seconds=offset_seconds)
    if name:
        return timezone(delta, name)
    return timezone(delta)


def zone_abbreviation(moment: datetime) -> str:
    """Abbreviation of *moment*'s zone, or ``""`` for an unnamed fixed offset."""
    name = moment.tzname() or ""
    if isinstance(moment.tzinfo, timezone) and _UNNAMED_FIXED.match(name):
        return ""
    return name


def offset_seconds(moment: datetime) -> int:
    offset = moment.utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


def normalize(moment: datetime) -> datetime:
    """Round-trip a wall-clock datetime through UTC to settle DST gaps."""
    try:
        return moment.astimezone(UTC).astimezone(moment.tzinfo)
    except OverflowError:
        return moment
