"""Instant and ParsedTime value types.

An :class:`Instant` is an absolute point in time with nanosecond
resolution. Python datetimes stop at microseconds, so the instant keeps
an aware datetime plus the sub-microsecond remainder. The datetime's
zone is used only for rendering; equality and ordering are absolute.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from timectl.domain.zones import UTC

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True)
class Instant:
    """Timezone-aware timestamp with nanosecond resolution.

    Attributes:
        moment: Aware datetime carrying the display zone.
        nanos: Sub-microsecond remainder, 0-999.
    """

    moment: datetime
    nanos: int = 0

    def __post_init__(self) -> None:
        if self.moment.tzinfo is None:
            msg = "Instant requires a timezone-aware datetime"
            raise ValueError(msg)
        if not 0 <= self.nanos < 1000:
            msg = f"nanos must be within 0..999, got {self.nanos}"
            raise ValueError(msg)

    @classmethod
    def now(cls, zone: tzinfo = UTC) -> Instant:
        return cls(datetime.now(zone))

    @property
    def zone(self) -> tzinfo:
        assert self.moment.tzinfo is not None
        return self.moment.tzinfo

    @property
    def nanosecond(self) -> int:
        """Fraction of the current second, in nanoseconds."""
        return self.moment.microsecond * 1000 + self.nanos

    def epoch_nanoseconds(self) -> int:
        micros = (self.moment - EPOCH) // _MICROSECOND
        return micros * 1000 + self.nanos

    def in_zone(self, zone: tzinfo) -> Instant:
        """Same instant, rendered in *zone*.

        Raises OverflowError when the wall time in *zone* falls outside
        years 1-9999.
        """
        return Instant(self.moment.astimezone(zone), self.nanos)

    def shift(self, nanoseconds: int) -> Instant:
        """Add an exact, calendar-unaware offset.

        Raises OverflowError when the result leaves the supported range.
        """
        micros, remainder = divmod(self.nanos + nanoseconds, 1000)
        utc = self.moment.astimezone(UTC) + timedelta(microseconds=micros)
        return Instant(utc.astimezone(self.zone), remainder)

    def compare(self, other: Instant) -> int:
        """Return -1, 0, or 1 ordering *self* against *other*."""
        a = self.epoch_nanoseconds()
        b = other.epoch_nanoseconds()
        return (a > b) - (a < b)


@dataclass(frozen=True)
class ParsedTime:
    """An instant plus the text it was parsed from.

    ``source`` is empty for synthesized instants (e.g. the current time)
    and is only consulted to infer an output layout.
    """

    instant: Instant
    source: str = ""
