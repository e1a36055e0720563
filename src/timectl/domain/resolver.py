"""Turn raw input text into instants.

:func:`resolve` is the committed parse used by every operation that
echoes its input's shape: the inferred layout is tried first, then every
registry layout. :func:`parse_any` is the permissive parse used for
comparison, which also accepts Unix epoch numbers and a wider list of
everyday layouts.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from datetime import timedelta, tzinfo

from timectl.domain.engine import EngineConfig
from timectl.domain.errors import InvalidFormatError, InvalidTimeError
from timectl.domain.inference import infer_layout
from timectl.domain.instant import EPOCH, Instant, ParsedTime
from timectl.domain.layouts import LayoutPattern
from timectl.domain.parsing import LayoutMismatch, parse_layout
from timectl.domain.zones import UTC

logger = logging.getLogger(__name__)

# Tried by parse_any after the inferred and registry layouts.
EXTRA_LAYOUTS: tuple[str, ...] = (
    "2006-01-02 15:04:05.999999999 -0700 MST",
    "2006-01-02 15:04:05Z07:00",
    "2006-01-02 15:04:05 -0700",
    "2006-01-02 15:04:05 MST",
    "2006-01-02T15:04:05.999999999",
    "2006-01-02T15:04",
    "2006-01-02 15:04",
    "2006-01-02",
    "2006/01/02 15:04:05",
    "2006/01/02",
    "2006.01.02",
    "01/02/2006 15:04:05",
    "01/02/2006 3:04 PM",
    "01/02/2006",
    "1/2/2006",
    "02 Jan 2006 15:04:05",
    "02 Jan 2006",
    "2 January 2006",
    "02-Jan-2006",
    "Jan 2, 2006 3:04:05 PM",
    "January 2, 2006 15:04:05",
    "January 2, 2006",
    "Monday, January 2, 2006",
    "Mon, 2 Jan 2006 15:04:05 -0700",
    "Mon, 2 Jan 2006 15:04:05 MST",
    "20060102150405",
    "20060102",
)

_EPOCH_DIGITS = re.compile(r"-?[0-9]+")
# Digit count of an epoch number -> nanoseconds per unit.
_EPOCH_SCALES = {10: 1_000_000_000, 13: 1_000_000, 16: 1_000, 19: 1}


def _candidates(value: str, config: EngineConfig) -> Iterator[LayoutPattern]:
    try:
        yield infer_layout(value)
    except InvalidFormatError:
        pass
    for _name, pattern in config.registry.items():
        yield pattern


def resolve(
    raw: str,
    base_zone: tzinfo,
    config: EngineConfig,
    *,
    layout: str = "",
) -> ParsedTime:
    """Parse *raw* under *base_zone*.

    Empty input is the current time in *base_zone*, with no source text.
    A non-empty *layout* (registry name or literal pattern) commits the
    parse to that layout; otherwise the inferred layout and then every
    registry layout are tried. A zone written into the input wins over
    *base_zone*.

    Raises:
        InvalidTimeError: when no layout parses the input.
    """
    if not raw:
        return ParsedTime(Instant.now(base_zone))

    patterns = [config.layout(layout)] if layout else _candidates(raw, config)
    for pattern in patterns:
        try:
            instant = parse_layout(raw, pattern, base_zone)
        except LayoutMismatch:
            continue
        logger.debug("Parsed %r with layout %r", raw, pattern.source)
        return ParsedTime(instant, raw)
    raise InvalidTimeError(f"Unable to parse input time: {raw}")


def _from_epoch(value: str) -> Instant | None:
    if not _EPOCH_DIGITS.fullmatch(value):
        return None
    scale = _EPOCH_SCALES.get(len(value.lstrip("-")))
    if scale is None:
        return None
    nanoseconds = int(value) * scale
    micros, nanos = divmod(nanoseconds, 1000)
    try:
        return Instant(EPOCH + timedelta(microseconds=micros), nanos)
    except OverflowError:
        return None


def parse_any(raw: str, config: EngineConfig) -> Instant:
    """Parse *raw* with every known shape, in UTC unless it names a zone.

    Raises:
        InvalidTimeError: for empty input or when nothing matches.
    """
    value = raw.strip()
    if not value:
        raise InvalidTimeError(f"Unable to parse input time: {raw}")

    instant = _from_epoch(value)
    if instant is not None:
        return instant
    try:
        return resolve(value, UTC, config).instant
    except InvalidTimeError:
        pass
    for source in EXTRA_LAYOUTS:
        try:
            return parse_layout(value, LayoutPattern.compile(source), UTC)
        except LayoutMismatch:
            continue
    raise InvalidTimeError(f"Unable to parse input time: {raw}")
