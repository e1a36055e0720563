"""TimeService: the five time operations plus layout listing.

Every method returns a :class:`ServiceResult`. Domain errors never
escape: they become ``ok=False`` results whose ``error.code`` is the
error kind and whose ``error.message`` is the ``"<kind>: <detail>"``
text callers present verbatim.

Successful results carry ``data["time"]`` (rendered text) or, for
``compare``, ``data["result"]`` (-1, 0 or 1).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from timectl.domain import comparator, resolver
from timectl.domain.durations import apply_duration
from timectl.domain.engine import EngineConfig
from timectl.domain.errors import TimeError
from timectl.domain.formatter import render
from timectl.domain.instant import Instant, ParsedTime
from timectl.domain.relative import resolve_relative
from timectl.services.result import ServiceError, ServiceResult
from timectl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

INPUT_TIMEZONE_LABEL = "IANA input timezone name"


def _failure(op: str, exc: TimeError, **detail: Any) -> ServiceResult:
    logger.debug("%s failed: %s", op, exc)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=str(exc.kind), message=str(exc), detail=detail),
    )


class TimeService:
    """Time operations over one immutable :class:`EngineConfig`.

    Empty string arguments mean "use the default": the current time for
    input times, the configured zone for the parse zone, and for output,
    the input's own zone and shape (or the configured format).
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    # ------------------------------------------------------------------
    # shared stages
    # ------------------------------------------------------------------

    def _parse(self, raw: str, timezone: str = "", *, label: str = "IANA timezone name") -> ParsedTime:
        with trace_span("parse") as span:
            zone = self._config.zone(timezone, label=label)
            parsed = resolver.resolve(raw, zone, self._config)
            if span:
                span.annotate("input", raw)
        return parsed

    def _render(self, parsed: ParsedTime, fmt: str, timezone: str) -> str:
        with trace_span("render") as span:
            text = render(parsed, fmt, timezone, self._config)
            if span:
                span.annotate("format", fmt or "inferred")
        return text

    def _run(self, op: str, body: Callable[[], dict[str, Any]], **detail: Any) -> ServiceResult:
        try:
            data = body()
        except TimeError as exc:
            return _failure(op, exc, **detail)
        logger.debug("%s -> %s", op, data)
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    @traced
    def current(self, timezone: str = "", fmt: str = "") -> ServiceResult:
        """Current time in *timezone* (default zone when empty) and *fmt*."""

        def body() -> dict[str, Any]:
            zone_name = timezone or self._config.default_timezone
            now = ParsedTime(Instant.now(self._config.zone(zone_name)))
            return {"time": self._render(now, fmt, zone_name)}

        return self._run("current", body, timezone=timezone)

    @traced
    def convert(
        self,
        time: str = "",
        input_timezone: str = "",
        output_timezone: str = "",
        fmt: str = "",
    ) -> ServiceResult:
        """Reinterpret *time* from *input_timezone* into *output_timezone*.

        A zone written into *time* itself wins over *input_timezone*.
        """

        def body() -> dict[str, Any]:
            parsed = self._parse(time, input_timezone, label=INPUT_TIMEZONE_LABEL)
            return {"time": self._render(parsed, fmt, output_timezone)}

        return self._run("convert", body, input=time)

    @traced
    def add(self, time: str = "", duration: str = "", timezone: str = "", fmt: str = "") -> ServiceResult:
        """Shift *time* by the fixed-length *duration* literal (e.g. ``"1h30m"``)."""

        def body() -> dict[str, Any]:
            parsed = self._parse(time)
            with trace_span("shift"):
                shifted = apply_duration(parsed.instant, duration)
            return {"time": self._render(ParsedTime(shifted, parsed.source), fmt, timezone)}

        return self._run("add", body, input=time, duration=duration)

    @traced
    def relative(self, time: str = "", text: str = "", timezone: str = "", fmt: str = "") -> ServiceResult:
        """Resolve the phrase *text* (e.g. ``"last sunday at 5pm"``) against *time*."""

        def body() -> dict[str, Any]:
            reference = self._parse(time)
            with trace_span("relative"):
                resolved = resolve_relative(text, reference.instant)
            # The reference's text still drives output-shape inference.
            return {"time": self._render(ParsedTime(resolved, reference.source), fmt, timezone)}

        return self._run("relative", body, input=time, text=text)

    @traced
    def compare(self, time_a: str, time_b: str) -> ServiceResult:
        """Order two instants: -1 when *time_a* is earlier, 0 when equal, 1 when later."""

        def body() -> dict[str, Any]:
            return {"result": comparator.compare(time_a, time_b, self._config)}

        return self._run("compare", body, time_a=time_a, time_b=time_b)

    def formats(self) -> ServiceResult:
        """List the named layouts with their reference-time patterns."""
        registry = self._config.registry
        items = [{"name": name, "layout": pattern.source} for name, pattern in registry.items()]
        return ServiceResult(
            ok=True,
            op="formats",
            data={"formats": items, "count": len(items)},
            meta={"default_format": self._config.default_format},
        )
