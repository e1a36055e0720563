"""MCP resource definitions.

URIs: ``timectl://formats`` (named layouts), ``timectl://timezones/popular``,
``timectl://current/{timezone}``, ``timectl://timezone-info/{timezone}`` and
``timectl://guide/relative-expressions`` (the relative grammar).
Each resource has a ``<name>_impl`` function testable without the mcp
package.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from timectl.services.result import ServiceResult
    from timectl.services.time import TimeService

RELATIVE_GUIDE = """\
# Relative Time Expressions

Expressions are case-insensitive and resolved against the reference
time, in the reference time's timezone.

## Anchors
- **now**: the reference time itself
- **today**, **yesterday**, **tomorrow**: start of that day (00:00:00)

## Offsets
- **5 minutes ago**, **three days ago**, **an hour ago**
- **in 2 hours**, **one year from now**, **+3 days**, **-2 weeks**
- Units: second, minute, hour, day, week, month, year (plural or abbreviated)
- Second/minute/hour offsets are exact; day and larger land on 00:00:00
- Month/year offsets clamp to the month's last day (Jan 31 + 1 month = Feb 28)

## Last / next
- **last sunday**, **next friday**: nearest such day, never the reference day
- **last january**, **next march**: the 1st of that month, never the reference month
- **last week**, **next month**, **last year**, **next day**: one unit back or forward

## Dates
- **sunday**: the most recent sunday, today included
- **december 25th**, **25 december**, **jan 2 2026**: that date (reference year by default)

## Clock times
- Append to any expression, with or without **at**: **yesterday at 10am**,
  **last sunday at 5:30pm**, **tomorrow noon**, **sunday at 22:45**
- Alone, on the reference date: **10am**, **10:05pm**, **22:45:30**, **midnight**
"""

POPULAR_TIMEZONES: dict[str, tuple[tuple[str, str], ...]] = {
    "North America": (
        ("America/New_York", "Eastern Time (EST/EDT)"),
        ("America/Chicago", "Central Time (CST/CDT)"),
        ("America/Denver", "Mountain Time (MST/MDT)"),
        ("America/Los_Angeles", "Pacific Time (PST/PDT)"),
        ("America/Phoenix", "Mountain Time, no DST"),
        ("America/Anchorage", "Alaska Time (AKST/AKDT)"),
        ("Pacific/Honolulu", "Hawaii Time (HST)"),
    ),
    "South America": (
        ("America/Sao_Paulo", "Brasilia Time (-03)"),
        ("America/Argentina/Buenos_Aires", "Argentina Time (-03)"),
        ("America/Bogota", "Colombia Time (-05)"),
    ),
    "Europe": (
        ("Europe/London", "Greenwich Mean Time (GMT/BST)"),
        ("Europe/Paris", "Central European Time (CET/CEST)"),
        ("Europe/Berlin", "Central European Time (CET/CEST)"),
        ("Europe/Madrid", "Central European Time (CET/CEST)"),
        ("Europe/Amsterdam", "Central European Time (CET/CEST)"),
        ("Europe/Moscow", "Moscow Time (MSK)"),
    ),
    "Asia": (
        ("Asia/Dubai", "Gulf Time (+04)"),
        ("Asia/Kolkata", "India Standard Time (IST)"),
        ("Asia/Shanghai", "China Standard Time (CST)"),
        ("Asia/Tokyo", "Japan Standard Time (JST)"),
        ("Asia/Hong_Kong", "Hong Kong Time (HKT)"),
        ("Asia/Singapore", "Singapore Time (+08)"),
        ("Asia/Seoul", "Korea Standard Time (KST)"),
    ),
    "Oceania": (
        ("Australia/Sydney", "Australian Eastern Time (AEST/AEDT)"),
        ("Australia/Brisbane", "Australian Eastern Time, no DST"),
        ("Australia/Perth", "Australian Western Time (AWST)"),
        ("Pacific/Auckland", "New Zealand Time (NZST/NZDT)"),
    ),
    "Universal": (("UTC", "Coordinated Universal Time"),),
}


def _value(result: ServiceResult) -> str:
    """The rendered time of *result*, or ValueError carrying its error."""
    if not result.ok:
        raise ValueError(result.error.message if result.error else "Unknown error")
    return str(result.data["time"])


def formats_impl(service: TimeService) -> str:
    """List named layouts, one ``name: layout`` per line."""
    result = service.formats()
    lines = [f"{item['name']}: {item['layout']}" for item in result.data["formats"]]
    return "Available predefined time formats:\n\n" + "\n".join(lines)


def relative_guide_impl() -> str:
    return RELATIVE_GUIDE


def popular_timezones_impl() -> str:
    """Markdown list of common IANA names, grouped by region."""
    sections = ["# Popular Timezones"]
    for region, zones in POPULAR_TIMEZONES.items():
        lines = [f"- **{name}**: {description}" for name, description in zones]
        sections.append(f"## {region}\n" + "\n".join(lines))
    sections.append("IANA names are case-sensitive; DST zones adjust automatically.")
    return "\n\n".join(sections) + "\n"


def current_impl(service: TimeService, timezone: str) -> str:
    """Current time in *timezone*, in the default format.

    Raises ValueError for an unknown zone.
    """
    return f"Current time in {timezone}:\n{_value(service.current(timezone))}"


def timezone_info_impl(service: TimeService, timezone: str) -> str:
    """Markdown summary of *timezone*: local and UTC time, offset, abbreviation.

    Raises ValueError for an unknown zone.
    """
    local = _value(service.current(timezone, "RFC3339"))
    utc = _value(service.current("UTC", "RFC3339"))
    offset = _value(service.current(timezone, "-07:00"))
    abbreviation = _value(service.current(timezone, "MST"))
    return (
        f"# Timezone Information: {timezone}\n\n"
        "## Current Time\n"
        f"- Local: {local}\n"
        f"- UTC: {utc}\n\n"
        "## Zone\n"
        f"- IANA name: {timezone}\n"
        f"- UTC offset: {offset}\n"
        f"- Abbreviation: {abbreviation}\n"
    )


# ---------------------------------------------------------------------------
# Registration: wraps _impl functions with FastMCP decorators
# ---------------------------------------------------------------------------


def _register_zone_template(
    server: Any,
    prefix: str,
    read: Callable[[str], str],
    *,
    name: str,
    mime_type: str,
    description: str,
) -> None:
    """Register *prefix*/{timezone} for IANA names of one to three segments.

    URI template parameters never span a ``/``, so ``America/New_York``
    and ``America/Argentina/Buenos_Aires`` need templates of their own.
    """

    @server.resource(  # type: ignore[untyped-decorator]
        f"{prefix}/{{timezone}}", name=name, mime_type=mime_type, description=description
    )
    def single(timezone: str) -> str:
        return read(timezone)

    @server.resource(  # type: ignore[untyped-decorator]
        f"{prefix}/{{area}}/{{location}}",
        name=f"{name}-area",
        mime_type=mime_type,
        description=description,
    )
    def double(area: str, location: str) -> str:
        return read(f"{area}/{location}")

    @server.resource(  # type: ignore[untyped-decorator]
        f"{prefix}/{{area}}/{{region}}/{{location}}",
        name=f"{name}-region",
        mime_type=mime_type,
        description=description,
    )
    def triple(area: str, region: str, location: str) -> str:
        return read(f"{area}/{region}/{location}")


def register_resources(server: Any, service: TimeService) -> None:
    """Register the MCP resources on the FastMCP server."""

    @server.resource("timectl://formats", mime_type="text/plain")  # type: ignore[untyped-decorator]
    def formats_resource() -> str:
        """Predefined layout names accepted by the format parameter."""
        return formats_impl(service)

    @server.resource(  # type: ignore[untyped-decorator]
        "timectl://timezones/popular", mime_type="text/markdown"
    )
    def popular_timezones_resource() -> str:
        """Commonly used IANA timezone names."""
        return popular_timezones_impl()

    @server.resource(  # type: ignore[untyped-decorator]
        "timectl://guide/relative-expressions", mime_type="text/markdown"
    )
    def relative_guide_resource() -> str:
        """Guide to natural-language relative time expressions."""
        return relative_guide_impl()

    _register_zone_template(
        server,
        "timectl://current",
        lambda timezone: current_impl(service, timezone),
        name="current-time",
        mime_type="text/plain",
        description="Current time in an IANA timezone (e.g. UTC, America/New_York).",
    )
    _register_zone_template(
        server,
        "timectl://timezone-info",
        lambda timezone: timezone_info_impl(service, timezone),
        name="timezone-info",
        mime_type="text/markdown",
        description="Current local and UTC time, offset and abbreviation of an IANA timezone.",
    )
