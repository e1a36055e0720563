"""MCP tool definitions: the five time operations.

Each tool has a ``<name>_impl`` function testable without the mcp
package; ``register_tools()`` wraps them with FastMCP decorators. Empty
string arguments mean "use the default", as on the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from timectl.services.result import ServiceResult
    from timectl.services.time import TimeService


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": result.data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
        }
    return response


def current_time_impl(service: TimeService, *, timezone: str = "", format: str = "") -> dict[str, Any]:
    return _to_mcp_response(service.current(timezone, format))


def convert_timezone_impl(
    service: TimeService,
    *,
    time: str = "",
    input_timezone: str = "",
    output_timezone: str = "",
    format: str = "",
) -> dict[str, Any]:
    return _to_mcp_response(service.convert(time, input_timezone, output_timezone, format))


def add_time_impl(
    service: TimeService,
    *,
    time: str = "",
    duration: str = "",
    timezone: str = "",
    format: str = "",
) -> dict[str, Any]:
    return _to_mcp_response(service.add(time, duration, timezone, format))


def relative_time_impl(
    service: TimeService,
    *,
    time: str = "",
    text: str = "",
    timezone: str = "",
    format: str = "",
) -> dict[str, Any]:
    return _to_mcp_response(service.relative(time, text, timezone, format))


def compare_time_impl(service: TimeService, *, time_a: str = "", time_b: str = "") -> dict[str, Any]:
    return _to_mcp_response(service.compare(time_a, time_b))


def register_tools(server: Any, service: TimeService) -> None:
    """Register the five time tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def current_time(timezone: str = "", format: str = "") -> dict[str, Any]:
        """Get the current time.

        Args:
            timezone: IANA timezone name, e.g. 'America/New_York'. Default: UTC.
            format: Layout name (RFC3339, Kitchen, DateOnly, ...) or a literal
                layout in reference-time notation ('2006-01-02 15:04:05').
        """
        return current_time_impl(service, timezone=timezone, format=format)

    @server.tool()  # type: ignore[untyped-decorator]
    def convert_timezone(
        time: str = "",
        input_timezone: str = "",
        output_timezone: str = "",
        format: str = "",
    ) -> dict[str, Any]:
        """Convert a time between timezones.

        An offset or abbreviation written into *time* wins over
        *input_timezone*. Without *format* the output keeps the input's shape.
        """
        return convert_timezone_impl(
            service,
            time=time,
            input_timezone=input_timezone,
            output_timezone=output_timezone,
            format=format,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    def add_time(time: str = "", duration: str = "", timezone: str = "", format: str = "") -> dict[str, Any]:
        """Add a fixed duration such as '2h30m' or '-45s' to a time (default: now)."""
        return add_time_impl(service, time=time, duration=duration, timezone=timezone, format=format)

    @server.tool()  # type: ignore[untyped-decorator]
    def relative_time(time: str = "", text: str = "", timezone: str = "", format: str = "") -> dict[str, Any]:
        """Resolve a natural-language expression against a time (default: now).

        Examples: 'yesterday', '5 minutes ago', 'three days ago',
        'last sunday at 5:30pm', 'next january', 'in 2 hours', '10am'.
        """
        return relative_time_impl(service, time=time, text=text, timezone=timezone, format=format)

    @server.tool()  # type: ignore[untyped-decorator]
    def compare_time(time_a: str = "", time_b: str = "") -> dict[str, Any]:
        """Compare two times: -1 if time_a is earlier, 0 if equal, 1 if later."""
        return compare_time_impl(service, time_a=time_a, time_b=time_b)
