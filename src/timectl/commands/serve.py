"""serve: start the MCP server (requires the timectl[mcp] extra)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.commands._base import TimeCommand

if TYPE_CHECKING:
    from timectl.commands._context import AppContext


@click.command(
    cls=TimeCommand,
    examples="""\
  # Start the MCP server ([mcp] transport from config, stdio by default)
  timectl serve

  # Streamable HTTP on custom host/port
  timectl serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default: [mcp] transport).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: AppContext, transport: str | None, host: str | None, port: int | None) -> None:
    """Start the MCP server exposing the time tools."""
    from timectl.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install timectl[mcp]", err=True)
        raise SystemExit(1)

    mcp = app.settings.mcp
    server = create_server(
        app.settings.engine_config(),
        host=host or mcp.host,
        port=port or mcp.port,
    )
    server.run(transport=transport or mcp.transport)
