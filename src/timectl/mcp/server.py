"""FastMCP server setup.

Optional extra, guarded behind try/except ImportError. Transport
selection (stdio, sse, streamable-http) is left to FastMCP's ``run``.
"""

from __future__ import annotations

from typing import Any

from timectl.domain.engine import EngineConfig

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    config: EngineConfig | None = None,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> Any:
    """Create the MCP server with every tool and resource registered.

    *host* and *port* only matter for the HTTP transports.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install timectl[mcp]"
        raise RuntimeError(msg)

    from timectl.mcp.resources import register_resources
    from timectl.mcp.tools import register_tools
    from timectl.services.time import TimeService

    service = TimeService(config or EngineConfig())
    server = _FastMCP("timectl", host=host, port=port)
    register_tools(server, service)
    register_resources(server, service)
    return server
