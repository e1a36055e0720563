"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``timectl.toml`` only holds
overrides. An empty or missing file behaves like UTC + RFC3339.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from timectl.domain.engine import DEFAULT_FORMAT, DEFAULT_TIMEZONE

McpTransport = Literal["stdio", "sse", "streamable-http"]


class DefaultsConfig(BaseModel):
    """[defaults] section.

    ``timezone`` is an IANA name; ``format`` is a registry name or a
    literal reference-time layout. Neither is validated until used.
    """

    model_config = {"frozen": True}

    timezone: str = DEFAULT_TIMEZONE
    format: str = DEFAULT_FORMAT


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: McpTransport = "stdio"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
