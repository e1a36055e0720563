"""MCP adapter: exposes TimeService operations as tools (optional extra)."""
