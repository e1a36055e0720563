"""Domain layer: the date/time interpretation engine.

This layer depends only on the standard library.
It must never import from services, config, commands, output, or mcp.
"""
