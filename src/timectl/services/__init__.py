"""Service layer: the operation façade returning ServiceResult.

Services may import from the domain and config layers. They must never
import from commands, output, or mcp.
"""
