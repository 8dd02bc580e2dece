"""Tool catalog and argument validation."""

from ns_mcp.tools.catalog import CATALOG, TOOLS, ToolSpec

__all__ = [
    "CATALOG",
    "TOOLS",
    "ToolSpec",
]
