"""Protocol layer — MCP server, dispatch and response shaping."""

from ns_mcp.protocols.errors import (
    InvalidParamsError,
    ProtocolError,
    ToolNotFoundError,
)

__all__ = [
    "InvalidParamsError",
    "ProtocolError",
    "ToolNotFoundError",
]
