"""MCP protocol — Model Context Protocol server side."""

from ns_mcp.protocols.mcp.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ResponseEnvelope,
    TextContent,
    ToolDescriptor,
)
from ns_mcp.protocols.mcp.transport import (
    MCPServerTransport,
    MessageTooLargeError,
    StdioServerTransport,
    TransportClosedError,
)

__all__ = [
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPServerTransport",
    "MessageTooLargeError",
    "ResponseEnvelope",
    "StdioServerTransport",
    "TextContent",
    "ToolDescriptor",
    "TransportClosedError",
]
