"""Shared error types for the protocol layer."""

from __future__ import annotations

import json
from typing import Any

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures.

    Carries a JSON-RPC error code next to the human-readable message.
    """

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"MCP error {code}: {message}")


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(METHOD_NOT_FOUND, f"Unknown tool: {name}")


class InvalidParamsError(ProtocolError):
    """Arguments supplied for a tool failed its validator."""

    def __init__(self, tool_name: str, arguments: Any = None) -> None:
        self.tool_name = tool_name
        self.arguments = arguments
        message = f"Invalid arguments for {tool_name}"
        if arguments:
            message += f": {json.dumps(arguments, default=str)}"
        super().__init__(INVALID_PARAMS, message)
