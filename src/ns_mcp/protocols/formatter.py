"""ResponseFormatter — shapes tool results and failures into MCP envelopes."""

from __future__ import annotations

import json
from typing import Any

from ns_mcp.ns_api.errors import NSApiError
from ns_mcp.protocols.errors import ProtocolError
from ns_mcp.protocols.mcp.models import ResponseEnvelope

UNKNOWN_ERROR = "Unknown error occurred"


def format_success(data: Any) -> ResponseEnvelope:
    """Wrap a JSON-compatible payload as indented JSON text."""
    return ResponseEnvelope.from_text(json.dumps(data, indent=2, ensure_ascii=False))


def format_error(error: object) -> ResponseEnvelope:
    """Convert any failure into an ``isError`` envelope.

    Never raises: anything that cannot be rendered degrades to
    :data:`UNKNOWN_ERROR`.
    """
    try:
        text = _describe(error)
    except Exception:
        text = UNKNOWN_ERROR
    return ResponseEnvelope.from_text(text or UNKNOWN_ERROR, is_error=True)


def _describe(error: object) -> str:
    if isinstance(error, ProtocolError):
        return str(error)
    if isinstance(error, NSApiError):
        return f"NS API error: {error.message or 'Unknown error'}"
    if isinstance(error, BaseException):
        return str(error)
    return UNKNOWN_ERROR
