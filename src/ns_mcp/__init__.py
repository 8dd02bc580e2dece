"""ns-mcp — NS railway information exposed as Model Context Protocol tools."""

from __future__ import annotations

__version__ = "0.1.0"
