"""Shared CLI output helpers.

stdout belongs to the MCP protocol while ``serve`` runs, so diagnostics and
log records always go through the stderr console.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from ns_mcp.protocols.mcp.models import ResponseEnvelope, ToolDescriptor

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Route all log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print the tool catalog as a table."""
    table = Table(title="NS Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Required")
    table.add_column("Description")

    for tool in tools:
        required = tool.input_schema.get("required", [])
        if not required and "anyOf" in tool.input_schema:
            required = [
                " | ".join(option["required"][0] for option in tool.input_schema["anyOf"])
            ]
        table.add_row(tool.name, ", ".join(required) or "-", _truncate(tool.description))

    console.print(table)


def print_envelope(envelope: ResponseEnvelope) -> None:
    """Print a tool-call result; errors go to stderr in red."""
    if envelope.is_error:
        err_console.print(f"[red]{escape(envelope.text)}[/red]", highlight=False)
        return
    console.print(envelope.text, markup=False, highlight=False, soft_wrap=True)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
