"""ns-mcp CLI entrypoint."""

from __future__ import annotations

import click

from ns_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="ns-mcp")
def main() -> None:
    """ns-mcp — NS railway information as MCP tools."""


# Register subcommands
from ns_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
