"""``ns-mcp serve`` — run the MCP server on stdio."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

import click

from ns_mcp.cli_commands._output import configure_logging, err_console
from ns_mcp.config import ConfigError, Settings

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for stderr output (default: NS_MCP_LOG_LEVEL or WARNING).",
)
@click.option("--trace", is_flag=True, help="Export OpenTelemetry spans (requires ns-mcp[otel]).")
@click.option("--otlp-endpoint", default=None, help="Send spans to this OTLP/gRPC endpoint.")
def serve(log_level: str | None, trace: bool, otlp_endpoint: str | None) -> None:
    """Serve the NS tools over stdio for an MCP host."""
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise SystemExit(1) from exc

    configure_logging(log_level or settings.log_level)

    if trace or otlp_endpoint:
        from ns_mcp.utils.telemetry import configure_telemetry

        configure_telemetry(service_name=settings.server_name, otlp_endpoint=otlp_endpoint)

    asyncio.run(run_server(settings))


async def run_server(settings: Settings) -> None:
    """Build the client, dispatcher and server from *settings* and serve until stopped."""
    from ns_mcp.ns_api.client import NSApiClient
    from ns_mcp.protocols.dispatcher import ToolDispatcher
    from ns_mcp.protocols.mcp.server import MCPServer
    from ns_mcp.protocols.mcp.transport import StdioServerTransport

    async with NSApiClient(settings.ns_api_key, base_url=settings.base_url) as client:
        server = MCPServer(
            ToolDispatcher(client),
            StdioServerTransport(),
            name=settings.server_name,
            version=settings.server_version,
        )
        loop = asyncio.get_running_loop()
        # Signal handlers are unavailable on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(signal.SIGINT, server.shutdown)
            loop.add_signal_handler(signal.SIGTERM, server.shutdown)
        await server.serve()
