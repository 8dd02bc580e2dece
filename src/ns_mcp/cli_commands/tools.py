"""``ns-mcp tools`` — inspect the catalog and run single tool calls."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import click

from ns_mcp.cli_commands._output import err_console, print_envelope, print_tools_table
from ns_mcp.tools.catalog import CATALOG

if TYPE_CHECKING:
    from ns_mcp.config import Settings
    from ns_mcp.protocols.mcp.models import ResponseEnvelope


@click.group()
def tools() -> None:
    """Inspect and invoke tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_tools(as_json: bool) -> None:
    """List the tools this server advertises."""
    descriptors = [spec.descriptor for spec in CATALOG]
    if as_json:
        payload = {"tools": [d.model_dump(by_alias=True) for d in descriptors]}
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object.")
def call(name: str, raw_args: str) -> None:
    """Call tool NAME once against the NS API and print the result.

    Exits with status 1 when the call returns an error envelope.
    """
    from ns_mcp.config import ConfigError, Settings

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--args") from exc

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise SystemExit(1) from exc

    envelope = asyncio.run(_call(settings, name, arguments))
    print_envelope(envelope)
    if envelope.is_error:
        raise SystemExit(1)


async def _call(settings: Settings, name: str, arguments: object) -> ResponseEnvelope:
    from ns_mcp.ns_api.client import NSApiClient
    from ns_mcp.protocols.dispatcher import ToolDispatcher

    async with NSApiClient(settings.ns_api_key, base_url=settings.base_url) as client:
        return await ToolDispatcher(client).call_tool(name, arguments)
