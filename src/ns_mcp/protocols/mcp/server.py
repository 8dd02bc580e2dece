"""MCPServer — answers MCP JSON-RPC requests read from a server transport.

Handles the ``initialize`` handshake, ``ping``, ``tools/list`` and
``tools/call``. Each request runs in its own task so a slow upstream call
does not block the next request; responses are written as they complete.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ns_mcp.protocols.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ProtocolError,
)
from ns_mcp.protocols.mcp.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse
from ns_mcp.protocols.mcp.transport import MessageTooLargeError, TransportClosedError
from ns_mcp.utils.telemetry import ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from ns_mcp.protocols.dispatcher import ToolDispatcher
    from ns_mcp.protocols.mcp.transport import MCPServerTransport

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_PROTOCOL_VERSION = "2024-11-05"

Handler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class MCPServer:
    """Serves a :class:`ToolDispatcher` over an :class:`MCPServerTransport`.

    Usage::

        server = MCPServer(dispatcher, StdioServerTransport(), name="ns-mcp-server")
        await server.serve()
    """

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        transport: MCPServerTransport,
        *,
        name: str,
        version: str = "0.1.0",
    ) -> None:
        self._dispatcher = dispatcher
        self._transport = transport
        self._name = name
        self._version = version
        self._pending: set[asyncio.Task[None]] = set()
        self._serve_task: asyncio.Task[Any] | None = None
        self._stopping = False
        self._handlers: dict[str, Handler] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    async def serve(self) -> None:
        """Read and answer requests until input ends or :meth:`shutdown` is called."""
        await self._transport.connect()
        self._serve_task = asyncio.current_task()
        logger.info("%s %s listening on stdio", self._name, self._version)
        try:
            while not self._stopping:
                try:
                    line = await self._transport.receive()
                except TransportClosedError:
                    break
                except MessageTooLargeError as exc:
                    logger.warning("Dropped oversized request: %s", exc)
                    await self._deliver(_error(None, INVALID_REQUEST, "Request too large"))
                    continue
                task = asyncio.create_task(self._respond(line))
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)
            if self._pending:
                await asyncio.gather(*list(self._pending), return_exceptions=True)
        except asyncio.CancelledError:
            in_flight = list(self._pending)
            for task in in_flight:
                task.cancel()
            await asyncio.gather(*in_flight, return_exceptions=True)
            if not self._stopping:
                raise
        finally:
            self._serve_task = None
            await self._transport.close()
            logger.info("%s stopped", self._name)

    def shutdown(self) -> None:
        """Stop serving; in-flight calls are cancelled and the transport closed."""
        self._stopping = True
        if self._serve_task is not None:
            self._serve_task.cancel()

    async def handle_message(self, line: str) -> dict[str, Any] | None:
        """Answer one raw JSON-RPC line; ``None`` for notifications."""
        try:
            payload = json.loads(line)
        except json.JSONDecodeError:
            return _error(None, PARSE_ERROR, "Parse error")

        try:
            request = JsonRpcRequest.model_validate(payload)
        except ValidationError:
            request_id = payload.get("id") if isinstance(payload, dict) else None
            if not isinstance(request_id, int | str):
                request_id = None
            return _error(request_id, INVALID_REQUEST, "Invalid Request")

        if request.is_notification:
            logger.debug("Notification %s", request.method)
            return None

        handler = self._handlers.get(request.method)
        if handler is None:
            return _error(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")

        with _tracer.start_as_current_span("ns_mcp.rpc") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            try:
                result = await handler(request.params)
            except ProtocolError as exc:
                return _error(request.id, exc.code, exc.message)
            except Exception as exc:
                logger.exception("Unhandled error in %s", request.method)
                return _error(request.id, INTERNAL_ERROR, str(exc) or "Internal error")
        return JsonRpcResponse(id=request.id, result=result).to_wire()

    async def _respond(self, line: str) -> None:
        response = await self.handle_message(line)
        if response is not None:
            await self._deliver(response)

    async def _deliver(self, response: dict[str, Any]) -> None:
        try:
            await self._transport.send(response)
        except (OSError, RuntimeError) as exc:
            logger.warning("Could not deliver response %s: %s", response.get("id"), exc)

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        version = params.get("protocolVersion")
        return {
            "protocolVersion": version if isinstance(version, str) else DEFAULT_PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self._name, "version": self._version},
        }

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "tools": [
                tool.model_dump(by_alias=True) for tool in self._dispatcher.list_tools()
            ]
        }

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str):
            raise ProtocolError(INVALID_PARAMS, "tools/call requires a string 'name'")
        envelope = await self._dispatcher.call_tool(name, params.get("arguments"))
        return envelope.model_dump(by_alias=True)


def _error(request_id: int | str | None, code: int, message: str) -> dict[str, Any]:
    return JsonRpcResponse(id=request_id, error=JsonRpcError(code=code, message=message)).to_wire()
