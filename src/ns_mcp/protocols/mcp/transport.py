"""MCP stdio transport — the server side of newline-delimited JSON over stdio.

The server reads one JSON-RPC message per line from stdin and writes one
per line to stdout. Anything else (logs, traces) must go to stderr.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import IO, Any, Protocol, runtime_checkable

# Upper bound for a single JSON-RPC line read from stdin.
MAX_LINE_BYTES = 16 * 1024 * 1024


class TransportClosedError(RuntimeError):
    """The peer closed the input stream."""


class MessageTooLargeError(ValueError):
    """An input line exceeded the reader limit and was discarded."""


@runtime_checkable
class MCPServerTransport(Protocol):
    """Abstract transport for the server end of MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def receive(self) -> str: ...
    async def send(self, data: dict[str, Any]) -> None: ...
    async def close(self) -> None: ...


class StdioServerTransport:
    """Reads requests from stdin and writes responses to stdout.

    *reader* and *output* can be injected; by default stdin is attached to an
    :class:`asyncio.StreamReader` on :meth:`connect` and responses go to
    ``sys.stdout.buffer``.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None = None,
        output: IO[bytes] | None = None,
    ) -> None:
        self._reader = reader
        self._output = output
        self._pipe: asyncio.BaseTransport | None = None
        self._closed = False

    async def connect(self) -> None:
        """Attach stdin to the event loop."""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
            self._pipe, _ = await loop.connect_read_pipe(
                lambda: asyncio.StreamReaderProtocol(reader), sys.stdin
            )
            self._reader = reader
        if self._output is None:
            self._output = sys.stdout.buffer

    async def receive(self) -> str:
        """Return the next non-blank line, without its newline.

        Raises :class:`TransportClosedError` at end of input and
        :class:`MessageTooLargeError` when a line overruns the reader limit;
        the reader stays usable after the latter.
        """
        if self._reader is None or self._closed:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        while True:
            try:
                line = await self._reader.readline()
            except ValueError as exc:
                msg = f"Input line exceeds reader limit: {exc}"
                raise MessageTooLargeError(msg) from exc
            if not line:
                msg = "Transport closed"
                raise TransportClosedError(msg)
            text = line.decode("utf-8", errors="replace").strip()
            if text:
                return text

    async def send(self, data: dict[str, Any]) -> None:
        """Write *data* as a single JSON line and flush."""
        if self._output is None or self._closed:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        line = json.dumps(data, ensure_ascii=False) + "\n"
        self._output.write(line.encode("utf-8"))
        self._output.flush()

    async def close(self) -> None:
        """Stop accepting traffic, release stdin and flush pending output."""
        if self._closed:
            return
        self._closed = True
        if self._pipe is not None:
            self._pipe.close()
            self._pipe = None
        if self._output is not None:
            self._output.flush()
