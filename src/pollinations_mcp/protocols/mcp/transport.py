"""MCP transports — the server side of the stdio channel.

Each transport satisfies the :class:`MCPTransport` protocol, providing
``connect``, ``send``, ``receive``, and ``close`` methods.  Messages are
newline-delimited JSON.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import IO, Any, Protocol, runtime_checkable

# Upper bound for one request line; longer lines are dropped.
MAX_LINE_BYTES = 16 * 1024 * 1024


class MessageTooLargeError(ValueError):
    """An incoming line exceeded the reader limit and was discarded."""

    def __init__(self) -> None:
        super().__init__("Message exceeds the line length limit")


@runtime_checkable
class MCPTransport(Protocol):
    """Abstract transport for MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def send(self, data: dict[str, Any]) -> None: ...
    async def receive(self) -> str | None: ...
    async def close(self) -> None: ...


class StdioServerTransport:
    """Reads requests from stdin and writes responses to stdout.

    ``receive`` yields one raw JSON line at a time (parsing is left to the
    server so malformed input can be answered with a JSON-RPC error) and
    returns ``None`` at end of input.  Writes are serialized so concurrent
    handlers never interleave lines.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None = None,
        writer: IO[bytes] | None = None,
        *,
        limit: int = MAX_LINE_BYTES,
    ) -> None:
        self._reader = reader
        self._limit = limit
        self._writer = writer
        self._write_lock = asyncio.Lock()
        self._closed = False

    async def connect(self) -> None:
        """Attach to the process stdin/stdout unless streams were injected."""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            reader = asyncio.StreamReader(limit=self._limit)
            await loop.connect_read_pipe(
                lambda: asyncio.StreamReaderProtocol(reader), sys.stdin
            )
            self._reader = reader
        if self._writer is None:
            self._writer = sys.stdout.buffer
        self._closed = False

    async def send(self, data: dict[str, Any]) -> None:
        """Write a JSON line to stdout."""
        if self._writer is None or self._closed:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        line = json.dumps(data) + "\n"
        async with self._write_lock:
            self._writer.write(line.encode())
            self._writer.flush()

    async def receive(self) -> str | None:
        """Read the next non-blank line from stdin; ``None`` at EOF.

        Raises:
            MessageTooLargeError: the line exceeded the reader limit.  It has
                been discarded and the next call resumes after it.
        """
        if self._reader is None or self._closed:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        while True:
            line = await self._read_line(self._reader)
            if line is None:
                return None
            text = line.decode(errors="replace").strip()
            if text:
                return text

    @staticmethod
    async def _read_line(reader: asyncio.StreamReader) -> bytes | None:
        try:
            return await reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as exc:
            return exc.partial or None
        except asyncio.LimitOverrunError:
            await _discard_line(reader)
            raise MessageTooLargeError from None

    async def close(self) -> None:
        """Stop accepting traffic and flush pending output."""
        if self._writer is not None and not self._closed:
            self._writer.flush()
        self._closed = True


async def _discard_line(reader: asyncio.StreamReader) -> None:
    """Drop buffered input up to and including the next newline (or EOF)."""
    while True:
        try:
            await reader.readuntil(b"\n")
            return
        except asyncio.LimitOverrunError as exc:
            await reader.readexactly(exc.consumed)
        except asyncio.IncompleteReadError:
            return
