"""MCPServer — JSON-RPC request router in front of a :class:`ToolAdapter`.

Implements ``initialize``, ``ping``, ``tools/list`` and ``tools/call`` over an
:class:`~pollinations_mcp.protocols.mcp.transport.MCPTransport`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pollinations_mcp import __version__
from pollinations_mcp.protocols.mcp.models import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcRequest,
    JsonRpcResponse,
)
from pollinations_mcp.protocols.mcp.transport import MessageTooLargeError
from pollinations_mcp.utils.telemetry import ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from pollinations_mcp.protocols.adapter import ToolAdapter
    from pollinations_mcp.protocols.mcp.transport import MCPTransport

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "pollinations-ai"


class MCPServer:
    """Routes MCP requests to the tool adapter.

    Usage::

        server = MCPServer(adapter)
        await server.serve(StdioServerTransport())
    """

    def __init__(
        self,
        adapter: ToolAdapter,
        *,
        name: str = SERVER_NAME,
        version: str = __version__,
    ) -> None:
        self._adapter = adapter
        self._name = name
        self._version = version

    async def serve(self, transport: MCPTransport) -> None:
        """Read requests until EOF, answering each one on *transport*.

        Each request is handled in its own task so a slow remote call does
        not hold up the rest of the stream.
        """
        await transport.connect()
        logger.info("Pollinations AI MCP Server running on stdio")
        pending: set[asyncio.Task[None]] = set()
        try:
            while True:
                try:
                    line = await transport.receive()
                except MessageTooLargeError as exc:
                    logger.warning("Discarding request: %s", exc)
                    error = JsonRpcResponse.failure(None, INVALID_REQUEST, str(exc))
                    await self._send(transport, error.to_wire())
                    continue
                if line is None:
                    break
                task = asyncio.create_task(self._answer(transport, line))
                pending.add(task)
                task.add_done_callback(pending.discard)
            if pending:
                await asyncio.gather(*pending)
        finally:
            await transport.close()
        logger.info("Input closed, server stopped")

    async def _answer(self, transport: MCPTransport, line: str) -> None:
        response = await self.handle_message(line)
        if response is not None:
            await self._send(transport, response)

    @staticmethod
    async def _send(transport: MCPTransport, response: dict[str, Any]) -> None:
        try:
            await transport.send(response)
        except Exception:
            logger.exception("Failed to send response for id %r", response.get("id"))

    async def handle_message(self, raw: str) -> dict[str, Any] | None:
        """Handle one raw JSON-RPC line; return the wire response or ``None``."""
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unparseable message")
            return JsonRpcResponse.failure(None, PARSE_ERROR, "Parse error").to_wire()

        request_id = data.get("id") if isinstance(data, dict) else None
        try:
            request = JsonRpcRequest.model_validate(data)
        except ValidationError:
            return JsonRpcResponse.failure(request_id, INVALID_REQUEST, "Invalid request").to_wire()

        response = await self.handle_request(request)
        return response.to_wire() if response is not None else None

    async def handle_request(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        """Dispatch a parsed request by method name."""
        with _tracer.start_as_current_span("pollinations.rpc") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            try:
                result = await self._route(request)
            except _InvalidParamsError as exc:
                return self._reply_error(request, INVALID_PARAMS, str(exc))
            except _MethodNotFoundError:
                return self._reply_error(
                    request, METHOD_NOT_FOUND, f"Method not found: {request.method}"
                )
            except Exception:
                logger.exception("Internal error while handling %s", request.method)
                return self._reply_error(request, INTERNAL_ERROR, "Internal error")

        if request.is_notification:
            return None
        return JsonRpcResponse.success(request.id, result)

    async def _route(self, request: JsonRpcRequest) -> dict[str, Any]:
        method = request.method
        if method == "initialize":
            return self._initialize(request.params)
        if method == "ping":
            return {}
        if method == "tools/list":
            return {"tools": [tool.to_wire() for tool in self._adapter.list_tools()]}
        if method == "tools/call":
            return await self._call_tool(request.params)
        if method.startswith("notifications/"):
            logger.debug("Notification received: %s", method)
            return {}
        raise _MethodNotFoundError(method)

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client_info = params.get("clientInfo") or {}
        logger.info(
            "Client connected: %s %s",
            client_info.get("name", "unknown"),
            client_info.get("version", ""),
        )
        requested = params.get("protocolVersion")
        return {
            "protocolVersion": requested if isinstance(requested, str) else PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self._name, "version": self._version},
        }

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str):
            msg = "tools/call requires a string 'name'"
            raise _InvalidParamsError(msg)
        arguments = params.get("arguments")
        if arguments is not None and not isinstance(arguments, dict):
            msg = "tools/call 'arguments' must be an object"
            raise _InvalidParamsError(msg)
        result = await self._adapter.invoke(name, arguments)
        return result.to_wire()

    @staticmethod
    def _reply_error(request: JsonRpcRequest, code: int, message: str) -> JsonRpcResponse | None:
        if request.is_notification:
            return None
        return JsonRpcResponse.failure(request.id, code, message)


class _MethodNotFoundError(Exception):
    pass


class _InvalidParamsError(Exception):
    pass
