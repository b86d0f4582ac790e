"""ToolAdapter — serves the catalog and routes tool calls to the gateway.

This is the single boundary where failures become envelopes: whatever goes
wrong inside :meth:`ToolAdapter.invoke` comes back as a
:class:`~pollinations_mcp.protocols.mcp.models.ToolResult` with ``is_error``
set, never as an exception.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pollinations_mcp.protocols.errors import ProtocolError, describe_error
from pollinations_mcp.protocols.mcp.models import ToolResult
from pollinations_mcp.tools.arguments import (
    GenerateImageArgs,
    GenerateTextArgs,
    ModelListArgs,
    ToolArguments,
    parse_arguments,
)
from pollinations_mcp.tools.catalog import list_tool_defs
from pollinations_mcp.utils.telemetry import (
    ATTR_IS_ERROR,
    ATTR_MODEL,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from pollinations_mcp.gateway.pollinations import PollinationsGateway
    from pollinations_mcp.protocols.mcp.models import MCPToolDef

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ToolAdapter:
    """Protocol adapter between MCP requests and the Pollinations gateway.

    Usage::

        async with PollinationsGateway() as gateway:
            adapter = ToolAdapter(gateway)
            tools = adapter.list_tools()
            result = await adapter.invoke("generate_text", {"prompt": "hi"})
    """

    def __init__(self, gateway: PollinationsGateway) -> None:
        self._gateway = gateway
        self._tools: tuple[MCPToolDef, ...] = tuple(list_tool_defs())

    def list_tools(self) -> list[MCPToolDef]:
        """Return the catalog, in declaration order."""
        return list(self._tools)

    async def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Validate, dispatch and normalize a single tool call."""
        with _tracer.start_as_current_span("pollinations.tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                args = parse_arguments(name, arguments)
                model = getattr(args, "model", None)
                if model is not None:
                    span.set_attribute(ATTR_MODEL, model)
                result = await self._dispatch(args)
            except ProtocolError as exc:
                logger.warning("Tool %s failed: %s", name, describe_error(exc))
                result = ToolResult.failure(describe_error(exc))
            except Exception as exc:
                logger.exception("Unexpected error while running tool %s", name)
                result = ToolResult.failure(describe_error(exc))
            else:
                logger.info("Tool %s succeeded", name)
            span.set_attribute(ATTR_IS_ERROR, result.is_error)
            return result

    async def _dispatch(self, args: ToolArguments) -> ToolResult:
        if isinstance(args, GenerateImageArgs):
            return await self._gateway.generate_image(args)
        if isinstance(args, GenerateTextArgs):
            return await self._gateway.generate_text(args)
        if isinstance(args, ModelListArgs):
            return await self._gateway.list_models()
        msg = f"No handler for {type(args).__name__}"
        raise TypeError(msg)
