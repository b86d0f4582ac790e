"""Server wiring: settings → gateway → adapter → MCP server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pollinations_mcp.gateway.pollinations import PollinationsGateway
from pollinations_mcp.protocols.adapter import ToolAdapter
from pollinations_mcp.protocols.mcp.server import MCPServer
from pollinations_mcp.protocols.mcp.transport import StdioServerTransport
from pollinations_mcp.settings.models import ServerSettings
from pollinations_mcp.utils.telemetry import configure_telemetry

if TYPE_CHECKING:
    from pollinations_mcp.protocols.mcp.models import ToolResult
    from pollinations_mcp.protocols.mcp.transport import MCPTransport

logger = logging.getLogger(__name__)


def build_gateway(settings: ServerSettings) -> PollinationsGateway:
    """Create a gateway pointed at the configured endpoints."""
    return PollinationsGateway(
        image_api_url=settings.image_api_url,
        text_api_url=settings.text_api_url,
        timeout=settings.timeout,
    )


class ServerRunner:
    """Run the MCP server (or a single tool call) for a :class:`ServerSettings`."""

    def __init__(self, settings: ServerSettings | None = None) -> None:
        self.settings = settings or ServerSettings()

    async def serve(self, transport: MCPTransport | None = None) -> None:
        """Serve MCP requests on *transport* (stdio by default) until EOF.

        Steps:
        1. Optionally configure telemetry.
        2. Open the gateway's HTTP client.
        3. Run the request loop; the client is closed when it ends.
        """
        self._configure_telemetry()
        async with build_gateway(self.settings) as gateway:
            server = MCPServer(ToolAdapter(gateway))
            await server.serve(transport or StdioServerTransport())

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Invoke one tool outside of any transport."""
        async with build_gateway(self.settings) as gateway:
            return await ToolAdapter(gateway).invoke(name, arguments)

    def _configure_telemetry(self) -> None:
        telemetry = self.settings.telemetry
        if not telemetry.enabled:
            return
        logger.debug("Enabling telemetry (otlp=%s)", telemetry.otlp_endpoint or "-")
        configure_telemetry(
            export_to_console=telemetry.otlp_endpoint is None,
            otlp_endpoint=telemetry.otlp_endpoint,
        )
