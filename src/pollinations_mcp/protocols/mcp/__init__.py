"""MCP protocol — Model Context Protocol server."""

from pollinations_mcp.protocols.mcp.models import (
    ImageContent,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    TextContent,
    ToolResult,
)
from pollinations_mcp.protocols.mcp.server import MCPServer
from pollinations_mcp.protocols.mcp.transport import (
    MCPTransport,
    MessageTooLargeError,
    StdioServerTransport,
)

__all__ = [
    "ImageContent",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPServer",
    "MCPToolDef",
    "MCPTransport",
    "MessageTooLargeError",
    "StdioServerTransport",
    "TextContent",
    "ToolResult",
]
