"""Protocol layer — MCP wire format, tool adapter and error types.

The tool adapter is imported from :mod:`pollinations_mcp.protocols.adapter` directly.
"""

from pollinations_mcp.protocols.errors import (
    PromptRequiredError,
    ProtocolError,
    RemoteCallError,
    ToolNotFoundError,
    ToolValidationError,
    TransportFault,
)

__all__ = [
    "PromptRequiredError",
    "ProtocolError",
    "RemoteCallError",
    "ToolNotFoundError",
    "ToolValidationError",
    "TransportFault",
]
