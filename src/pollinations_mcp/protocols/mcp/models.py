"""MCP models — JSON-RPC 2.0 messages, tool definitions and tool results.

Implements the message format used by the Model Context Protocol for
tool discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    A request without an ``id`` is a notification and expects no response.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    id: int | str | None = None
    params: dict[str, Any] = {}

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: int | str | None, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: int | str | None,
        code: int,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message, data=data))

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the wire: exactly one of ``result``/``error``, ``id`` always present."""
        payload = self.model_dump(exclude_none=True)
        payload["id"] = self.id
        return payload


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Content parts of a tools/call result
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Image content part.

    ``data`` holds whatever the server hands back for the image; for the
    Pollinations gateway this is the image URL rather than encoded bytes.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field(default="image/jpeg", alias="mimeType")


ContentPart = TextContent | ImageContent


class ToolResult(BaseModel):
    """The envelope returned for every ``tools/call``.

    Success carries an ordered list of content parts.  Failure carries a
    single text part holding ``{"success": false, "error": ...}`` and sets
    ``is_error``.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[ContentPart] = []
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        """Create a ToolResult with a single text content part."""
        parts: list[ContentPart] = [TextContent(text=text)]
        return cls(content=parts)

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> ToolResult:
        """Create a ToolResult whose single text part is *payload* as indented JSON."""
        return cls.from_text(dump_json(payload))

    @classmethod
    def failure(cls, message: str) -> ToolResult:
        """Create a failure envelope carrying *message*."""
        parts: list[ContentPart] = [
            TextContent(text=dump_json({"success": False, "error": message}))
        ]
        return cls(content=parts, is_error=True)

    @property
    def text(self) -> str:
        """Concatenated text from all TextContent parts."""
        return "".join(part.text for part in self.content if isinstance(part, TextContent))

    def payload(self) -> Any:
        """Parse the first text part as JSON."""
        for part in self.content:
            if isinstance(part, TextContent):
                return json.loads(part.text)
        return None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def dump_json(payload: Any) -> str:
    """Serialize *payload* the way every text part is serialized: two-space indent."""
    return json.dumps(payload, indent=2, ensure_ascii=False)
