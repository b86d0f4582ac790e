"""Shared error types for the protocol layer.

Every failure a tool invocation can hit is a :class:`ProtocolError`.  The
:class:`~pollinations_mcp.protocols.adapter.ToolAdapter` catches them at the
invoke boundary and turns them into a failure envelope.
"""

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolValidationError(ProtocolError):
    """Tool arguments were missing or malformed; no network call was made."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class PromptRequiredError(ToolValidationError):
    """The ``prompt`` argument was absent or empty."""

    def __init__(self) -> None:
        super().__init__("Prompt is required", field="prompt")


class RemoteCallError(ProtocolError):
    """The generation service answered with a non-success HTTP status."""

    def __init__(self, action: str, status_code: int, status_text: str) -> None:
        self.action = action
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(f"Failed to {action}: {status_text}")


class TransportFault(ProtocolError):
    """The outbound request never produced a response (DNS, timeout, reset)."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail or UNKNOWN_ERROR_MESSAGE)


def describe_error(exc: BaseException) -> str:
    """Return the human-readable message carried by *exc*.

    Falls back to :data:`UNKNOWN_ERROR_MESSAGE` when the exception has no text.
    """
    return str(exc) or UNKNOWN_ERROR_MESSAGE
