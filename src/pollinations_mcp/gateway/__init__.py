"""Gateway — outbound calls to the Pollinations generation service."""

from pollinations_mcp.gateway.pollinations import (
    POLLINATIONS_IMAGE_API,
    POLLINATIONS_TEXT_API,
    PollinationsGateway,
)

__all__ = [
    "POLLINATIONS_IMAGE_API",
    "POLLINATIONS_TEXT_API",
    "PollinationsGateway",
]
