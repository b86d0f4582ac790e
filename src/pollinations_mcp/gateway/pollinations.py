"""PollinationsGateway — outbound HTTP calls to the Pollinations service.

Translates typed tool arguments into requests against
``image.pollinations.ai`` and ``text.pollinations.ai`` and normalizes the
outcome into a :class:`~pollinations_mcp.protocols.mcp.models.ToolResult`.
One attempt per call; failures raise
:class:`~pollinations_mcp.protocols.errors.ProtocolError` subclasses.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from pollinations_mcp.protocols.errors import RemoteCallError, TransportFault
from pollinations_mcp.protocols.mcp.models import (
    ContentPart,
    ImageContent,
    TextContent,
    ToolResult,
    dump_json,
)
from pollinations_mcp.tools.arguments import GenerateImageArgs, GenerateTextArgs
from pollinations_mcp.tools.catalog import IMAGE_MODELS, TEXT_MODELS

logger = logging.getLogger(__name__)

POLLINATIONS_IMAGE_API = "https://image.pollinations.ai/prompt"
POLLINATIONS_TEXT_API = "https://text.pollinations.ai"

IMAGE_MIME_TYPE = "image/jpeg"
IMAGE_SUCCESS_MESSAGE = (
    "Image generated successfully! Use the imageUrl to display or download the image."
)

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~".
_PROMPT_SAFE_CHARS = "!*'()"


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def build_image_url(args: GenerateImageArgs, base_url: str = POLLINATIONS_IMAGE_API) -> str:
    """Return the image URL for *args*: the encoded prompt as a path segment plus query."""
    params: dict[str, str] = {
        "width": str(args.width),
        "height": str(args.height),
        "model": args.model,
        "nologo": _format_bool(args.nologo),
        "enhance": _format_bool(args.enhance),
    }
    if args.seed is not None:
        params["seed"] = str(args.seed)
    encoded_prompt = quote(args.prompt, safe=_PROMPT_SAFE_CHARS)
    return f"{base_url.rstrip('/')}/{encoded_prompt}?{urlencode(params)}"


def build_text_body(args: GenerateTextArgs) -> dict[str, Any]:
    """Return the JSON body posted to the text endpoint."""
    messages: list[dict[str, str]] = []
    if args.system:
        messages.append({"role": "system", "content": args.system})
    messages.append({"role": "user", "content": args.prompt})

    body: dict[str, Any] = {
        "messages": messages,
        "model": args.model,
        "temperature": args.temperature,
    }
    if args.seed is not None:
        body["seed"] = args.seed
    if args.max_tokens is not None:
        body["max_tokens"] = args.max_tokens
    return body


def available_models() -> dict[str, list[dict[str, str]]]:
    """The static model listing served by ``get_available_models``."""
    return {
        "image_models": [m.model_dump() for m in IMAGE_MODELS],
        "text_models": [m.model_dump() for m in TEXT_MODELS],
    }


class PollinationsGateway:
    """Async client for the Pollinations generation endpoints.

    Owns a single :class:`httpx.AsyncClient` for connection reuse unless one
    is injected.  The owned client follows redirects; a ``timeout`` of
    ``None`` means requests wait as long as the service takes.  Usage::

        async with PollinationsGateway() as gateway:
            result = await gateway.generate_image(GenerateImageArgs(prompt="a cat"))
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        image_api_url: str = POLLINATIONS_IMAGE_API,
        text_api_url: str = POLLINATIONS_TEXT_API,
        timeout: float | None = None,
    ) -> None:
        self._image_api_url = image_api_url
        self._text_api_url = text_api_url
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._client = client

    async def __aenter__(self) -> PollinationsGateway:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def generate_image(self, args: GenerateImageArgs) -> ToolResult:
        """Check the image URL with a HEAD request and hand it back as a reference."""
        image_url = build_image_url(args, self._image_api_url)
        logger.debug("HEAD %s", image_url)
        response = await self._send("HEAD", image_url)
        if not response.is_success:
            raise RemoteCallError("generate image", response.status_code, response.reason_phrase)

        payload: dict[str, Any] = {
            "success": True,
            "imageUrl": image_url,
            "prompt": args.prompt,
            "width": args.width,
            "height": args.height,
            "model": args.model,
        }
        if args.seed is not None:
            payload["seed"] = args.seed
        payload["message"] = IMAGE_SUCCESS_MESSAGE

        parts: list[ContentPart] = [
            TextContent(text=dump_json(payload)),
            ImageContent(data=image_url, mime_type=IMAGE_MIME_TYPE),
        ]
        return ToolResult(content=parts)

    async def generate_text(self, args: GenerateTextArgs) -> ToolResult:
        """POST the chat body and return the raw response text."""
        body = build_text_body(args)
        logger.debug("POST %s model=%s", self._text_api_url, args.model)
        response = await self._send(
            "POST",
            self._text_api_url,
            json=body,
            headers={"Content-Type": "application/json"},
        )
        if not response.is_success:
            raise RemoteCallError("generate text", response.status_code, response.reason_phrase)

        payload: dict[str, Any] = {
            "success": True,
            "response": response.text,
            "model": args.model,
            "prompt": args.prompt,
        }
        if args.seed is not None:
            payload["seed"] = args.seed
        payload["temperature"] = args.temperature
        return ToolResult.from_json(payload)

    async def list_models(self) -> ToolResult:
        """Return the static model listing; no network call."""
        return ToolResult.from_json(available_models())

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportFault(str(exc)) from exc
