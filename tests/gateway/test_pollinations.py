"""Tests for PollinationsGateway request building and response mapping."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pollinations_mcp.gateway.pollinations import (
    IMAGE_SUCCESS_MESSAGE,
    PollinationsGateway,
    available_models,
    build_image_url,
    build_text_body,
)
from pollinations_mcp.protocols.errors import RemoteCallError, TransportFault
from pollinations_mcp.protocols.mcp.models import ImageContent, TextContent
from pollinations_mcp.tools.arguments import GenerateImageArgs, GenerateTextArgs, parse_arguments


class TestBuildImageUrl:
    def test_default_query(self) -> None:
        url = build_image_url(GenerateImageArgs(prompt="a cat"))
        assert url == (
            "https://image.pollinations.ai/prompt/a%20cat"
            "?width=1024&height=1024&model=flux&nologo=true&enhance=false"
        )

    def test_seed_appended_last(self) -> None:
        url = build_image_url(GenerateImageArgs(prompt="x", seed=7, enhance=True))
        assert url.endswith("&enhance=true&seed=7")

    def test_prompt_is_a_single_path_segment(self) -> None:
        url = build_image_url(GenerateImageArgs(prompt="sun/moon?&#"))
        path = url.split("?", 1)[0]
        assert path == "https://image.pollinations.ai/prompt/sun%2Fmoon%3F%26%23"

    def test_uri_component_safe_characters_kept(self) -> None:
        url = build_image_url(GenerateImageArgs(prompt="hi!(it's)*~"))
        assert "/prompt/hi!(it's)*~?" in url

    def test_unicode_prompt(self) -> None:
        url = build_image_url(GenerateImageArgs(prompt="café"))
        assert "/prompt/caf%C3%A9?" in url

    def test_fractional_width_in_query(self) -> None:
        args = parse_arguments("generate_image", {"prompt": "x", "width": 512.5, "height": 640.0})
        assert "?width=512.5&height=640&" in build_image_url(args)  # type: ignore[arg-type]

    def test_custom_base_url(self) -> None:
        url = build_image_url(GenerateImageArgs(prompt="x"), "http://localhost:9000/prompt/")
        assert url.startswith("http://localhost:9000/prompt/x?")


class TestBuildTextBody:
    def test_minimal(self) -> None:
        body = build_text_body(GenerateTextArgs(prompt="hello"))
        assert body == {
            "messages": [{"role": "user", "content": "hello"}],
            "model": "openai",
            "temperature": 0.7,
        }

    def test_system_message_first(self) -> None:
        body = build_text_body(GenerateTextArgs(prompt="hello", system="be brief"))
        assert body["messages"] == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hello"},
        ]

    def test_empty_system_omitted(self) -> None:
        body = build_text_body(GenerateTextArgs(prompt="hello", system=""))
        assert len(body["messages"]) == 1

    def test_optional_fields(self) -> None:
        body = build_text_body(GenerateTextArgs(prompt="hello", seed=3, max_tokens=50))
        assert body["seed"] == 3
        assert body["max_tokens"] == 50


class TestGenerateImage:
    async def test_success(self, make_gateway, recorder) -> None:
        handler = recorder(200)
        gateway = make_gateway(handler)

        result = await gateway.generate_image(GenerateImageArgs(prompt="a cat"))

        assert not result.is_error
        assert len(result.content) == 2
        text, image = result.content
        assert isinstance(text, TextContent)
        assert isinstance(image, ImageContent)
        payload = json.loads(text.text)
        assert payload["success"] is True
        assert payload["width"] == 1024
        assert payload["height"] == 1024
        assert payload["model"] == "flux"
        assert payload["prompt"] == "a cat"
        assert payload["message"] == IMAGE_SUCCESS_MESSAGE
        assert "/prompt/a%20cat?" in payload["imageUrl"]
        assert "seed" not in payload
        assert image.data == payload["imageUrl"]
        assert image.mime_type == "image/jpeg"

    async def test_issues_head_request(self, make_gateway, recorder) -> None:
        handler = recorder(200)
        await make_gateway(handler).generate_image(GenerateImageArgs(prompt="a cat", seed=9))

        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "HEAD"
        assert request.url.params["seed"] == "9"
        assert request.url.params["nologo"] == "true"

    async def test_seed_echoed(self, make_gateway, recorder) -> None:
        result = await make_gateway(recorder(200)).generate_image(
            GenerateImageArgs(prompt="x", seed=42)
        )
        assert result.payload()["seed"] == 42

    async def test_not_found(self, make_gateway, recorder) -> None:
        gateway = make_gateway(recorder(404))
        with pytest.raises(RemoteCallError, match="^Failed to generate image: Not Found$") as exc_info:
            await gateway.generate_image(GenerateImageArgs(prompt="x"))
        assert exc_info.value.status_code == 404

    async def test_connection_error(self, make_gateway) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        gateway = make_gateway(refuse)
        with pytest.raises(TransportFault, match="Connection refused"):
            await gateway.generate_image(GenerateImageArgs(prompt="x"))

    async def test_fault_without_message(self, make_gateway) -> None:
        def time_out(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("", request=request)

        gateway = make_gateway(time_out)
        with pytest.raises(TransportFault, match="^Unknown error occurred$"):
            await gateway.generate_image(GenerateImageArgs(prompt="x"))


class TestGenerateText:
    async def test_whole_temperature_echoed_as_integer(self, make_gateway, recorder) -> None:
        handler = recorder(200, "ok")
        args = parse_arguments("generate_text", {"prompt": "hello", "temperature": 1.0})

        result = await make_gateway(handler).generate_text(args)  # type: ignore[arg-type]

        assert '"temperature": 1\n' in result.text
        assert json.loads(handler.requests[0].content)["temperature"] == 1
        assert b'"temperature":1.0' not in handler.requests[0].content.replace(b" ", b"")

    async def test_success(self, make_gateway, recorder) -> None:
        gateway = make_gateway(recorder(200, "hi there"))

        result = await gateway.generate_text(
            GenerateTextArgs(prompt="hello", model="mistral", temperature=1.5)
        )

        assert len(result.content) == 1
        payload = result.payload()
        assert payload == {
            "success": True,
            "response": "hi there",
            "model": "mistral",
            "prompt": "hello",
            "temperature": 1.5,
        }

    async def test_posts_json_body(self, make_gateway, recorder) -> None:
        handler = recorder(200, "ok")
        await make_gateway(handler).generate_text(
            GenerateTextArgs(prompt="hello", system="sys", seed=1, max_tokens=10)
        )

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.scheme == "https"
        assert request.url.host == "text.pollinations.ai"
        assert request.headers["content-type"] == "application/json"
        body = json.loads(request.content)
        assert body["messages"][0] == {"role": "system", "content": "sys"}
        assert body["seed"] == 1
        assert body["max_tokens"] == 10

    async def test_body_is_not_parsed(self, make_gateway, recorder) -> None:
        gateway = make_gateway(recorder(200, '{"not": "parsed"}'))
        result = await gateway.generate_text(GenerateTextArgs(prompt="hello"))
        assert result.payload()["response"] == '{"not": "parsed"}'

    async def test_server_error(self, make_gateway, recorder) -> None:
        gateway = make_gateway(recorder(500))
        with pytest.raises(RemoteCallError, match="^Failed to generate text: Internal Server Error$"):
            await gateway.generate_text(GenerateTextArgs(prompt="hello"))


class TestListModels:
    async def test_no_network(self, make_gateway) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        result = await make_gateway(fail).list_models()
        payload = result.payload()
        assert [m["name"] for m in payload["image_models"]] == [
            "flux",
            "flux-realism",
            "flux-anime",
            "flux-3d",
            "turbo",
        ]
        assert len(payload["text_models"]) == 7

    def test_entries_have_descriptions(self) -> None:
        models = available_models()
        assert models["text_models"][5] == {
            "name": "qwen-2.5-coder-32b",
            "description": "Qwen 2.5 Coder 32B - specialized for coding",
        }


class TestGatewayLifecycle:
    async def test_owned_client_closed(self) -> None:
        mock_client = AsyncMock()
        with patch("pollinations_mcp.gateway.pollinations.httpx.AsyncClient", return_value=mock_client):
            async with PollinationsGateway():
                pass
        mock_client.aclose.assert_awaited_once()

    async def test_injected_client_left_open(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with PollinationsGateway(client):
            pass
        assert not client.is_closed
        await client.aclose()

    async def test_timeout_passed_to_client(self) -> None:
        with patch("pollinations_mcp.gateway.pollinations.httpx.AsyncClient") as client_cls:
            client_cls.return_value = AsyncMock()
            PollinationsGateway(timeout=12.5)
        client_cls.assert_called_once_with(timeout=12.5, follow_redirects=True)
