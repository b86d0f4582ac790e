"""Tool catalog — the static list of operations this server exposes.

Each :class:`ToolSpec` is declared once at import time and never mutated.
:func:`list_tool_defs` renders the catalog to MCP tool definitions with
JSON Schema ``inputSchema`` objects.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from pollinations_mcp.protocols.mcp.models import MCPToolDef

GENERATE_IMAGE = "generate_image"
GENERATE_TEXT = "generate_text"
GET_AVAILABLE_MODELS = "get_available_models"


class ModelInfo(BaseModel):
    """A model offered by the generation service."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str


IMAGE_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(name="flux", description="High-quality general purpose image generation"),
    ModelInfo(name="flux-realism", description="Photorealistic image generation"),
    ModelInfo(name="flux-anime", description="Anime and manga style images"),
    ModelInfo(name="flux-3d", description="3D rendered style images"),
    ModelInfo(name="turbo", description="Fast image generation with good quality"),
)

TEXT_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(name="openai", description="OpenAI GPT models (default)"),
    ModelInfo(name="mistral", description="Mistral AI model"),
    ModelInfo(name="mistral-large", description="Mistral Large model for complex tasks"),
    ModelInfo(name="claude-3.5-sonnet", description="Anthropic Claude 3.5 Sonnet"),
    ModelInfo(name="llama-3.3-70b", description="Meta Llama 3.3 70B"),
    ModelInfo(name="qwen-2.5-coder-32b", description="Qwen 2.5 Coder 32B - specialized for coding"),
    ModelInfo(name="searchgpt", description="Search-augmented generation model"),
)

IMAGE_MODEL_NAMES: tuple[str, ...] = tuple(m.name for m in IMAGE_MODELS)
TEXT_MODEL_NAMES: tuple[str, ...] = tuple(m.name for m in TEXT_MODELS)


class ParamSpec(BaseModel):
    """Declarative schema for a single tool argument."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["string", "number", "boolean"]
    description: str = ""
    required: bool = False
    default: Any = None
    enum: tuple[str, ...] | None = None
    minimum: float | None = None
    maximum: float | None = None

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        return schema


class ToolSpec(BaseModel):
    """A catalog entry: name, description and ordered argument schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    params: tuple[ParamSpec, ...] = ()

    @property
    def required(self) -> list[str]:
        return [p.name for p in self.params if p.required]

    def defaults(self) -> dict[str, Any]:
        """Declared defaults of every optional argument that has one."""
        return {p.name: p.default for p in self.params if not p.required and p.default is not None}

    def to_input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.to_json_schema() for p in self.params},
        }
        if self.required:
            schema["required"] = self.required
        return schema

    def to_tool_def(self) -> MCPToolDef:
        return MCPToolDef(
            name=self.name,
            description=self.description,
            input_schema=self.to_input_schema(),
        )


_SEED = ParamSpec(
    name="seed",
    type="number",
    description="Random seed for reproducible results (optional)",
)

CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        name=GENERATE_IMAGE,
        description=(
            "Generate an image using Pollinations AI. Creates stunning AI-generated images "
            "from text prompts. Returns a URL to the generated image."
        ),
        params=(
            ParamSpec(
                name="prompt",
                type="string",
                description="The text prompt describing the image to generate",
                required=True,
            ),
            ParamSpec(
                name="width",
                type="number",
                description="Image width in pixels (default: 1024)",
                default=1024,
            ),
            ParamSpec(
                name="height",
                type="number",
                description="Image height in pixels (default: 1024)",
                default=1024,
            ),
            _SEED,
            ParamSpec(
                name="model",
                type="string",
                description=(
                    "Model to use: flux, flux-realism, flux-anime, flux-3d, turbo (default: flux)"
                ),
                enum=IMAGE_MODEL_NAMES,
                default="flux",
            ),
            ParamSpec(
                name="nologo",
                type="boolean",
                description="Remove Pollinations watermark (default: true)",
                default=True,
            ),
            ParamSpec(
                name="enhance",
                type="boolean",
                description="Enhance the prompt automatically (default: false)",
                default=False,
            ),
        ),
    ),
    ToolSpec(
        name=GENERATE_TEXT,
        description=(
            "Generate text using Pollinations AI language models. Supports various models "
            "including OpenAI, Mistral, and more. Returns generated text response."
        ),
        params=(
            ParamSpec(
                name="prompt",
                type="string",
                description="The text prompt or question",
                required=True,
            ),
            ParamSpec(
                name="model",
                type="string",
                description="Model to use (default: openai)",
                enum=TEXT_MODEL_NAMES,
                default="openai",
            ),
            _SEED,
            ParamSpec(
                name="temperature",
                type="number",
                description="Temperature for randomness (0.0 to 2.0, default: 0.7)",
                default=0.7,
                minimum=0,
                maximum=2,
            ),
            ParamSpec(
                name="max_tokens",
                type="number",
                description="Maximum number of tokens to generate (optional)",
            ),
            ParamSpec(
                name="system",
                type="string",
                description="System message to set context (optional)",
            ),
        ),
    ),
    ToolSpec(
        name=GET_AVAILABLE_MODELS,
        description=(
            "Get a list of all available models for image and text generation on Pollinations AI"
        ),
    ),
)

_BY_NAME: dict[str, ToolSpec] = {spec.name: spec for spec in CATALOG}


def get_tool_spec(name: str) -> ToolSpec | None:
    """Look up a catalog entry by name."""
    return _BY_NAME.get(name)


def list_tool_defs() -> list[MCPToolDef]:
    """Render the full catalog, in declaration order."""
    return [spec.to_tool_def() for spec in CATALOG]
