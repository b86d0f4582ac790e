"""Typed tool arguments and the validator that produces them.

Incoming ``tools/call`` arguments are an untyped mapping.  :func:`parse_arguments`
turns that mapping into one of the argument models below, applying declared
defaults, or raises a :class:`~pollinations_mcp.protocols.errors.ToolValidationError`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pollinations_mcp.protocols.errors import (
    PromptRequiredError,
    ToolNotFoundError,
    ToolValidationError,
)
from pollinations_mcp.tools.catalog import (
    GENERATE_IMAGE,
    GENERATE_TEXT,
    GET_AVAILABLE_MODELS,
    IMAGE_MODEL_NAMES,
    TEXT_MODEL_NAMES,
)


def _check_model(value: str, allowed: tuple[str, ...]) -> str:
    if value not in allowed:
        msg = f"Input should be one of: {', '.join(allowed)}"
        raise ValueError(msg)
    return value


def _whole_as_int(value: float) -> float:
    # 1.0 is echoed and sent as 1, 512.5 passes through unchanged.
    return int(value) if value.is_integer() else value


class GenerateImageArgs(BaseModel):
    """Arguments for ``generate_image``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    prompt: str
    width: float = 1024
    height: float = 1024
    seed: int | None = None
    model: str = "flux"
    nologo: bool = True
    enhance: bool = False

    @field_validator("model")
    @classmethod
    def _known_model(cls, value: str) -> str:
        return _check_model(value, IMAGE_MODEL_NAMES)

    @field_validator("width", "height")
    @classmethod
    def _render_dimension(cls, value: float) -> float:
        return _whole_as_int(value)


class GenerateTextArgs(BaseModel):
    """Arguments for ``generate_text``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    prompt: str
    model: str = "openai"
    seed: int | None = None
    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int | None = None
    system: str | None = None

    @field_validator("model")
    @classmethod
    def _known_model(cls, value: str) -> str:
        return _check_model(value, TEXT_MODEL_NAMES)

    @field_validator("temperature")
    @classmethod
    def _render_temperature(cls, value: float) -> float:
        return _whole_as_int(value)


class ModelListArgs(BaseModel):
    """``get_available_models`` takes no arguments; anything passed is ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


ToolArguments = GenerateImageArgs | GenerateTextArgs | ModelListArgs

_ARGUMENT_MODELS: dict[str, type[BaseModel]] = {
    GENERATE_IMAGE: GenerateImageArgs,
    GENERATE_TEXT: GenerateTextArgs,
    GET_AVAILABLE_MODELS: ModelListArgs,
}

_PROMPTED = frozenset({GENERATE_IMAGE, GENERATE_TEXT})


def parse_arguments(name: str, arguments: dict[str, Any] | None) -> ToolArguments:
    """Validate *arguments* for tool *name* and return the typed model.

    ``None`` values count as absent, so declared defaults apply to them.

    Raises:
        ToolNotFoundError: *name* is not in the catalog.
        PromptRequiredError: a prompted tool got a missing or falsy prompt.
        ToolValidationError: any other type, enum or range violation.
    """
    model_cls = _ARGUMENT_MODELS.get(name)
    if model_cls is None:
        raise ToolNotFoundError(name)

    supplied = {k: v for k, v in (arguments or {}).items() if v is not None}

    if name in _PROMPTED and not supplied.get("prompt"):
        raise PromptRequiredError

    try:
        return model_cls.model_validate(supplied)  # type: ignore[return-value]
    except ValidationError as exc:
        raise _to_validation_error(name, exc) from exc


def _to_validation_error(name: str, exc: ValidationError) -> ToolValidationError:
    details: list[str] = []
    first_field: str | None = None
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        first_field = first_field or field
        message = error["msg"].removeprefix("Value error, ")
        details.append(f"{field}: {message}")
    return ToolValidationError(
        f"Invalid arguments for {name}: {'; '.join(details)}",
        field=first_field,
    )
