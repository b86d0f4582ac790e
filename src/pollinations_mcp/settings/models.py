"""Pydantic models for the server settings file consumed by ``pollinations-mcp serve``."""

from __future__ import annotations

from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from pollinations_mcp.gateway.pollinations import POLLINATIONS_IMAGE_API, POLLINATIONS_TEXT_API


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Top-level server settings.

    Every field has a default, so an absent settings file means "talk to the
    public Pollinations endpoints and wait for them without a timeout".
    """

    image_api_url: str = POLLINATIONS_IMAGE_API
    text_api_url: str = POLLINATIONS_TEXT_API
    timeout: float | None = Field(default=None, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("image_api_url", "text_api_url")
    @classmethod
    def _valid_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            msg = f"not an http(s) URL: {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
