"""Settings loading: YAML file, ``${VAR}`` expansion, environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pollinations_mcp.settings.errors import SettingsError
from pollinations_mcp.settings.models import ServerSettings

ENV_IMAGE_API = "POLLINATIONS_IMAGE_API"
ENV_TEXT_API = "POLLINATIONS_TEXT_API"

_ENV_OVERRIDES = {
    ENV_IMAGE_API: "image_api_url",
    ENV_TEXT_API: "text_api_url",
}


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`ServerSettings`."""

    def __init__(self, path: Path | None = None, *, environ: dict[str, str] | None = None) -> None:
        self._path = path
        self._environ = os.environ if environ is None else environ

    def load(self) -> ServerSettings:
        """Read YAML (if a path was given), apply env overrides, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.

        Raises:
            SettingsError: On read errors, YAML parse errors or validation failures.
        """
        data: dict[str, Any] = self._read() if self._path is not None else {}

        for env_name, field in _ENV_OVERRIDES.items():
            value = self._environ.get(env_name)
            if value:
                data[field] = value

        try:
            return ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise SettingsError(str(exc)) from exc

    def _read(self) -> dict[str, Any]:
        assert self._path is not None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsError(f"YAML parse error: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsError("Settings YAML must be a mapping")
        return data


def load_settings(path: str | Path | None = None) -> ServerSettings:
    """Convenience wrapper around :class:`SettingsLoader`."""
    return SettingsLoader(Path(path) if path is not None else None).load()
