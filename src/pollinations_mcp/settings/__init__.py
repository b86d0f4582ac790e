"""Server settings — models and the YAML loader."""

from pollinations_mcp.settings.errors import SettingsError
from pollinations_mcp.settings.loader import SettingsLoader, load_settings
from pollinations_mcp.settings.models import ServerSettings, TelemetrySettings

__all__ = [
    "ServerSettings",
    "SettingsError",
    "SettingsLoader",
    "TelemetrySettings",
    "load_settings",
]
