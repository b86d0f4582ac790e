"""Tool catalog and argument validation."""

from pollinations_mcp.tools.arguments import (
    GenerateImageArgs,
    GenerateTextArgs,
    ModelListArgs,
    ToolArguments,
    parse_arguments,
)
from pollinations_mcp.tools.catalog import CATALOG, ParamSpec, ToolSpec, get_tool_spec, list_tool_defs

__all__ = [
    "CATALOG",
    "GenerateImageArgs",
    "GenerateTextArgs",
    "ModelListArgs",
    "ParamSpec",
    "ToolArguments",
    "ToolSpec",
    "get_tool_spec",
    "list_tool_defs",
    "parse_arguments",
]
