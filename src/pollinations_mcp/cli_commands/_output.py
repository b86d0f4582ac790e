"""Shared CLI output formatters and logging setup."""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pollinations_mcp.protocols.mcp.models import MCPToolDef, ToolResult  # noqa: TC001

console = Console()
# stdout belongs to the MCP stream while serving; diagnostics go to stderr.
err_console = Console(stderr=True)


def configure_logging(level: str = "INFO") -> None:
    """Route all log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_tools_table(tools: list[MCPToolDef]) -> None:
    """Pretty-print the tool catalog as a table."""
    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")
    table.add_column("Description")

    for tool in tools:
        properties: dict[str, Any] = tool.input_schema.get("properties", {})
        required = set(tool.input_schema.get("required", []))
        args = ", ".join(f"{name}*" if name in required else name for name in properties) or "-"
        table.add_row(tool.name, args, _truncate(tool.description))

    console.print(table)


def print_models_tables(models: dict[str, list[dict[str, str]]]) -> None:
    """Pretty-print the image and text model listings."""
    for key, title in (("image_models", "Image Models"), ("text_models", "Text Models")):
        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Description")
        for entry in models.get(key, []):
            table.add_row(entry["name"], entry["description"])
        console.print(table)


def print_result(result: ToolResult) -> None:
    """Print a tool result envelope as JSON."""
    console.print_json(result.model_dump_json(by_alias=True))


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
