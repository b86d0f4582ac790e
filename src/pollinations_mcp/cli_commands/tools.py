"""``pollinations-mcp tools`` — inspect and call tools without an MCP client."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click

from pollinations_mcp.cli_commands._output import console, err_console, print_result, print_tools_table


@click.group()
def tools() -> None:
    """Inspect and call tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output the raw tools/list payload.")
def list_tools(as_json: bool) -> None:
    """List the tool catalog."""
    from pollinations_mcp.tools.catalog import list_tool_defs

    tool_defs = list_tool_defs()
    if as_json:
        console.print_json(data={"tools": [t.to_wire() for t in tool_defs]})
        return
    print_tools_table(tool_defs)


@tools.command("call")
@click.argument("name")
@click.option(
    "--arg",
    "-a",
    "raw_args",
    multiple=True,
    metavar="KEY=VALUE",
    help="Tool argument; VALUE is parsed as JSON when possible.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Settings YAML file.",
)
def call(name: str, raw_args: tuple[str, ...], config_path: Path | None) -> None:
    """Call tool NAME once and print the result envelope.

    Exits with status 1 when the tool reports an error.
    """
    from pollinations_mcp.runner import ServerRunner
    from pollinations_mcp.settings import SettingsLoader

    try:
        arguments = parse_cli_arguments(raw_args)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--arg") from exc

    try:
        settings = SettingsLoader(config_path).load()
    except Exception as exc:
        err_console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)

    result = asyncio.run(ServerRunner(settings).call(name, arguments))
    print_result(result)
    if result.is_error:
        sys.exit(1)


def parse_cli_arguments(raw_args: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` pairs into an argument mapping."""
    arguments: dict[str, Any] = {}
    for raw in raw_args:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            msg = f"expected KEY=VALUE, got {raw!r}"
            raise ValueError(msg)
        try:
            arguments[key] = json.loads(value)
        except json.JSONDecodeError:
            arguments[key] = value
    return arguments
