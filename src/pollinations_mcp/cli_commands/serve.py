"""``pollinations-mcp serve`` — run the MCP server on stdio."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from pollinations_mcp.cli_commands._output import configure_logging, err_console

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Settings YAML file.",
)
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
def serve(config_path: Path | None, telemetry: bool, log_level: str | None) -> None:
    """Serve the Pollinations tools over MCP on stdin/stdout."""
    from pollinations_mcp.runner import ServerRunner
    from pollinations_mcp.settings import SettingsLoader

    try:
        settings = SettingsLoader(config_path).load()
    except Exception as exc:
        err_console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)

    if telemetry:
        settings.telemetry.enabled = True

    configure_logging(log_level or settings.log_level)

    try:
        asyncio.run(ServerRunner(settings).serve())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as exc:
        logger.error("Fatal error in main(): %s", exc)
        sys.exit(1)
