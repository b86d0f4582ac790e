"""pollinations-mcp CLI entrypoint."""

from __future__ import annotations

import click

from pollinations_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="pollinations-mcp")
def main() -> None:
    """Pollinations AI MCP server — image and text generation tools."""


# Register subcommands
from pollinations_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
