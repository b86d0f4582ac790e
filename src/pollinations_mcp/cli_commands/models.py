"""``pollinations-mcp models`` — list the models offered by Pollinations."""

from __future__ import annotations

import click

from pollinations_mcp.cli_commands._output import console, print_models_tables


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def models(as_json: bool) -> None:
    """List the available image and text models."""
    from pollinations_mcp.gateway.pollinations import available_models

    listing = available_models()
    if as_json:
        console.print_json(data=listing)
        return
    print_models_tables(listing)
