"""Refresh command: re-fetch the registry and overwrite the cache."""

import click

from wpm.cli.error_boundary import cli_error_boundary
from wpm.cli.output import user_output
from wpm.core.context import WpmContext


@click.command("refresh")
@click.pass_obj
@cli_error_boundary
def refresh_cmd(ctx: WpmContext) -> None:
    """Download the latest package registry."""
    mapping_url = ctx.mapping_url()
    user_output(f"Fetching registry from {mapping_url}...")
    registry = ctx.registry_store.refresh(mapping_url)
    count = len(registry.package_names())
    user_output(click.style("✓ ", fg="green") + f"Registry updated: {count} package(s) available")
