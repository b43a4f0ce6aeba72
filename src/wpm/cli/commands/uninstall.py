"""Uninstall command."""

import click

from wpm.cli.alias import alias
from wpm.cli.error_boundary import cli_error_boundary
from wpm.cli.output import user_output
from wpm.core.context import WpmContext
from wpm.core.package_ops import uninstall_package


@alias("remove", "rm")
@click.command("uninstall")
@click.argument("name")
@click.pass_obj
@cli_error_boundary
def uninstall_cmd(ctx: WpmContext, name: str) -> None:
    """Remove an installed package and its metadata."""
    record = uninstall_package(ctx, name)
    user_output(click.style("✓ ", fg="green") + f"Removed {record.name} v{record.version}")
