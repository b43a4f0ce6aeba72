"""List command for showing installed packages."""

import click

from wpm.cli.alias import alias
from wpm.cli.error_boundary import cli_error_boundary
from wpm.cli.output import machine_output
from wpm.core.context import WpmContext
from wpm.core.package_ops import format_installed_packages, list_installed


@alias("ls")
@click.command("list")
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: WpmContext) -> None:
    """List all installed packages."""
    for line in format_installed_packages(list_installed(ctx)):
        machine_output(line)
