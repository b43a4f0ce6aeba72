"""help and version commands."""

import click

from wpm.cli.output import machine_output
from wpm.version import __version__


@click.command("help")
@click.pass_context
def help_cmd(ctx: click.Context) -> None:
    """Show this help message."""
    parent = ctx.parent if ctx.parent is not None else ctx
    machine_output(parent.get_help())


@click.command("version")
def version_cmd() -> None:
    """Show version information."""
    machine_output(f"wpm (Well.. Simple Package Manager) v{__version__}")
    machine_output("Package manager for Well.. Simple programming language")
