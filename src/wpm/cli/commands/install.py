"""Install command."""

import click

from wpm.cli.error_boundary import cli_error_boundary
from wpm.cli.output import error_output, user_output, warning_output
from wpm.cli.progress import download_progress
from wpm.core.context import WpmContext
from wpm.core.package_ops import InstallOutcome, install_package


def report_install_outcome(outcome: InstallOutcome) -> None:
    """Print warnings and the success line, or the error line."""
    for warning in outcome.warnings:
        warning_output(warning)

    if outcome.record is None:
        error_output(f"Failed to install {outcome.name}: {outcome.error}")
        return

    record = outcome.record
    user_output(click.style("✓ ", fg="green") + f"Installed {record.name} v{record.version}")
    user_output(f"  Location: {record.path}")


@click.command("install")
@click.argument("name")
@click.pass_obj
@cli_error_boundary
def install_cmd(ctx: WpmContext, name: str) -> None:
    """Install a package from the registry.

    Reinstalls over any existing copy.

    Examples:

        wpm install mathlib
    """
    registry = ctx.registry_store.ensure(ctx.mapping_url)

    user_output(f"Installing package: {name}")
    with download_progress(f"Downloading {name}") as on_progress:
        outcome = install_package(ctx, name, registry, on_progress=on_progress)

    report_install_outcome(outcome)
    if not outcome.success:
        raise SystemExit(1)
