"""Update command."""

import click

from wpm.cli.alias import alias
from wpm.cli.commands.install import report_install_outcome
from wpm.cli.error_boundary import cli_error_boundary
from wpm.cli.output import user_output
from wpm.cli.progress import download_progress
from wpm.core.context import WpmContext
from wpm.core.package_ops import UpdateStatus, update_package


@alias("upgrade")
@click.command("update")
@click.argument("name")
@click.pass_obj
@cli_error_boundary
def update_cmd(ctx: WpmContext, name: str) -> None:
    """Reinstall a package if the registry has a different version.

    Any version string that differs from the installed one counts as an
    update, including an older one.
    """
    registry = ctx.registry_store.ensure(ctx.mapping_url)

    with download_progress(f"Downloading {name}") as on_progress:
        outcome = update_package(ctx, name, registry, on_progress=on_progress)

    if outcome.status == UpdateStatus.UP_TO_DATE:
        user_output(f"Package '{name}' is already up to date (v{outcome.previous_version})")
        return

    if outcome.install is not None:
        report_install_outcome(outcome.install)
    if outcome.status == UpdateStatus.FAILED:
        raise SystemExit(1)

    if outcome.install is not None and outcome.install.record is not None:
        new_version = outcome.install.record.version
        user_output(f"  Updated {name}: {outcome.previous_version} → {new_version}")
