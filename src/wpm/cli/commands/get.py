"""Get command: install everything listed in wpackage.json."""

from pathlib import Path

import click

from wpm.cli.error_boundary import cli_error_boundary
from wpm.cli.output import user_output
from wpm.cli.progress import download_progress
from wpm.core.context import WpmContext
from wpm.core.package_ops import sync_from_manifest


@click.command("get")
@click.option(
    "--manifest",
    "manifest_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Project manifest to read (default: ./wpackage.json)",
)
@click.pass_obj
@cli_error_boundary
def get_cmd(ctx: WpmContext, manifest_path: Path | None) -> None:
    """Install or update every package listed in wpackage.json."""
    if manifest_path is None:
        manifest_path = ctx.config.manifest_path

    with download_progress("Downloading") as on_progress:
        summary = sync_from_manifest(ctx, manifest_path, on_progress=on_progress)

    if not summary.entries:
        user_output(f"No packages listed in {manifest_path}")
        return

    for entry in summary.entries:
        mark = click.style("✓", fg="green") if entry.success else click.style("✗", fg="red")
        user_output(f"{mark} {entry.name}: {entry.message}")

    succeeded = len(summary.entries) - len(summary.failed)
    user_output(f"\n{succeeded}/{len(summary.entries)} package(s) ready")
    if not summary.success:
        raise SystemExit(1)
