import dataclasses
import logging

import click

from wpm.cli.alias import register_with_aliases
from wpm.cli.commands.get import get_cmd
from wpm.cli.commands.info import help_cmd, version_cmd
from wpm.cli.commands.install import install_cmd
from wpm.cli.commands.list_cmd import list_cmd
from wpm.cli.commands.refresh import refresh_cmd
from wpm.cli.commands.run import run_cmd
from wpm.cli.commands.search import search_cmd
from wpm.cli.commands.uninstall import uninstall_cmd
from wpm.cli.commands.update import update_cmd
from wpm.cli.output import user_output
from wpm.core.context import create_context
from wpm.version import __version__

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-v", "--version", prog_name="wpm")
@click.option("--debug", is_flag=True, help="Show debug logging and full stack traces")
@click.option(
    "--mapping-url",
    default=None,
    metavar="URL",
    help="Registry URL (overrides WPM_MAPPING_URL and wpm.toml)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, mapping_url: str | None) -> None:
    """Well.. Simple Package Manager.

    Packages are stored in ws_packages/ and tracked in ws_packages.json.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(debug=debug, mapping_url_override=mapping_url)
    elif mapping_url is not None:
        ctx.obj = dataclasses.replace(ctx.obj, mapping_url_override=mapping_url)

    if ctx.invoked_subcommand is None:
        user_output(ctx.get_help())


cli.add_command(refresh_cmd)
cli.add_command(install_cmd)
register_with_aliases(cli, update_cmd)  # upgrade
register_with_aliases(cli, uninstall_cmd)  # remove, rm
register_with_aliases(cli, list_cmd)  # ls
cli.add_command(get_cmd)
cli.add_command(run_cmd)
register_with_aliases(cli, search_cmd)  # find
cli.add_command(help_cmd)
cli.add_command(version_cmd)


def main() -> None:
    """CLI entry point used by the `wpm` console script."""
    cli()
