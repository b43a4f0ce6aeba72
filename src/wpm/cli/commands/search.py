"""Search command."""

import click

from wpm.cli.alias import alias
from wpm.cli.error_boundary import cli_error_boundary
from wpm.cli.output import machine_output, user_output
from wpm.core.context import WpmContext
from wpm.core.errors import RegistryMissingError
from wpm.core.package_ops import search_packages


@alias("find")
@click.command("search")
@click.argument("query")
@click.pass_obj
@cli_error_boundary
def search_cmd(ctx: WpmContext, query: str) -> None:
    """Search the cached registry and installed packages.

    Works offline; run 'wpm refresh' first to search the full registry.
    """
    try:
        registry = ctx.registry_store.load_cached()
    except RegistryMissingError:
        user_output("No cached registry; searching installed packages only")
        registry = None

    hits = search_packages(ctx, query, registry)
    if not hits:
        user_output(f"No packages found matching: {query}")
        return

    machine_output(f"Search results for '{query}':")
    for hit in hits:
        marker = " [installed]" if hit.installed else ""
        version = f" v{hit.version}" if hit.version else ""
        machine_output(f"  {hit.name}{version}{marker}")
        if hit.description:
            machine_output(f"      {hit.description}")
    machine_output(f"Found {len(hits)} package(s)")
