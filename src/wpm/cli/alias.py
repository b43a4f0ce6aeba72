"""Command aliases.

    @alias("ls")
    @click.command("list")
    def list_cmd(): ...

    register_with_aliases(cli, list_cmd)   # registers "list" and "ls"
"""

from collections.abc import Callable

import click

_ALIASES_ATTR = "_wpm_aliases"


def alias(*names: str) -> Callable[[click.Command], click.Command]:
    """Attach alternative names to a click command."""

    def decorator(cmd: click.Command) -> click.Command:
        setattr(cmd, _ALIASES_ATTR, tuple(names))
        return cmd

    return decorator


def get_aliases(cmd: click.Command) -> tuple[str, ...]:
    return getattr(cmd, _ALIASES_ATTR, ())


def register_with_aliases(group: click.Group, cmd: click.Command, name: str | None = None) -> None:
    """Add cmd to group under its own name and every alias."""
    group.add_command(cmd, name=name)
    for alias_name in get_aliases(cmd):
        group.add_command(cmd, name=alias_name)
