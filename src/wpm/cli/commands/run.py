"""Run command: execute a module from an installed package."""

import click

from wpm.cli.error_boundary import cli_error_boundary
from wpm.core.context import WpmContext
from wpm.core.module_runner import resolve_and_run


@click.command("run")
@click.argument("module")
@click.pass_obj
@cli_error_boundary
def run_cmd(ctx: WpmContext, module: str) -> None:
    """Run MODULE with the Well.. Simple interpreter.

    The exit code of the interpreter becomes the exit code of wpm.
    """
    exit_code = resolve_and_run(ctx, module)
    if exit_code < 0:
        # Killed by signal N: report 128 + N like a shell
        exit_code = 128 - exit_code
    if exit_code != 0:
        raise SystemExit(exit_code)
