"""Output helpers with clear intent.

user_output: status and diagnostics for humans, written to stderr.
machine_output: results a caller might pipe, written to stdout.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    click.echo(message, nl=nl)


def error_output(message: str) -> None:
    """Print a red "Error:" prefixed line to stderr."""
    user_output(click.style("Error: ", fg="red") + message)


def warning_output(message: str) -> None:
    """Print a yellow "Warning:" prefixed line to stderr."""
    user_output(click.style("Warning: ", fg="yellow") + message)
