"""Error boundary handling for CLI commands.

This module provides a decorator that catches well-known exceptions at CLI
entry points and displays clean error messages without stack traces.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any

import click

from wpm.cli.output import error_output
from wpm.core.errors import WpmError

logger = logging.getLogger(__name__)


def _debug_enabled() -> bool:
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    return bool(getattr(ctx.find_root().obj, "debug", False))


def cli_error_boundary[T: Callable[..., Any]](func: T) -> T:
    """Decorator that turns expected failures into "Error: ..." and exit code 1.

    Catches:
        - WpmError: Registry, manifest, package and interpreter failures
        - OSError: Filesystem failures (permissions, disk full)

    With --debug the original exception propagates with its traceback. All
    other exceptions bubble up normally.

    Example:
        @click.command()
        @click.pass_obj
        @cli_error_boundary
        def my_command(ctx: WpmContext) -> None:
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (WpmError, OSError) as e:
            logger.debug("Command failed: %s: %s", type(e).__name__, e, exc_info=True)
            if _debug_enabled():
                raise
            error_output(str(e))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
