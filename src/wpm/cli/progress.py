"""Download progress rendering with rich.

Progress is display-only: callers get a callback (or None) and nothing they
do depends on what it shows.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)

from wpm.core.http import ProgressCallback


@contextmanager
def download_progress(
    label: str, console: Console | None = None
) -> Iterator[ProgressCallback | None]:
    """Yield a progress callback bound to a rich progress bar.

    Yields None when stderr is not a terminal, so piped and test output stays
    free of control sequences.
    """
    if console is None:
        console = Console(stderr=True)
    if not console.is_terminal:
        yield None
        return

    with Progress(
        TextColumn("{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task_id = progress.add_task(label, total=None)

        def on_progress(received: int, total: int | None) -> None:
            progress.update(task_id, completed=received, total=total)

        yield on_progress
