"""Progress bar helper for long CLI runs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressTask:
    """Handle for advancing a single rich progress task."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self._progress = progress
        self._task_id = task_id

    def update(self, advance: int = 1) -> None:
        self._progress.update(self._task_id, advance=advance)


@contextmanager
def create_progress(description: str = "Processing", total: int | None = None) -> Iterator[ProgressTask]:
    """Create a progress bar on stderr.

    Args:
        description: Text description for the progress bar.
        total: Total number of items (None for indeterminate).

    Yields:
        Task handle with update().
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        TaskProgressColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=Console(stderr=True),
        transient=False,
    )
    with progress:
        yield ProgressTask(progress, progress.add_task(description, total=total))
