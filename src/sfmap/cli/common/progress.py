"""Progress formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from sfmap.cli.common.output import console

_MAX_DATABASE_NAME_WIDTH = 40


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


class DatabaseProgress:
    """Progress reporter rendering `processed/total` databases as a Rich bar."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self._progress = progress
        self._task_id = task_id

    def start(self, database: str) -> None:
        label = _truncate(database, _MAX_DATABASE_NAME_WIDTH)
        self._progress.update(self._task_id, database=label)

    def advance(self) -> None:
        self._progress.advance(self._task_id, 1)


@contextmanager
def database_progress(total: int) -> Iterator[DatabaseProgress]:
    """Show an overall progress bar for a mapping run over `total` databases."""
    progress = Progress(
        TimeElapsedColumn(),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[bold]{task.fields[database]}[/]"),
        console=console,
    )
    task_id = progress.add_task("databases", total=max(total, 1), database="")

    with progress:
        yield DatabaseProgress(progress, task_id)
        progress.update(task_id, database="Done!")
