"""Console output for the CLI: status lines and result tables."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

console = Console(
    theme=Theme(
        {
            "ok": "bold green",
            "warn": "yellow",
            "err": "bold red",
            "title": "bold cyan",
            "meta": "dim",
        }
    )
)

_MARKERS = {"info": ("title", "›"), "ok": ("ok", "✓"), "warn": ("warn", "⚠"), "err": ("err", "✗")}


def _table(title: str, *columns: tuple[str, str | None]) -> Table:
    t = Table(title=title, show_lines=False)
    for header, style in columns:
        t.add_column(header, style=style)
    return t


@dataclass(frozen=True)
class Out:
    """Writes status lines and Rich tables to the shared console."""

    def _line(self, kind: str, msg: str) -> None:
        style, marker = _MARKERS[kind]
        console.print(f"[{style}]{marker}[/] {msg}")

    def info(self, msg: str) -> None:
        self._line("info", msg)

    def success(self, msg: str) -> None:
        self._line("ok", msg)

    def warn(self, msg: str) -> None:
        self._line("warn", msg)

    def error(self, msg: str) -> None:
        self._line("err", msg)

    @contextmanager
    def status(self, msg: str):
        """Show a transient spinner while a catalog call is in flight."""
        with console.status(msg, spinner="dots"):
            yield

    def run_summary(self, title: str, items: Mapping[str, Any]) -> None:
        """Print a run header followed by its settings as key-value lines."""
        console.print(f"[title]{title}[/]")
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def warehouses_table(self, warehouses: Iterable[Any], title: str = "Warehouses") -> None:
        """
        Expects objects with .name .size .state .type
        (like sfmap.core.models.WarehouseInfo)
        """
        t = _table(title, ("Name", "ok"), ("Size", None), ("State", None), ("Type", "meta"))
        for w in warehouses:
            t.add_row(w.name, w.size, w.state, w.type)
        console.print(t)

    def databases_table(self, databases: Iterable[Any], title: str = "Databases") -> None:
        """Render databases (objects with .name, .owner, .created_on)."""
        t = _table(title, ("Name", "ok"), ("Owner", "meta"), ("Created", "meta"))
        for d in databases:
            t.add_row(d.name, d.owner, d.created_on)
        console.print(t)

    def mapping_report_table(self, report: Any, title: str = "Mapping results") -> None:
        """
        Render the outcome per database.

        Expects an object with `.written` (name -> path) and
        `.skipped` (name -> error message).
        """
        t = _table(title, ("Database", "ok"), ("Result", None), ("Detail", "meta"))
        for name, path in report.written.items():
            t.add_row(name, "[ok]OK[/]", str(path))
        for name, error in report.skipped.items():
            t.add_row(name, "[err]SKIPPED[/]", error)
        console.print(t)


out = Out()
