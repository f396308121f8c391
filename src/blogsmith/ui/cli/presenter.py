"""Rich tables summarising registries and hydration runs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from rich import box
from rich.table import Table

from .state import CLIState


def _build_table(title: str | None, columns: Sequence[str]) -> Table:
    table = Table(title=title or None, box=box.SQUARE, show_edge=True, header_style="bold cyan")
    for column in columns:
        table.add_column(column)
    return table


def present_registry(state: CLIState, rows: Sequence[Mapping[str, str]]) -> None:
    """Print the component registry."""
    table = _build_table("Components", ("Name", "Kind", "Hash"))
    for row in rows:
        table.add_row(row["name"], row["kind"], row["hash"])
    state.console.print(table)


def present_hydration_summary(
    state: CLIState,
    results: Sequence[tuple[Path, Mapping[str, int]]],
) -> None:
    """Print per-page hydration counts."""
    table = _build_table(
        "Hydration", ("Page", "Markers", "Hydrated", "Forwarded", "Dropped", "Faults")
    )
    for path, summary in results:
        table.add_row(
            _display_path(path),
            str(summary["markers"]),
            str(summary["hydrated"]),
            str(summary["forwarded"]),
            str(summary["dropped"]),
            str(summary["faults"]),
        )
    state.console.print(table)


def _display_path(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


__all__ = ["present_hydration_summary", "present_registry"]
