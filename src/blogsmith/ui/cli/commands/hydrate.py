"""Implementation of the `blogsmith hydrate` command."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

import typer

from blogsmith.adapters.html import PageHydrator
from blogsmith.core.config import SiteConfig, load_site_config
from blogsmith.core.exceptions import HydrationError, SiteConfigError, exception_hint

from ..diagnostics import CliEmitter
from ..presenter import present_hydration_summary
from ..state import emit_error, get_cli_state


InputsArgument = Annotated[
    list[Path],
    typer.Argument(
        metavar="PATH...",
        help="Rendered HTML pages, or directories searched recursively for *.html files.",
        exists=True,
        file_okay=True,
        dir_okay=True,
        readable=True,
        resolve_path=True,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Directory receiving hydrated pages. Pages are rewritten in place when omitted.",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Site configuration (YAML) providing the namespace and header links.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

ParserOption = Annotated[
    str,
    typer.Option("--parser", help="BeautifulSoup parser backend used to read pages."),
]

KeepMarkersOption = Annotated[
    bool,
    typer.Option(
        "--keep-markers/--strip-markers",
        help="Keep marker scripts whose components were hydrated.",
    ),
]


def collect_pages(inputs: Iterable[Path]) -> list[tuple[Path, Path]]:
    """Return ``(page, relative_path)`` pairs for files and directory trees."""
    pages: list[tuple[Path, Path]] = []
    seen: set[Path] = set()
    for entry in inputs:
        if entry.is_dir():
            candidates = [(path, path.relative_to(entry)) for path in sorted(entry.rglob("*.html"))]
        else:
            candidates = [(entry, Path(entry.name))]
        for path, relative in candidates:
            if path in seen:
                continue
            seen.add(path)
            pages.append((path, relative))
    return pages


def hydrate(
    inputs: InputsArgument,
    output: OutputOption = None,
    config: ConfigOption = None,
    parser: ParserOption = "lxml",
    keep_markers: KeepMarkersOption = False,
) -> None:
    """Replace component placeholders in rendered pages."""
    state = get_cli_state()

    site_config: SiteConfig | None = None
    if config is not None:
        try:
            site_config = load_site_config(config)
        except SiteConfigError as exc:
            emit_error(exception_hint(exc) or str(exc), exception=exc)
            raise typer.Exit(code=1) from exc

    pages = collect_pages(inputs)
    if not pages:
        raise typer.BadParameter("No HTML pages found in the given paths.")

    hydrator = PageHydrator(config=site_config, parser=parser, strip_markers=not keep_markers)
    emitter = CliEmitter(state=state)

    results: list[tuple[Path, dict[str, int]]] = []
    for source, relative in pages:
        destination = output / relative if output is not None else None
        try:
            result = hydrator.hydrate_file(source, destination, emitter=emitter)
        except HydrationError as exc:
            emit_error(f"Failed to hydrate '{source}'.", exception=exc)
            raise typer.Exit(code=1) from exc
        results.append((destination or source, result.state.summary()))

    present_hydration_summary(state, results)


__all__ = ["collect_pages", "hydrate"]
