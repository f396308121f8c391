"""Implementation of the `blogsmith components` command."""

from __future__ import annotations

import json

import typer

from blogsmith.adapters.html import PageHydrator

from ..presenter import present_registry
from ..state import get_cli_state


def components(
    as_json: bool = typer.Option(False, "--json", help="Print the registry as JSON."),
) -> None:
    """List the components placeholders can reference."""
    rows = PageHydrator().registry.describe()
    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return
    present_registry(get_cli_state(), rows)


__all__ = ["components"]
