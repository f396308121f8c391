"""Typer application wiring for the blogsmith CLI."""

from __future__ import annotations

from rich.traceback import Traceback
import typer

from blogsmith.version import get_version

from .commands.components import components
from .commands.hydrate import hydrate
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Hydrate component placeholders in rendered blog pages.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit(code=0)


@app.callback()
def _app_root(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the blogsmith version and exit.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Print hydration events (-v) and exception causes (-vv).",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Print a full traceback for unexpected failures.",
    ),
) -> None:
    set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)


app.command(name="hydrate")(hydrate)
app.command(name="components")(components)


def main() -> None:
    """Console-script entry point."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.", exception=exc)
        raise typer.Exit(code=130) from exc
    except Exception as exc:
        state = get_cli_state()
        if not state.show_tracebacks:
            emit_error(f"Unexpected failure: {exc}", exception=exc)
            raise typer.Exit(code=1) from exc
        state.err_console.print(
            Traceback.from_exception(
                type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
            )
        )
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
