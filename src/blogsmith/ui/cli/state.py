"""Per-invocation CLI state: verbosity, traceback policy and recorded events."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import Any

import click
from rich.console import Console
from rich.text import Text


__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]

_LEVEL_STYLES = {"warning": "yellow", "error": "red"}


@dataclass(slots=True)
class CLIState:
    """Options shared by every command of one CLI run."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: defaultdict[str, list[dict[str, Any]]] = field(
        default_factory=lambda: defaultdict(list), init=False
    )

    @property
    def console(self) -> Console:
        """Console bound to the current ``sys.stdout``."""
        return Console(file=sys.stdout)

    @property
    def err_console(self) -> Console:
        """Console bound to the current ``sys.stderr``."""
        return Console(file=sys.stderr, highlight=False)

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        """Keep a hydration event for the end-of-run summary."""
        self.events[name].append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Return and forget the events recorded under ``name``."""
        return self.events.pop(name, [])


_CURRENT: ContextVar[CLIState | None] = ContextVar("blogsmith_cli_state", default=None)


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state attached to the click context chain, or the ambient one."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        root = ctx.find_root()
        if not isinstance(root.obj, CLIState):
            if not create:
                raise RuntimeError("CLI state is not initialised for this context.")
            root.obj = CLIState()
        _CURRENT.set(root.obj)
        return root.obj

    state = _CURRENT.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
        _CURRENT.set(state)
    return state


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    """Apply global options to the active state and return it."""
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(verbosity, 0)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _details(exception: BaseException, message: str, verbosity: int) -> list[str]:
    lines: list[str] = []
    detail = str(exception).strip()
    if detail and detail not in message:
        lines.append(detail)
    lines.append(f"type: {type(exception).__name__}")
    if verbosity >= 2:
        seen: set[int] = set()
        cause = exception.__cause__ or exception.__context__
        while cause is not None and id(cause) not in seen:
            seen.add(id(cause))
            lines.append(f"caused by {type(cause).__name__}: {cause}")
            cause = cause.__cause__ or cause.__context__
    return lines


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``message`` for ``level``; info lines only appear with ``-v``."""
    state = get_cli_state()
    if level == "info":
        if state.verbosity:
            state.console.log(message)
        return

    style = _LEVEL_STYLES.get(level, "yellow")
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity:
        text.append("\n" + "\n".join(_details(exception, message, state.verbosity)), style=style)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether ``--debug`` was given."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
