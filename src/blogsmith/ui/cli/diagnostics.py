"""Terminal sink for hydration diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from blogsmith.core.diagnostics import format_event_message

from .state import CLIState, get_cli_state, render_message


class CliEmitter:
    """Print warnings and errors to stderr and keep events on the CLI state.

    Known events are also echoed as info lines, which only show with ``-v``.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self.state = state if state is not None else get_cli_state()
        self.debug_enabled = (
            self.state.show_tracebacks if debug_enabled is None else bool(debug_enabled)
        )

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        render_message("warning", message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        render_message("error", message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.state.record_event(name, payload)
        message = format_event_message(name, payload)
        if message is not None:
            render_message("info", message)


__all__ = ["CliEmitter"]
