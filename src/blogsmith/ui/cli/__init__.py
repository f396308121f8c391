"""Public CLI exports for blogsmith."""

from __future__ import annotations

from .app import app, main
from .commands import components, hydrate
from .state import debug_enabled, emit_error, emit_warning, get_cli_state


__all__ = [
    "app",
    "components",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "hydrate",
    "main",
]
