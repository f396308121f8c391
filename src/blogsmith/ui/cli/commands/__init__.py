"""CLI command implementations exposed via `blogsmith.ui.cli`."""

from __future__ import annotations

from .components import components
from .hydrate import hydrate


__all__ = ["components", "hydrate"]
