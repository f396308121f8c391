"""Hydration context primitives shared across page rules."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .diagnostics import DiagnosticEmitter, NullEmitter


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.adapters.html.renderer import HTMLRenderer

    from .config import SiteConfig
    from .page import Page
    from .registry import ComponentRegistry
    from .rules import HydrationPhase


@dataclass(slots=True)
class PageState:
    """Outcome counters accumulated while hydrating a page."""

    hydrated: list[dict[str, Any]] = field(default_factory=list)
    forwarded: list[dict[str, Any]] = field(default_factory=list)
    dropped: list[dict[str, Any]] = field(default_factory=list)
    faults: list[dict[str, Any]] = field(default_factory=list)
    markers_seen: int = 0
    header_injected: bool = False

    def record(self, outcome: str, *, target: str, component: str, **extra: Any) -> None:
        """Append an entry to the named outcome list."""
        bucket: list[dict[str, Any]] = getattr(self, outcome)
        bucket.append({"target": target, "component": component, **extra})

    def summary(self) -> dict[str, int]:
        """Return outcome counts."""
        return {
            "markers": self.markers_seen,
            "hydrated": len(self.hydrated),
            "forwarded": len(self.forwarded),
            "dropped": len(self.dropped),
            "faults": len(self.faults),
        }


@dataclass
class HydrationContext:
    """Shared context passed to every page rule."""

    page: Page
    registry: ComponentRegistry
    renderer: HTMLRenderer
    config: SiteConfig | None = None
    state: PageState = field(default_factory=PageState)
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    runtime: dict[str, Any] = field(default_factory=dict)
    phase: HydrationPhase | None = None

    _processed_nodes: defaultdict[int, set[int]] = field(
        default_factory=lambda: defaultdict(set), init=False
    )

    @property
    def document(self) -> Any:
        """Return the parsed page root."""
        return self.page.document

    def enter_phase(self, phase: HydrationPhase) -> None:
        """Mark the current phase."""
        self.phase = phase

    def attach_runtime(self, **runtime: Any) -> None:
        """Attach ad-hoc options visible to rules."""
        self.runtime.update(runtime)

    def mark_processed(self, node: Any, *, phase: HydrationPhase | None = None) -> None:
        """Flag a node as handled for the selected phase."""
        label = phase or self.phase
        if label is None:
            return
        self._processed_nodes[label.value].add(id(node))

    def is_processed(self, node: Any, *, phase: HydrationPhase | None = None) -> bool:
        """Check whether a node has been handled in the given phase."""
        label = phase or self.phase
        if label is None:
            return False
        return id(node) in self._processed_nodes[label.value]


__all__ = ["HydrationContext", "PageState"]
