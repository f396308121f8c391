"""Hydration dispatcher bridging page markers to components.

A dispatcher is created once per page. :meth:`HydrationDispatcher.install`
captures whatever handler the page transport slot held and puts
:meth:`HydrationDispatcher.handle` in its place. Requests naming a component
hash this dispatcher does not know are handed to the captured handler
unchanged, so several independent producers can share one slot.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from .context import PageState
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import DispatcherStateError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.adapters.html.renderer import HTMLRenderer

    from .page import Page, TransportHandler, TransportSlot
    from .registry import ComponentRegistry


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HydrationRequest:
    """Replace element ``target_id`` with component ``component_hash``."""

    target_id: str
    component_hash: str
    props: Mapping[str, Any]


class HydrationDispatcher:
    """Resolve hydration requests against a component registry."""

    def __init__(
        self,
        registry: ComponentRegistry,
        renderer: HTMLRenderer,
        page: Page,
        *,
        previous: TransportHandler | None = None,
        emitter: DiagnosticEmitter | None = None,
        state: PageState | None = None,
    ) -> None:
        self.registry = registry
        self.renderer = renderer
        self.page = page
        self.previous = previous
        self.emitter = emitter or NullEmitter()
        self.state = state if state is not None else PageState()
        self._installed = False

    @property
    def installed(self) -> bool:
        """Return whether the dispatcher owns a transport slot."""
        return self._installed

    def install(self, slot: TransportSlot | None = None) -> None:
        """Take over ``slot`` (the page slot by default), keeping its handler.

        A previous handler injected at construction takes precedence over the
        one found in the slot.
        """
        if self._installed:
            raise DispatcherStateError("Hydration dispatcher is already installed.")
        target_slot = slot if slot is not None else self.page.transport
        displaced = target_slot.install(self.handle)
        if self.previous is None:
            self.previous = displaced
        self._installed = True

    def handle(self, target_id: str, component_hash: str, props: Mapping[str, Any]) -> None:
        """Hydrate one placeholder, or pass the request down the chain."""
        component_cls = self.registry.get(component_hash)
        if component_cls is None:
            self._delegate(HydrationRequest(target_id, component_hash, props))
            return

        name = component_cls.__name__
        target = self.page.get_element_by_id(target_id)
        if target is None:
            self.state.record("faults", target=target_id, component=name, reason="missing")
            self.emitter.warning(f"Placeholder '#{target_id}' not found while hydrating {name}.")
            self.emitter.event("target_missing", {"target": target_id, "component": name})
            return

        component = self.renderer.create(component_cls, props)
        fragment = self.renderer.render(component)
        target.insert_after(fragment)
        target.extract()

        self.state.record("hydrated", target=target_id, component=name)
        self.emitter.event("hydrated", {"target": target_id, "component": name})
        logger.debug("hydrated #%s with %s", target_id, name)

    def _delegate(self, request: HydrationRequest) -> None:
        payload = {"target": request.target_id, "hash": request.component_hash}
        if self.previous is None:
            self.state.record("dropped", target=request.target_id, component=request.component_hash)
            self.emitter.event("dropped", payload)
            return
        self.state.record("forwarded", target=request.target_id, component=request.component_hash)
        self.emitter.event("forwarded", payload)
        self.previous(request.target_id, request.component_hash, request.props)


__all__ = ["HydrationDispatcher", "HydrationRequest"]
