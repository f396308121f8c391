"""Page bootstrap: parse, install the dispatcher, run the rules, serialise."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from importlib import metadata
import inspect
import logging
from pathlib import Path
from typing import Any

from blogsmith.components import default_registry
from blogsmith.components.base import Component
from blogsmith.core.config import SiteConfig
from blogsmith.core.context import HydrationContext, PageState
from blogsmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from blogsmith.core.dispatcher import HydrationDispatcher
from blogsmith.core.exceptions import HydrationError
from blogsmith.core.page import Page, TransportHandler
from blogsmith.core.registry import ComponentRegistry
from blogsmith.core.rules import RuleEngine

from .renderer import HTMLRenderer


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HydrationResult:
    """Hydrated markup along with the per-page outcome."""

    html: str
    state: PageState
    page: Page


class PageHydrator:
    """Replace transport markers in HTML pages with rendered components."""

    _ENTRY_POINT_GROUP = "blogsmith.components"
    _ENTRY_POINT_PAYLOADS: list[type[Component]] | None = None

    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        config: SiteConfig | None = None,
        parser: str = "lxml",
        strip_markers: bool = True,
        inject_header: bool = True,
        load_entry_points: bool = True,
    ) -> None:
        self.config = config
        self.parser_backend = parser
        self.strip_markers = strip_markers
        self.inject_header = inject_header

        base_registry = registry if registry is not None else default_registry()
        if load_entry_points:
            base_registry = base_registry.extend(self._iter_entry_point_components())
        self.registry = base_registry

        self.renderer = HTMLRenderer(config)
        self.engine = RuleEngine()
        self._register_builtin_rules()

    def _register_builtin_rules(self) -> None:
        from ..handlers import transport as transport_handlers

        self.engine.collect_from(transport_handlers)

    def register(self, handler: Any) -> None:
        """Register additional page rules.

        Arguments can be callables decorated with :func:`hydrates` or
        modules/classes exposing decorated attributes.
        """
        if getattr(handler, "__page_rule__", None) is not None:
            self.engine.register(handler)
            return
        self.engine.collect_from(handler)

    @classmethod
    def _iter_entry_point_components(cls) -> Iterable[type[Component]]:
        if cls._ENTRY_POINT_PAYLOADS is None:
            payloads: list[type[Component]] = []
            for entry_point in metadata.entry_points(group=cls._ENTRY_POINT_GROUP):
                try:
                    loaded = entry_point.load()
                except Exception as exc:  # noqa: BLE001 - third-party import failures
                    logger.warning(
                        "Skipping component entry point '%s': %s", entry_point.name, exc
                    )
                    continue
                payloads.extend(_component_classes(entry_point.name, loaded))
            cls._ENTRY_POINT_PAYLOADS = payloads
        return cls._ENTRY_POINT_PAYLOADS

    def hydrate(
        self,
        html: str,
        *,
        previous: TransportHandler | None = None,
        runtime: Mapping[str, Any] | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> HydrationResult:
        """Hydrate one HTML page.

        ``previous`` stands for a handler installed on the page transport slot
        by an earlier bootstrap stage. Requests for unknown components are
        forwarded to it.
        """
        active_emitter = emitter or NullEmitter()

        def _on_fallback(preferred: str, fallback: str) -> None:
            active_emitter.event("parser_fallback", {"preferred": preferred, "fallback": fallback})

        page = Page.parse(html, parser=self.parser_backend, on_fallback=_on_fallback)
        self.parser_backend = page.parser
        if previous is not None:
            page.transport.install(previous)

        state = PageState()
        dispatcher = HydrationDispatcher(
            self.registry, self.renderer, page, emitter=active_emitter, state=state
        )
        dispatcher.install()

        context = HydrationContext(
            page=page,
            registry=self.registry,
            renderer=self.renderer,
            config=self.config,
            state=state,
            emitter=active_emitter,
        )
        context.attach_runtime(strip_markers=self.strip_markers, inject_header=self.inject_header)
        if runtime:
            context.attach_runtime(**runtime)

        try:
            self.engine.run(page.document, context)
        except HydrationError:
            raise
        except Exception as exc:
            raise HydrationError("Page hydration failed") from exc

        return HydrationResult(html=page.serialize(), state=state, page=page)

    def hydrate_file(
        self,
        source: Path,
        destination: Path | None = None,
        **options: Any,
    ) -> HydrationResult:
        """Hydrate ``source`` and write the result (in place by default)."""
        result = self.hydrate(source.read_text(encoding="utf-8"), **options)
        target = destination or source
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.html, encoding="utf-8")
        return result

    def describe_registered_rules(self) -> list[dict[str, object]]:
        """Return detailed metadata about registered rules."""
        return self.engine.registry.describe()


def _component_classes(name: str, payload: Any) -> list[type[Component]]:
    if inspect.isclass(payload) and issubclass(payload, Component):
        return [payload]
    if isinstance(payload, Iterable):
        return [
            item for item in payload if inspect.isclass(item) and issubclass(item, Component)
        ]
    logger.warning("Component entry point '%s' does not provide Component classes", name)
    return []


__all__ = ["HydrationResult", "PageHydrator"]
