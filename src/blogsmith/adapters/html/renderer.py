"""Build detached HTML fragments from components."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag
from jinja2 import Environment, Template

from blogsmith.core.exceptions import HydrationError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.components.base import Component
    from blogsmith.core.config import SiteConfig


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(autoescape=True, keep_trailing_newline=False)


@lru_cache(maxsize=64)
def _compile(source: str) -> Template:
    return _environment().from_string(source)


class HTMLRenderer:
    """Create components from property bags and render them to elements."""

    def __init__(self, config: SiteConfig | None = None) -> None:
        self.config = config

    def create(self, component: type[Component], props: Mapping[str, Any] | None = None) -> Component:
        """Instantiate ``component`` with validated ``props``."""
        return component.create(props)

    def render(self, component: Component) -> Tag:
        """Render ``component`` into a single detached element."""
        return component.render(self)

    def render_template(self, source: str, context: Mapping[str, Any], *, name: str = "component") -> Tag:
        """Render a Jinja2 template and return its single root element."""
        markup = _compile(source).render(**context)
        fragment = BeautifulSoup(markup, "html.parser")
        roots = [node for node in fragment.contents if not _is_blank(node)]
        if len(roots) != 1 or not isinstance(roots[0], Tag):
            raise HydrationError(f"Component '{name}' must render exactly one root element")
        return roots[0].extract()

    def url(self, path: str) -> str:
        """Prefix absolute site paths with the configured namespace."""
        if self.config is None:
            return path
        return self.config.dest.url(path)


def _is_blank(node: Any) -> bool:
    return isinstance(node, NavigableString) and not node.strip()


__all__ = ["HTMLRenderer"]
