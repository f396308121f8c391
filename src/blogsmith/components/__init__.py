"""Built-in components and the default registry."""

from __future__ import annotations

from blogsmith.core.registry import ComponentRegistry

from .article_card import ArticleCard
from .author import Author
from .base import Component, ComponentKind, ComponentOptions
from .darkmode import DarkModeSwitch
from .header import Header
from .tabs import TabSelector
from .toc import ToCPrevNext, ToCToggle
from .transport import ConfigTransport


BUILTIN_COMPONENTS: tuple[type[Component], ...] = (
    ToCToggle,
    DarkModeSwitch,
    ConfigTransport,
    Author,
    TabSelector,
    ArticleCard,
    ToCPrevNext,
)
"""Components placeholders may reference. :class:`Header` is layout-only."""


def default_registry() -> ComponentRegistry:
    """Return a registry holding the built-in hydratable components."""
    return ComponentRegistry.from_components(BUILTIN_COMPONENTS)


__all__ = [
    "BUILTIN_COMPONENTS",
    "ArticleCard",
    "Author",
    "Component",
    "ComponentKind",
    "ComponentOptions",
    "ConfigTransport",
    "DarkModeSwitch",
    "Header",
    "TabSelector",
    "ToCPrevNext",
    "ToCToggle",
    "default_registry",
]
