"""Primary public API for blogsmith."""

from __future__ import annotations

from blogsmith.adapters.html import HTMLRenderer, HydrationResult, PageHydrator
from blogsmith.components import (
    BUILTIN_COMPONENTS,
    ArticleCard,
    Author,
    Component,
    ComponentKind,
    ComponentOptions,
    ConfigTransport,
    DarkModeSwitch,
    Header,
    TabSelector,
    ToCPrevNext,
    ToCToggle,
    default_registry,
)
from blogsmith.core.config import SiteConfig, load_site_config
from blogsmith.core.context import HydrationContext, PageState
from blogsmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from blogsmith.core.dispatcher import HydrationDispatcher, HydrationRequest
from blogsmith.core.exceptions import (
    ComponentConfigError,
    DispatcherStateError,
    HydrationError,
    MarkerSyntaxError,
    SiteConfigError,
)
from blogsmith.core.hashing import component_hash
from blogsmith.core.markers import parse_transport_calls, render_marker
from blogsmith.core.page import TRANSPORT_HOOK, Page, TransportSlot
from blogsmith.core.registry import ComponentRegistry
from blogsmith.core.rules import HydrationPhase, hydrates
from blogsmith.version import get_version


__version__ = get_version()

__all__ = [
    "BUILTIN_COMPONENTS",
    "TRANSPORT_HOOK",
    "ArticleCard",
    "Author",
    "Component",
    "ComponentConfigError",
    "ComponentKind",
    "ComponentOptions",
    "ComponentRegistry",
    "ConfigTransport",
    "DarkModeSwitch",
    "DiagnosticEmitter",
    "DispatcherStateError",
    "HTMLRenderer",
    "Header",
    "HydrationContext",
    "HydrationDispatcher",
    "HydrationError",
    "HydrationPhase",
    "HydrationRequest",
    "HydrationResult",
    "LoggingEmitter",
    "MarkerSyntaxError",
    "NullEmitter",
    "Page",
    "PageHydrator",
    "PageState",
    "SiteConfig",
    "SiteConfigError",
    "TabSelector",
    "ToCPrevNext",
    "ToCToggle",
    "TransportSlot",
    "component_hash",
    "default_registry",
    "get_version",
    "hydrates",
    "load_site_config",
    "parse_transport_calls",
    "render_marker",
]
