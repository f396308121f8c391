"""Base class shared by every hydratable component.

A component is described by class attributes:

`kind`
: the :class:`ComponentKind` tag identifying the widget family.

`Options`
: a pydantic model listing the properties the component accepts. Property
  bags are validated against it when the component is created, and unknown
  keys are rejected.

`template`
: a Jinja2 template producing exactly one root element.

`content_hash`
: optional fixed registry key. Without it the key is derived from the
  class identity.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from blogsmith.core.exceptions import ComponentConfigError
from blogsmith.core.hashing import component_hash, is_component_hash


if TYPE_CHECKING:  # pragma: no cover - typing only
    from bs4.element import Tag

    from blogsmith.adapters.html.renderer import HTMLRenderer


class ComponentKind(str, Enum):
    """Closed set of widget families known to the hydrator."""

    TOC_TOGGLE = "toc-toggle"
    DARKMODE_SWITCH = "darkmode-switch"
    CONFIG_TRANSPORT = "config-transport"
    AUTHOR = "author"
    TAB_SELECTOR = "tab-selector"
    ARTICLE_CARD = "article-card"
    TOC_PREV_NEXT = "toc-prev-next"
    HEADER = "header"
    EXTERNAL = "external"


class ComponentOptions(BaseModel):
    """Options accepted by a component without properties."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Component:
    """Constructible and renderable unit referenced by a content hash."""

    kind: ClassVar[ComponentKind] = ComponentKind.EXTERNAL
    Options: ClassVar[type[ComponentOptions]] = ComponentOptions
    template: ClassVar[str] = ""
    content_hash: ClassVar[str | None] = None
    """Fixed registry key, for markers emitted by an existing site build."""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        pinned = cls.__dict__.get("content_hash")
        if pinned is not None and not is_component_hash(pinned):
            raise TypeError(f"{cls.__name__}.content_hash is not a component hash: {pinned!r}")

    def __init__(self, options: ComponentOptions | None = None) -> None:
        self.options = options if options is not None else self.Options()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"

    @classmethod
    def identity(cls) -> str:
        """Return the string the content hash is derived from."""
        return f"{cls.__module__}:{cls.__qualname__}"

    @classmethod
    def hash(cls) -> str:
        """Return the registry key of the component."""
        pinned = cls.__dict__.get("content_hash")
        if pinned is not None:
            return pinned
        return component_hash(cls.identity())

    @classmethod
    def create(cls, props: Mapping[str, Any] | None = None) -> Component:
        """Validate ``props`` and return a component instance."""
        if props is None:
            props = {}
        if not isinstance(props, Mapping):
            raise ComponentConfigError(cls.__name__, "properties must be a mapping")
        try:
            options = cls.Options.model_validate(dict(props))
        except ValidationError as exc:
            raise ComponentConfigError(cls.__name__, str(exc)) from exc
        return cls(options)

    def context(self, renderer: HTMLRenderer) -> dict[str, Any]:
        """Return the variables exposed to the template."""
        return self.options.model_dump()

    def render(self, renderer: HTMLRenderer) -> Tag:
        """Render the component into a detached element."""
        return renderer.render_template(self.template, self.context(renderer), name=type(self).__name__)


__all__ = ["Component", "ComponentKind", "ComponentOptions"]
