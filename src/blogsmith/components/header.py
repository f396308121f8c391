"""Site header injected at the top of every page."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from blogsmith.core.config import HeaderConfig

from .base import Component, ComponentKind, ComponentOptions


class HeaderOptions(ComponentOptions):
    site_url: str = Field(min_length=1)
    site_label: str = Field(min_length=1)
    home_url: str = "/"


class Header(Component):
    """Layout header pointing readers to the author's site and the home page."""

    kind = ComponentKind.HEADER
    Options: ClassVar[type[ComponentOptions]] = HeaderOptions
    template = (
        '<header class="site-header">'
        'Read more at <a href="{{ site_url }}">{{ site_label }}</a>, '
        'or return to the <a href="{{ home_url }}">homepage</a>'
        "</header>"
    )

    @classmethod
    def from_config(cls, config: HeaderConfig) -> Component:
        return cls.create(config.model_dump())


__all__ = ["Header", "HeaderOptions"]
