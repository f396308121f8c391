"""Table-of-contents widgets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .base import Component, ComponentKind, ComponentOptions


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.adapters.html.renderer import HTMLRenderer


class ToCToggleOptions(ComponentOptions):
    target: str = Field(default="toc", min_length=1)


class ToCToggle(Component):
    """Button opening and closing the table of contents."""

    kind = ComponentKind.TOC_TOGGLE
    content_hash = "BWW0vHR4333HbDOiwZ67JA=="
    Options: ClassVar[type[ComponentOptions]] = ToCToggleOptions
    template = (
        '<button type="button" class="toc-toggle" data-blogsmith-widget="toc-toggle" '
        'aria-label="Toggle table of contents" aria-controls="{{ target }}" '
        'aria-expanded="false"><span class="toc-toggle__icon"></span></button>'
    )


class NavLink(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    href: str = Field(min_length=1)
    title: str = Field(min_length=1)


class ToCPrevNextOptions(ComponentOptions):
    prev: NavLink | None = None
    next: NavLink | None = None


class ToCPrevNext(Component):
    """Links to the previous and next pages of the table of contents."""

    kind = ComponentKind.TOC_PREV_NEXT
    content_hash = "J9ZW2tGcuW2TtX9S23CKGg=="
    Options: ClassVar[type[ComponentOptions]] = ToCPrevNextOptions
    template = (
        '<nav class="toc-prevnext" data-blogsmith-widget="toc-prevnext">'
        "{% if prev %}"
        '<a class="toc-prevnext__prev" rel="prev" href="{{ prev.href }}">'
        '<span class="toc-prevnext__label">Previous</span>'
        '<span class="toc-prevnext__title">{{ prev.title }}</span></a>'
        "{% endif %}"
        "{% if next %}"
        '<a class="toc-prevnext__next" rel="next" href="{{ next.href }}">'
        '<span class="toc-prevnext__label">Next</span>'
        '<span class="toc-prevnext__title">{{ next.title }}</span></a>'
        "{% endif %}"
        "</nav>"
    )

    def context(self, renderer: HTMLRenderer) -> dict[str, Any]:
        data = super().context(renderer)
        for key in ("prev", "next"):
            link = data.get(key)
            if link is not None:
                data[key] = {**link, "href": renderer.url(link["href"])}
        return data


__all__ = ["NavLink", "ToCPrevNext", "ToCPrevNextOptions", "ToCToggle", "ToCToggleOptions"]
