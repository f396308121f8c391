"""Tab selector for grouped code blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field, model_validator
from slugify import slugify

from .base import Component, ComponentKind, ComponentOptions


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.adapters.html.renderer import HTMLRenderer


class TabSelectorOptions(ComponentOptions):
    tabs: list[str] = Field(min_length=1)
    selected: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_selection(self) -> TabSelectorOptions:
        """Ensure the selected index points at an existing tab."""
        if self.selected >= len(self.tabs):
            raise ValueError(
                f"selected tab {self.selected} is out of range for {len(self.tabs)} tab(s)"
            )
        return self


class TabSelector(Component):
    """Row of tab buttons switching between sibling panels."""

    kind = ComponentKind.TAB_SELECTOR
    content_hash = "T764P9zpaV5eSCd1H0okyw=="
    Options: ClassVar[type[ComponentOptions]] = TabSelectorOptions
    template = (
        '<div class="tab-selector" role="tablist" data-blogsmith-widget="tab-selector">'
        "{% for label, key in tabs %}"
        '<button type="button" role="tab" data-tab="{{ key }}" '
        "class=\"tab-selector__tab{{ ' selected' if loop.index0 == selected else '' }}\" "
        "aria-selected=\"{{ 'true' if loop.index0 == selected else 'false' }}\">"
        "{{ label }}</button>"
        "{% endfor %}"
        "</div>"
    )

    def context(self, renderer: HTMLRenderer) -> dict[str, Any]:
        data = super().context(renderer)
        keys: list[str] = []
        for index, label in enumerate(data["tabs"]):
            key = slugify(label) or f"tab-{index}"
            if key in keys:
                key = f"{key}-{index}"
            keys.append(key)
        data["tabs"] = list(zip(data["tabs"], keys, strict=True))
        return data


__all__ = ["TabSelector", "TabSelectorOptions"]
