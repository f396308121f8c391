"""Publish site settings to client-side scripts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from .base import Component, ComponentKind, ComponentOptions


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.adapters.html.renderer import HTMLRenderer


class ConfigTransportOptions(ComponentOptions):
    config: dict[str, Any] | None = None


class ConfigTransport(Component):
    """Embed a JSON document with the client-visible configuration.

    Markers that carry no ``config`` publish the site configuration the
    renderer was built with.
    """

    kind = ComponentKind.CONFIG_TRANSPORT
    content_hash = "wh9V9isakhdwzlz9ZUjvyw=="
    Options: ClassVar[type[ComponentOptions]] = ConfigTransportOptions
    template = (
        '<script type="application/json" class="blogsmith-config" '
        'data-blogsmith-widget="config">{{ config | tojson }}</script>'
    )

    def context(self, renderer: HTMLRenderer) -> dict[str, Any]:
        data = super().context(renderer)
        if data["config"] is None:
            data["config"] = renderer.config.client_payload() if renderer.config else {}
        return data


__all__ = ["ConfigTransport", "ConfigTransportOptions"]
