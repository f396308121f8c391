"""Dark-mode switch."""

from __future__ import annotations

from typing import ClassVar, Literal

from .base import Component, ComponentKind, ComponentOptions


class DarkModeSwitchOptions(ComponentOptions):
    default: Literal["light", "dark"] = "light"


class DarkModeSwitch(Component):
    """Toggle between the light and dark palettes."""

    kind = ComponentKind.DARKMODE_SWITCH
    content_hash = "6yEdMfRRlNsUBKSBOTazFg=="
    Options: ClassVar[type[ComponentOptions]] = DarkModeSwitchOptions
    template = (
        '<div class="darkmode-switch" role="switch" tabindex="0" '
        'data-blogsmith-widget="darkmode-switch" data-default="{{ default }}" '
        'aria-label="Toggle dark mode" '
        "aria-checked=\"{{ 'true' if default == 'dark' else 'false' }}\">"
        '<span class="darkmode-switch__knob"></span></div>'
    )


__all__ = ["DarkModeSwitch", "DarkModeSwitchOptions"]
