"""Exception hierarchy for the hydration pipeline."""

from __future__ import annotations


class HydrationError(RuntimeError):
    """Base exception for hydration failures."""


class ComponentConfigError(HydrationError):
    """Raised when a property bag does not match a component's options."""

    def __init__(self, component: str, message: str) -> None:
        super().__init__(f"Invalid options for component '{component}': {message}")
        self.component = component


class MarkerSyntaxError(HydrationError):
    """Raised when a transport marker embedded in a page cannot be decoded."""


class DispatcherStateError(HydrationError):
    """Raised when a dispatcher is installed more than once."""


class SiteConfigError(HydrationError):
    """Raised when the site configuration file is missing or invalid."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ComponentConfigError",
    "DispatcherStateError",
    "HydrationError",
    "MarkerSyntaxError",
    "SiteConfigError",
    "exception_hint",
    "exception_messages",
]
