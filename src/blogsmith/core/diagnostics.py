"""Warnings, errors and structured events raised while hydrating pages.

Rules and the dispatcher never print. They report through a
:class:`DiagnosticEmitter`, and the caller decides where the reports go:
nowhere (:class:`NullEmitter`), the ``logging`` tree (:class:`LoggingEmitter`)
or the terminal (``blogsmith.ui.cli.diagnostics.CliEmitter``).

Events carry a name and a flat payload. The names used by the hydrator are:

`hydrated`
: a placeholder was replaced (``target``, ``component``).

`forwarded`
: an unknown hash went to the previous transport handler (``target``, ``hash``).

`dropped`
: an unknown hash had nowhere to go (``target``, ``hash``).

`target_missing`
: the placeholder element was not in the page (``target``, ``component``).

`parser_fallback`
: the requested parser is not installed (``preferred``, ``fallback``).
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

_EVENT_TEMPLATES: dict[str, str] = {
    "hydrated": "Hydrated #{target} with {component}",
    "forwarded": "Forwarded #{target} ({component}) to the previous transport handler",
    "target_missing": "Placeholder #{target} not found for {component}",
    "parser_fallback": "HTML parser '{preferred}' unavailable, using '{fallback}'",
}


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Sink for hydration diagnostics."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Discard everything."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def error(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        pass


class LoggingEmitter:
    """Send diagnostics to a :mod:`logging` logger.

    Known events are logged at INFO with a readable message, the others at
    DEBUG with their raw payload.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def _log(self, level: int, message: str, exc: BaseException | None) -> None:
        self._logger.log(level, message, exc_info=exc if exc is not None else None)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.WARNING, message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.ERROR, message, exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is None:
            self._logger.debug("event %s %s", name, dict(payload))
        else:
            self._logger.info(message)


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return the one-line description of a known event, ``None`` otherwise."""
    template = _EVENT_TEMPLATES.get(name)
    if template is None:
        return None
    fields = {
        "target": payload.get("target") or "<unknown>",
        "component": payload.get("component") or payload.get("hash") or "<unknown>",
        "preferred": payload.get("preferred") or "<unknown>",
        "fallback": payload.get("fallback") or "<unknown>",
    }
    return template.format(**fields)


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
