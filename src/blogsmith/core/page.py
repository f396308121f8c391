"""Parsed page document and its page-wide transport slot."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import Tag


TRANSPORT_HOOK = "__sdh_transport"
"""Name of the page-wide callback that marker scripts invoke."""


class TransportHandler(Protocol):
    """Callable accepting a hydration request."""

    def __call__(self, target_id: str, component_hash: str, props: Mapping[str, Any]) -> None: ...


@dataclass(slots=True)
class TransportSlot:
    """Named slot holding the handler marker scripts call into.

    The slot holds at most one handler. Installing a new handler hands back
    the one it replaces so the new owner can delegate to it.
    """

    name: str = TRANSPORT_HOOK
    handler: TransportHandler | None = None

    def install(self, handler: TransportHandler) -> TransportHandler | None:
        """Replace the current handler, returning the previous one."""
        previous = self.handler
        self.handler = handler
        return previous

    def __call__(self, target_id: str, component_hash: str, props: Mapping[str, Any]) -> None:
        if self.handler is None:
            return
        self.handler(target_id, component_hash, props)


@dataclass
class Page:
    """HTML page being hydrated."""

    document: BeautifulSoup
    transport: TransportSlot = field(default_factory=TransportSlot)
    parser: str = "lxml"

    @classmethod
    def parse(
        cls,
        html: str,
        *,
        parser: str = "lxml",
        on_fallback: Callable[[str, str], None] | None = None,
    ) -> Page:
        """Parse an HTML string, falling back to the built-in parser."""
        try:
            document = BeautifulSoup(html, parser)
        except FeatureNotFound:
            if parser == "html.parser":
                raise
            if on_fallback is not None:
                on_fallback(parser, "html.parser")
            document = BeautifulSoup(html, "html.parser")
            parser = "html.parser"
        return cls(document=document, parser=parser)

    def get_element_by_id(self, element_id: str) -> Tag | None:
        """Return the element carrying ``element_id`` when it is attached."""
        found = self.document.find(id=element_id)
        return found if isinstance(found, Tag) else None

    def serialize(self) -> str:
        """Return the page markup."""
        return str(self.document)


__all__ = ["TRANSPORT_HOOK", "Page", "TransportHandler", "TransportSlot"]
