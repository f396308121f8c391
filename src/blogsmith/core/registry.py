"""Immutable registry mapping component hashes to component classes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.components.base import Component


logger = logging.getLogger(__name__)


class ComponentRegistry(Mapping[str, "type[Component]"]):
    """Read-only lookup table used by the hydration dispatcher.

    Keys are opaque strings. When the same key is supplied more than once the
    last entry wins and a warning is logged.
    """

    __slots__ = ("_entries",)

    def __init__(
        self,
        entries: Mapping[str, type[Component]] | Iterable[tuple[str, type[Component]]] = (),
    ) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        table: dict[str, type[Component]] = {}
        for key, component in pairs:
            existing = table.get(key)
            if existing is not None and existing is not component:
                logger.warning(
                    "Duplicate component hash %s: %s replaces %s",
                    key,
                    component.__name__,
                    existing.__name__,
                )
            table[key] = component
        self._entries = MappingProxyType(table)

    @classmethod
    def from_components(cls, components: Iterable[type[Component]]) -> ComponentRegistry:
        """Build a registry keyed by each component's content hash."""
        return cls((component.hash(), component) for component in components)

    def extend(self, components: Iterable[type[Component]]) -> ComponentRegistry:
        """Return a new registry with ``components`` layered over this one."""
        pairs = list(self._entries.items())
        pairs.extend((component.hash(), component) for component in components)
        return ComponentRegistry(pairs)

    def __getitem__(self, key: str) -> type[Component]:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        names = ", ".join(component.__name__ for component in self._entries.values())
        return f"ComponentRegistry({names})"

    def describe(self) -> list[dict[str, str]]:
        """Return a serialisable snapshot sorted by component name."""
        rows = [
            {
                "hash": key,
                "name": component.__name__,
                "kind": _kind_label(component),
                "identity": component.identity(),
            }
            for key, component in self._entries.items()
        ]
        return sorted(rows, key=lambda row: (row["name"], row["hash"]))


def _kind_label(component: type[Component]) -> str:
    kind = getattr(component, "kind", None)
    return kind.value if kind is not None else "external"


__all__ = ["ComponentRegistry"]
