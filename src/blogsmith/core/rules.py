"""Phased page rules.

Hydration work is split into small handlers, each bound to a tag name and a
:class:`HydrationPhase` with the :func:`hydrates` decorator::

    @hydrates("script", phase=HydrationPhase.HYDRATE)
    def dispatch_markers(element, context): ...

A handler declared without tags runs once per phase on the document itself,
before the tree walk.

:class:`RuleEngine` runs the phases in order. In each phase the document is
walked depth-first in source order and every element is offered to the rules
registered for its tag. Rules sharing a tag run by ascending ``priority``,
then by name, unless ``before``/``after`` constraints say otherwise.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
import heapq
from typing import TYPE_CHECKING, Any, cast


if TYPE_CHECKING:  # pragma: no cover - typing only
    from bs4.element import Tag

    from .context import HydrationContext


class HydrationPhase(Enum):
    """Passes over a page, in execution order."""

    PREPARE = 1
    """Layout changes such as header injection."""
    HYDRATE = 2
    """Marker scripts are fed to the transport slot."""
    FINALIZE = 3
    """Consumed markers are removed."""


RuleCallable = Callable[[Any, "HydrationContext"], None]

DOCUMENT_NODE = "__document__"


@dataclass
class PageRule:
    """Handler bound to its declaration."""

    priority: int
    phase: HydrationPhase
    tags: tuple[str, ...]
    name: str
    handler: RuleCallable
    auto_mark: bool = True
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()

    def applies_to_document(self) -> bool:
        return self.tags == (DOCUMENT_NODE,)


@dataclass(frozen=True)
class RuleDefinition:
    """What :func:`hydrates` attaches to a handler as ``__page_rule__``."""

    phase: HydrationPhase
    tags: tuple[str, ...]
    priority: int = 0
    name: str | None = None
    auto_mark: bool = True
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()

    def bind(self, handler: RuleCallable) -> PageRule:
        return PageRule(
            priority=self.priority,
            phase=self.phase,
            tags=self.tags,
            name=self.name or getattr(handler, "__name__", type(handler).__name__),
            handler=handler,
            auto_mark=self.auto_mark,
            before=self.before,
            after=self.after,
        )


def order_rules(rules: Iterable[PageRule]) -> list[PageRule]:
    """Order rules by ``(priority, name)`` while honouring before/after edges.

    Raises ``RuntimeError`` naming the rules caught in a dependency cycle.
    """
    pending = list(rules)
    index_of: dict[str, int] = {}
    for index, rule in enumerate(pending):
        index_of.setdefault(rule.name, index)

    successors: list[set[int]] = [set() for _ in pending]
    for index, rule in enumerate(pending):
        successors[index].update(index_of[name] for name in rule.before if name in index_of)
        for name in rule.after:
            if name in index_of:
                successors[index_of[name]].add(index)

    blockers = [0] * len(pending)
    for targets in successors:
        for target in targets:
            blockers[target] += 1

    def key(index: int) -> tuple[int, str, int]:
        return (pending[index].priority, pending[index].name, index)

    ready = [key(index) for index, count in enumerate(blockers) if count == 0]
    heapq.heapify(ready)
    ordered: list[PageRule] = []
    while ready:
        *_, index = heapq.heappop(ready)
        ordered.append(pending[index])
        for target in successors[index]:
            blockers[target] -= 1
            if blockers[target] == 0:
                heapq.heappush(ready, key(target))

    if len(ordered) != len(pending):
        stuck = sorted(rule.name for index, rule in enumerate(pending) if blockers[index] > 0)
        raise RuntimeError("Cyclic page rule dependencies detected: " + ", ".join(stuck))
    return ordered


class RuleRegistry:
    """Rules grouped by phase, then by tag."""

    def __init__(self) -> None:
        self._rules: dict[HydrationPhase, dict[str, list[PageRule]]] = {
            phase: {} for phase in HydrationPhase
        }

    def register(self, rule: PageRule) -> None:
        """Add ``rule`` under each of its tags, keeping every bucket ordered."""
        buckets = self._rules[rule.phase]
        for tag in rule.tags:
            buckets[tag] = order_rules([*buckets.get(tag, ()), rule])

    def iter_phase(self, phase: HydrationPhase) -> Iterator[PageRule]:
        for bucket in self._rules[phase].values():
            yield from bucket

    def rules_for_phase(self, phase: HydrationPhase) -> dict[str, tuple[PageRule, ...]]:
        return {tag: tuple(bucket) for tag, bucket in self._rules[phase].items()}

    def describe(self) -> list[dict[str, object]]:
        """Return one row per (phase, tag, rule), in execution order."""
        rows: list[dict[str, object]] = []
        for phase, buckets in self._rules.items():
            for tag in sorted(buckets):
                rows.extend(
                    {
                        "phase": phase.name,
                        "tag": tag,
                        "name": rule.name,
                        "priority": rule.priority,
                        "before": list(rule.before),
                        "after": list(rule.after),
                        "order": order,
                    }
                    for order, rule in enumerate(buckets[tag])
                )
        return rows


def hydrates(
    *tags: str,
    phase: HydrationPhase = HydrationPhase.HYDRATE,
    priority: int = 0,
    name: str | None = None,
    auto_mark: bool = True,
    before: Iterable[str] = (),
    after: Iterable[str] = (),
) -> Callable[[RuleCallable], RuleCallable]:
    """Declare a page rule.

    ``auto_mark`` prevents a node from being handled twice by rules of the
    same phase.
    """
    definition = RuleDefinition(
        phase=phase,
        tags=tags or (DOCUMENT_NODE,),
        priority=priority,
        name=name,
        auto_mark=auto_mark,
        before=tuple(before),
        after=tuple(after),
    )

    def decorator(handler: RuleCallable) -> RuleCallable:
        cast(Any, handler).__page_rule__ = definition
        return handler

    return decorator


class RuleEngine:
    """Run registered rules over a parsed page."""

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = registry or RuleRegistry()

    def collect_from(self, owner: Any) -> None:
        """Register every decorated attribute of a module or class."""
        for attribute in dir(owner):
            candidate = getattr(owner, attribute)
            definition = getattr(candidate, "__page_rule__", None)
            if isinstance(definition, RuleDefinition):
                self.registry.register(definition.bind(candidate))

    def register(self, handler: RuleCallable) -> None:
        definition = getattr(handler, "__page_rule__", None)
        if not isinstance(definition, RuleDefinition):
            raise TypeError("Handler must be decorated with @hydrates")
        self.registry.register(definition.bind(handler))

    def run(self, root: Tag, context: HydrationContext) -> None:
        for phase in HydrationPhase:
            context.enter_phase(phase)
            by_tag = self.registry.rules_for_phase(phase)
            for rule in by_tag.get(DOCUMENT_NODE, ()):
                _apply(rule, root, context)
            _DOMVisitor(by_tag, context).walk(root)


def _apply(rule: PageRule, node: Any, context: HydrationContext) -> None:
    if rule.auto_mark and context.is_processed(node):
        return
    rule.handler(node, context)
    if rule.auto_mark:
        context.mark_processed(node)


class _DOMVisitor:
    """Depth-first walk offering each element to the rules for its tag."""

    def __init__(
        self,
        rules_by_tag: dict[str, tuple[PageRule, ...]],
        context: HydrationContext,
    ) -> None:
        self.rules_by_tag = rules_by_tag
        self.context = context

    def walk(self, node: Tag) -> None:
        # Skip subtrees an earlier handler detached.
        if node.parent is None and node is not self.context.document:
            return
        for rule in self.rules_by_tag.get(node.name, ()):
            _apply(rule, node, self.context)
        # Snapshot: handlers insert and remove siblings.
        for child in list(node.children):
            if getattr(child, "name", None):
                self.walk(child)
