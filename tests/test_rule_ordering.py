from typing import Any

import pytest

from blogsmith.core.rules import HydrationPhase, PageRule, RuleEngine, RuleRegistry, hydrates


def _make_handler(
    name: str, *, priority: int = 0, before: tuple[str, ...] = (), after: tuple[str, ...] = ()
) -> PageRule:
    @hydrates(
        "script",
        phase=HydrationPhase.HYDRATE,
        name=name,
        priority=priority,
        before=before,
        after=after,
    )
    def handler(_node: Any, _context: Any) -> None:
        return None

    definition = handler.__page_rule__
    return definition.bind(handler)


def test_rule_order_respects_priority_and_topology():
    registry = RuleRegistry()
    registry.register(_make_handler("third", priority=1))
    registry.register(_make_handler("first", priority=0))
    registry.register(_make_handler("second", priority=1, after=("first",)))

    rules = registry.rules_for_phase(HydrationPhase.HYDRATE)["script"]
    assert [rule.name for rule in rules] == ["first", "second", "third"]


def test_rule_order_cycle_detection():
    registry = RuleRegistry()
    registry.register(_make_handler("a", priority=0, before=("b",)))
    with pytest.raises(RuntimeError, match="Cyclic page rule dependencies"):
        registry.register(_make_handler("b", priority=0, before=("a",)))


def test_registry_describe_returns_sorted_entries():
    registry = RuleRegistry()
    registry.register(_make_handler("alpha", priority=0))
    registry.register(_make_handler("beta", priority=1, after=("alpha",)))

    snapshot = registry.describe()
    assert snapshot[0]["name"] == "alpha"
    assert snapshot[1]["name"] == "beta"
    assert snapshot[1]["after"] == ["alpha"]
    assert snapshot[1]["phase"] == "HYDRATE"


def test_document_rules_default_to_synthetic_node():
    @hydrates(phase=HydrationPhase.PREPARE)
    def prepare(_root: Any, _context: Any) -> None:
        return None

    rule = prepare.__page_rule__.bind(prepare)
    assert rule.applies_to_document()
    assert rule.name == "prepare"


def test_engine_rejects_undecorated_handlers():
    engine = RuleEngine()
    with pytest.raises(TypeError, match="@hydrates"):
        engine.register(lambda _node, _context: None)
