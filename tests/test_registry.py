from __future__ import annotations

import logging

import pytest

from blogsmith.components import (
    BUILTIN_COMPONENTS,
    ArticleCard,
    Author,
    ConfigTransport,
    DarkModeSwitch,
    Header,
    TabSelector,
    ToCPrevNext,
    ToCToggle,
    default_registry,
)
from blogsmith.components.base import Component, ComponentKind
from blogsmith.core.hashing import HASH_LENGTH, component_hash, is_component_hash
from blogsmith.core.registry import ComponentRegistry


def test_component_hash_shape() -> None:
    digest = component_hash("blogsmith.components.darkmode:DarkModeSwitch")

    assert len(digest) == HASH_LENGTH
    assert digest.endswith("==")
    assert is_component_hash(digest)
    assert component_hash("blogsmith.components.darkmode:DarkModeSwitch") == digest


def test_is_component_hash_rejects_other_strings() -> None:
    assert not is_component_hash("AAA==")
    assert not is_component_hash("not-a-hash-at-all-xxxx==")


def test_builtin_hashes_are_unique() -> None:
    hashes = {component.hash() for component in BUILTIN_COMPONENTS}
    assert len(hashes) == len(BUILTIN_COMPONENTS)


def test_default_registry_resolves_builtins() -> None:
    registry = default_registry()

    assert len(registry) == 7
    assert registry[DarkModeSwitch.hash()] is DarkModeSwitch
    assert registry.get(Header.hash()) is None
    assert "ZZZ==" not in registry


def test_duplicate_keys_last_write_wins(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="blogsmith.core.registry"):
        registry = ComponentRegistry([("AAA==", Author), ("AAA==", ArticleCard)])

    assert registry["AAA=="] is ArticleCard
    assert len(registry) == 1
    assert any("Duplicate component hash AAA==" in record.message for record in caplog.records)


def test_registry_is_read_only() -> None:
    registry = ComponentRegistry({"AAA==": DarkModeSwitch})

    with pytest.raises(TypeError):
        registry["BBB=="] = Author  # type: ignore[index]


def test_extend_returns_new_registry() -> None:
    registry = ComponentRegistry({"AAA==": DarkModeSwitch})
    extended = registry.extend([Header])

    assert Header.hash() in extended
    assert Header.hash() not in registry
    assert extended["AAA=="] is DarkModeSwitch


def test_describe_lists_kinds_and_identities() -> None:
    rows = ComponentRegistry.from_components([DarkModeSwitch, Author]).describe()

    assert [row["name"] for row in rows] == ["Author", "DarkModeSwitch"]
    assert rows[1]["kind"] == "darkmode-switch"
    assert rows[1]["identity"] == "blogsmith.components.darkmode:DarkModeSwitch"
    assert rows[1]["hash"] == DarkModeSwitch.hash()


@pytest.mark.parametrize(
    ("component", "key"),
    [
        (ToCToggle, "BWW0vHR4333HbDOiwZ67JA=="),
        (DarkModeSwitch, "6yEdMfRRlNsUBKSBOTazFg=="),
        (ConfigTransport, "wh9V9isakhdwzlz9ZUjvyw=="),
        (Author, "kRzsgnV+B7EQTskbovy+YA=="),
        (TabSelector, "T764P9zpaV5eSCd1H0okyw=="),
        (ArticleCard, "O52t9XkNenZkTzIIyYttGQ=="),
        (ToCPrevNext, "J9ZW2tGcuW2TtX9S23CKGg=="),
    ],
)
def test_builtins_use_site_bundle_keys(component: type[Component], key: str) -> None:
    assert component.hash() == key
    assert default_registry()[key] is component
    assert is_component_hash(key)


def test_pinned_key_is_not_inherited() -> None:
    class NightSwitch(DarkModeSwitch):
        pass

    assert NightSwitch.hash() != DarkModeSwitch.hash()
    assert NightSwitch.hash() == component_hash(NightSwitch.identity())


def test_pinned_key_must_look_like_a_hash() -> None:
    with pytest.raises(TypeError, match="content_hash"):

        class Broken(Component):
            content_hash = "AAA=="


def test_describe_component_without_kind() -> None:
    class Badge(Component):
        template = '<span class="badge"></span>'

    rows = ComponentRegistry.from_components([Badge]).describe()

    assert Badge.kind is ComponentKind.EXTERNAL
    assert rows == [
        {
            "hash": Badge.hash(),
            "name": "Badge",
            "kind": "external",
            "identity": Badge.identity(),
        }
    ]
