from __future__ import annotations

from collections.abc import Mapping
import json
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Tag
import pytest

from blogsmith.adapters.html import PageHydrator
from blogsmith.components import (
    ArticleCard,
    Author,
    ConfigTransport,
    DarkModeSwitch,
    TabSelector,
    ToCToggle,
)
from blogsmith.components.base import Component
from blogsmith.core.config import SiteConfig
from blogsmith.core.context import HydrationContext
from blogsmith.core.markers import render_marker
from blogsmith.core.registry import ComponentRegistry
from blogsmith.core.rules import HydrationPhase, hydrates


def _document(*fragments: str) -> str:
    return "<html><head><title>Post</title></head><body><main>" + "".join(fragments) + "</main></body></html>"


@pytest.fixture
def hydrator() -> PageHydrator:
    return PageHydrator(parser="html.parser", load_entry_points=False)


def test_markers_are_hydrated_in_document_order(hydrator: PageHydrator) -> None:
    html = _document(
        render_marker("toggle", ToCToggle.hash()),
        "<p>Intro</p>",
        render_marker("card", ArticleCard.hash(), {"src": "/posts/intro", "title": "Intro"}),
    )

    result = hydrator.hydrate(html)
    soup = BeautifulSoup(result.html, "html.parser")

    widgets = [node["data-blogsmith-widget"] for node in soup.select("[data-blogsmith-widget]")]
    assert widgets == ["toc-toggle", "article-card"]
    assert soup.find(id="toggle") is None
    assert soup.find(id="card") is None
    assert soup.find("a", class_="article-card")["href"] == "/posts/intro"
    assert "__sdh_transport" not in result.html
    assert result.state.summary() == {
        "markers": 2,
        "hydrated": 2,
        "forwarded": 0,
        "dropped": 0,
        "faults": 0,
    }


def test_unknown_markers_go_to_previous_handler(hydrator: PageHydrator) -> None:
    calls: list[tuple[str, str, Mapping[str, Any]]] = []

    def previous(target_id: str, component_hash: str, props: Mapping[str, Any]) -> None:
        calls.append((target_id, component_hash, props))

    html = _document(render_marker("el-2", "ZZZ==", {"foo": 1}))
    result = hydrator.hydrate(html, previous=previous)

    assert calls == [("el-2", "ZZZ==", {"foo": 1})]
    assert "__sdh_transport" in result.html
    assert BeautifulSoup(result.html, "html.parser").find(id="el-2") is not None


def test_unknown_markers_without_previous_are_left_alone(hydrator: PageHydrator) -> None:
    html = _document(render_marker("el-2", "ZZZ==", {}))

    result = hydrator.hydrate(html)

    assert result.state.dropped == [{"target": "el-2", "component": "ZZZ=="}]
    assert 'id="el-2"' in result.html


def test_invalid_props_leave_marker_inert(hydrator: PageHydrator) -> None:
    html = _document(
        render_marker("tabs", TabSelector.hash(), {"tabs": []}),
        render_marker("switch", DarkModeSwitch.hash()),
    )

    result = hydrator.hydrate(html)
    soup = BeautifulSoup(result.html, "html.parser")

    assert soup.find(id="tabs") is not None
    assert soup.find(class_="darkmode-switch") is not None
    assert result.state.faults == [
        {"target": "tabs", "component": TabSelector.hash(), "reason": "render"}
    ]
    assert len(soup.find_all("script")) == 1


def test_missing_target_is_reported(hydrator: PageHydrator) -> None:
    html = _document(
        '<script>window.__sdh_transport("ghost", "%s", {});</script>' % DarkModeSwitch.hash()
    )

    result = hydrator.hydrate(html)

    assert result.state.faults[0]["reason"] == "missing"
    assert "__sdh_transport" in result.html


def test_malformed_marker_is_skipped(hydrator: PageHydrator) -> None:
    html = _document(
        '<div id="bad"></div><script>window.__sdh_transport("bad", {oops});</script>',
        render_marker("switch", DarkModeSwitch.hash()),
    )

    result = hydrator.hydrate(html)

    assert result.state.faults[0]["reason"] == "syntax"
    assert result.state.summary()["hydrated"] == 1


def test_keep_markers_option() -> None:
    hydrator = PageHydrator(parser="html.parser", strip_markers=False, load_entry_points=False)

    result = hydrator.hydrate(_document(render_marker("switch", DarkModeSwitch.hash())))

    assert "__sdh_transport" in result.html
    assert "darkmode-switch" in result.html


def test_header_is_injected_once() -> None:
    config = SiteConfig(
        header={"site_url": "https://www.jamessimone.net", "site_label": "jamessimone.net"}
    )
    hydrator = PageHydrator(config=config, parser="html.parser", load_entry_points=False)

    first = hydrator.hydrate(_document("<p>Body</p>"))
    second = hydrator.hydrate(first.html)

    body = BeautifulSoup(second.html, "html.parser").body
    assert isinstance(body, Tag)
    assert first.state.header_injected is True
    assert second.state.header_injected is False
    assert len(body.find_all("header")) == 1
    first_child = next(child for child in body.children if isinstance(child, Tag))
    assert first_child.name == "header"


def test_header_injection_can_be_disabled_per_page() -> None:
    config = SiteConfig(header={"site_url": "https://example.org", "site_label": "example"})
    hydrator = PageHydrator(config=config, parser="html.parser", load_entry_points=False)

    result = hydrator.hydrate(_document("<p>Body</p>"), runtime={"inject_header": False})

    assert "<header" not in result.html


def test_custom_rule_runs_after_hydration(hydrator: PageHydrator) -> None:
    seen: list[str] = []

    @hydrates("div", phase=HydrationPhase.FINALIZE, name="collect_widgets")
    def collect_widgets(element: Tag, _context: HydrationContext) -> None:
        widget = element.get("data-blogsmith-widget")
        if widget:
            seen.append(str(widget))

    hydrator.register(collect_widgets)
    hydrator.hydrate(_document(render_marker("switch", DarkModeSwitch.hash())))

    assert seen == ["darkmode-switch"]
    assert ("FINALIZE", "collect_widgets") in {
        (entry["phase"], entry["name"]) for entry in hydrator.describe_registered_rules()
    }


def test_entry_point_components_are_registered(monkeypatch: pytest.MonkeyPatch) -> None:
    class Badge(Component):
        template = '<span class="badge">new</span>'

    monkeypatch.setattr(PageHydrator, "_ENTRY_POINT_PAYLOADS", [Badge])
    hydrator = PageHydrator(registry=ComponentRegistry(), parser="html.parser")

    result = hydrator.hydrate(_document(render_marker("b", Badge.hash())))

    assert Badge.hash() in hydrator.registry
    assert '<span class="badge">new</span>' in result.html


def test_default_parser_handles_full_documents() -> None:
    hydrator = PageHydrator(load_entry_points=False)
    html = "<!DOCTYPE html>" + _document(render_marker("a", Author.hash(), {"name": "James"}))

    result = hydrator.hydrate(html)

    assert result.html.lower().startswith("<!doctype html>")
    assert 'class="author"' in result.html


def test_hydrate_file_writes_destination(hydrator: PageHydrator, tmp_path: Path) -> None:
    source = tmp_path / "index.html"
    source.write_text(_document(render_marker("switch", DarkModeSwitch.hash())), encoding="utf-8")
    destination = tmp_path / "out" / "index.html"

    hydrator.hydrate_file(source, destination)

    assert "darkmode-switch" in destination.read_text(encoding="utf-8")
    assert "darkmode-switch" not in source.read_text(encoding="utf-8")


def test_missing_parser_falls_back_to_html_parser() -> None:
    events: list[tuple[str, dict[str, Any]]] = []

    class Recorder:
        debug_enabled = False

        def warning(self, message: str, exc: BaseException | None = None) -> None:
            pass

        def error(self, message: str, exc: BaseException | None = None) -> None:
            pass

        def event(self, name: str, payload: Mapping[str, Any]) -> None:
            events.append((name, dict(payload)))

    hydrator = PageHydrator(parser="no-such-parser", load_entry_points=False)
    result = hydrator.hydrate(
        _document(render_marker("switch", DarkModeSwitch.hash())), emitter=Recorder()
    )

    assert result.page.parser == "html.parser"
    assert events[0] == ("parser_fallback", {"preferred": "no-such-parser", "fallback": "html.parser"})
    assert ("hydrated", {"target": "switch", "component": "DarkModeSwitch"}) in events


def test_markers_from_site_bundle_keys_are_hydrated(hydrator: PageHydrator) -> None:
    html = _document(render_marker("el-1", "6yEdMfRRlNsUBKSBOTazFg==", {"default": "dark"}))

    result = hydrator.hydrate(html)

    switch = BeautifulSoup(result.html, "html.parser").find(class_="darkmode-switch")
    assert switch is not None and switch["aria-checked"] == "true"
    assert result.state.summary()["hydrated"] == 1
    assert result.state.dropped == []


def test_config_transport_defaults_to_site_config() -> None:
    config = SiteConfig(dest={"namespace": "/joys-of-apex"}, page={"title": {"base": "Joys"}})
    hydrator = PageHydrator(config=config, parser="html.parser", load_entry_points=False)

    result = hydrator.hydrate(_document(render_marker("cfg", ConfigTransport.hash())))

    script = BeautifulSoup(result.html, "html.parser").find("script", class_="blogsmith-config")
    assert script is not None
    published = json.loads(script.string)
    assert published["dest"]["namespace"] == "/joys-of-apex"
    assert published["page"]["title"]["base"] == "Joys"


def test_theme_palette_is_installed_once() -> None:
    config = SiteConfig(theme={"light": {"primary": "#1eb2a6"}})
    hydrator = PageHydrator(config=config, parser="html.parser", load_entry_points=False)

    first = hydrator.hydrate(_document("<p>Body</p>"))
    second = hydrator.hydrate(first.html)

    styles = BeautifulSoup(second.html, "html.parser").head.find_all("style")
    assert len(styles) == 1
    assert styles[0]["id"] == "blogsmith-theme"
    assert "--primary: #1eb2a6;" in styles[0].string


def test_header_is_not_injected_without_body() -> None:
    config = SiteConfig(header={"site_url": "https://example.org", "site_label": "example"})
    hydrator = PageHydrator(config=config, parser="html.parser", load_entry_points=False)

    result = hydrator.hydrate("<!DOCTYPE html><p>Fragment</p>")

    assert result.html.startswith("<!DOCTYPE html>")
    assert "<header" not in result.html
    assert result.state.header_injected is False
