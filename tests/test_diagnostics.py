from __future__ import annotations

import logging

import pytest

from blogsmith.core.diagnostics import LoggingEmitter, NullEmitter, format_event_message
from blogsmith.core.exceptions import HydrationError, MarkerSyntaxError, exception_hint
from blogsmith.ui.cli.diagnostics import CliEmitter
from blogsmith.ui.cli.state import set_cli_state


def _raise_nested_error() -> None:
    try:
        raise MarkerSyntaxError("Expected a JSON object at offset 12")
    except MarkerSyntaxError as exc:
        raise HydrationError("Page hydration failed") from exc


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.ERROR):
        emitter.error("boom")
    assert any(record.message == "boom" for record in caplog.records)
    assert emitter.debug_enabled is True


def test_logging_emitter_formats_known_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter()
    with caplog.at_level(logging.INFO, logger="blogsmith.core.diagnostics"):
        emitter.event("hydrated", {"target": "el-1", "component": "DarkModeSwitch"})
    assert [record.message for record in caplog.records] == [
        "Hydrated #el-1 with DarkModeSwitch"
    ]


def test_cli_emitter_bridges_state(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=1, debug=False)
    emitter = CliEmitter(state=state)

    emitter.warning("Heads up", exc=None)
    emitter.error("Boom", exc=None)
    emitter.event("custom", {"flag": True})

    captured = capsys.readouterr()
    combined_output = f"{captured.out}\n{captured.err}"
    assert "Heads up" in combined_output
    assert "Boom" in combined_output
    assert state.consume_events("custom") == [{"flag": True}]
    assert state.consume_events("custom") == []


@pytest.mark.parametrize(
    ("name", "payload", "expected"),
    [
        ("hydrated", {"target": "a", "component": "Author"}, "Hydrated #a with Author"),
        (
            "forwarded",
            {"target": "b", "component": "ZZZ=="},
            "Forwarded #b (ZZZ==) to the previous transport handler",
        ),
        ("target_missing", {"target": "c", "component": "Author"}, "Placeholder #c not found for Author"),
        (
            "parser_fallback",
            {"preferred": "lxml", "fallback": "html.parser"},
            "HTML parser 'lxml' unavailable, using 'html.parser'",
        ),
        ("dropped", {"target": "d", "component": "ZZZ=="}, None),
    ],
)
def test_format_event_message(name: str, payload: dict[str, str], expected: str | None) -> None:
    assert format_event_message(name, payload) == expected


def test_exception_hint_reports_root_cause() -> None:
    try:
        _raise_nested_error()
    except HydrationError as error:
        hint = exception_hint(error)
    assert hint == "Expected a JSON object at offset 12"
