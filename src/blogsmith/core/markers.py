"""Read and write the transport calls embedded in rendered pages.

An upstream renderer emits each placeholder as an empty element followed by
a script calling the page transport hook::

    <div id="x-1"></div>
    <script>window.__sdh_transport("x-1", "6yEdMfRRlNsUBKSBOTazFg==", {});</script>

The three arguments are JSON values: the target id, the component hash, and
the property object.
"""

from __future__ import annotations

from collections.abc import Mapping
import html
import json
import re
from typing import Any

from .dispatcher import HydrationRequest
from .exceptions import MarkerSyntaxError
from .page import TRANSPORT_HOOK


_CALL_PATTERN = re.compile(rf"\b{re.escape(TRANSPORT_HOOK)}\s*\(")
_WHITESPACE = re.compile(r"\s*")
_DECODER = json.JSONDecoder()


def has_transport_call(text: str) -> bool:
    """Return whether ``text`` contains at least one transport call."""
    return _CALL_PATTERN.search(text) is not None


def parse_transport_calls(text: str) -> list[HydrationRequest]:
    """Return every transport call found in a script body, in source order."""
    requests: list[HydrationRequest] = []
    position = 0
    while True:
        match = _CALL_PATTERN.search(text, position)
        if match is None:
            return requests
        arguments, position = _read_arguments(text, match.end())
        requests.append(_build_request(arguments))


def _read_arguments(text: str, position: int) -> tuple[list[Any], int]:
    arguments: list[Any] = []
    for index, closing in enumerate((",", ",", ")")):
        position = _WHITESPACE.match(text, position).end()  # type: ignore[union-attr]
        try:
            value, position = _DECODER.raw_decode(text, position)
        except json.JSONDecodeError as exc:
            raise MarkerSyntaxError(
                f"Argument {index + 1} of a transport call is not valid JSON"
            ) from exc
        arguments.append(value)
        position = _WHITESPACE.match(text, position).end()  # type: ignore[union-attr]
        if text[position : position + 1] != closing:
            raise MarkerSyntaxError(
                f"Expected '{closing}' after argument {index + 1} of a transport call"
            )
        position += 1
    return arguments, position


def _build_request(arguments: list[Any]) -> HydrationRequest:
    target_id, component_hash, props = arguments
    if not isinstance(target_id, str) or not target_id:
        raise MarkerSyntaxError("Transport call target must be a non-empty string")
    if not isinstance(component_hash, str) or not component_hash:
        raise MarkerSyntaxError("Transport call component hash must be a non-empty string")
    if not isinstance(props, dict):
        raise MarkerSyntaxError("Transport call properties must be a JSON object")
    return HydrationRequest(target_id, component_hash, props)


def _script_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def render_marker(
    target_id: str,
    component_hash: str,
    props: Mapping[str, Any] | None = None,
    *,
    tag: str = "div",
) -> str:
    """Return the placeholder element and marker script for one component."""
    call = ", ".join(
        (_script_json(target_id), _script_json(component_hash), _script_json(dict(props or {})))
    )
    return (
        f'<{tag} id="{html.escape(target_id, quote=True)}"></{tag}>'
        f"<script>window.{TRANSPORT_HOOK}({call});</script>"
    )


__all__ = ["has_transport_call", "parse_transport_calls", "render_marker"]
