"""Built-in page rules: site header, theme palette, marker dispatch and cleanup."""

from __future__ import annotations

import logging

from bs4.element import Tag

from blogsmith.components.header import Header
from blogsmith.core.context import HydrationContext
from blogsmith.core.exceptions import HydrationError, MarkerSyntaxError
from blogsmith.core.markers import has_transport_call, parse_transport_calls
from blogsmith.core.rules import HydrationPhase, hydrates


logger = logging.getLogger(__name__)

CONSUMED_MARKERS = "consumed_markers"
THEME_STYLE_ID = "blogsmith-theme"


@hydrates(phase=HydrationPhase.PREPARE, auto_mark=False, name="inject_header")
def inject_header(root: Tag, context: HydrationContext) -> None:
    """Insert the configured site header at the top of ``<body>``."""
    config = context.config
    if config is None or config.header is None:
        return
    if not context.runtime.get("inject_header", True):
        return
    if root.find("header", class_="site-header") is not None:
        return

    body = root.find("body")
    if not isinstance(body, Tag):
        logger.debug("page has no <body>, skipping header injection")
        return
    body.insert(0, context.renderer.render(Header.from_config(config.header)))
    context.state.header_injected = True


@hydrates(phase=HydrationPhase.PREPARE, auto_mark=False, name="install_theme")
def install_theme(root: Tag, context: HydrationContext) -> None:
    """Publish the configured palettes as a <style> element in <head>."""
    config = context.config
    if config is None:
        return
    css = config.theme.stylesheet()
    head = root.find("head")
    if not css or not isinstance(head, Tag) or root.find("style", id=THEME_STYLE_ID):
        return
    style = root.new_tag("style", attrs={"id": THEME_STYLE_ID})
    style.string = css
    head.append(style)


@hydrates("script", phase=HydrationPhase.HYDRATE, name="dispatch_markers")
def dispatch_markers(element: Tag, context: HydrationContext) -> None:
    """Invoke the page transport slot for every call in a marker script."""
    source = element.string or ""
    if not has_transport_call(source):
        return

    try:
        requests = parse_transport_calls(source)
    except MarkerSyntaxError as exc:
        context.state.record("faults", target="<script>", component="<unknown>", reason="syntax")
        context.emitter.warning(f"Ignoring malformed transport marker: {exc}", exc)
        return

    state = context.state
    hydrated_before = len(state.hydrated)
    for request in requests:
        state.markers_seen += 1
        try:
            context.page.transport(request.target_id, request.component_hash, request.props)
        except HydrationError as exc:
            state.record(
                "faults",
                target=request.target_id,
                component=request.component_hash,
                reason="render",
            )
            context.emitter.warning(f"Unable to hydrate '#{request.target_id}': {exc}", exc)

    if len(state.hydrated) - hydrated_before == len(requests):
        context.runtime.setdefault(CONSUMED_MARKERS, []).append(element)


@hydrates(phase=HydrationPhase.FINALIZE, auto_mark=False, name="strip_consumed_markers")
def strip_consumed_markers(_root: Tag, context: HydrationContext) -> None:
    """Remove marker scripts whose calls were all hydrated."""
    consumed: list[Tag] = context.runtime.get(CONSUMED_MARKERS, [])
    if not context.runtime.get("strip_markers", True):
        return
    for element in consumed:
        element.decompose()
    logger.debug("removed %d consumed marker script(s)", len(consumed))
