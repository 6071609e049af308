"""
HTMX-aware response utilities for range sliders.

Provides helpers for returning a re-rendered slider fragment with HX-*
headers, so a server handler can push new values to the client and fire
slide/change events for other components on the page.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi.responses import HTMLResponse

from dazzle_range.engine.controller import RangeSlider
from dazzle_range.engine.emission import RangePayload
from dazzle_range.runtime.template_renderer import render_range_slider

# Client-side event names, namespaced like other dazzle events
SLIDE_EVENT = "dazzle:range-slide"
CHANGE_EVENT = "dazzle:range-change"


def htmx_response(
    content: str,
    *,
    status_code: int = 200,
    triggers: dict[str, Any] | list[str] | None = None,
    retarget: str | None = None,
    reswap: str | None = None,
) -> HTMLResponse:
    """Create an HTMLResponse with HTMX headers.

    Args:
        content: HTML body content.
        status_code: HTTP status code (default 200).
        triggers: Events to fire on the client via HX-Trigger.
            - list[str]: simple event names (no payload)
            - dict[str, Any]: event names with JSON payloads
        retarget: CSS selector to override the triggering element's hx-target.
        reswap: Override the triggering element's hx-swap strategy.

    Returns:
        HTMLResponse with appropriate HX-* headers set.
    """
    headers: dict[str, str] = {}

    if triggers:
        headers["HX-Trigger"] = _encode_trigger(triggers)
    if retarget:
        headers["HX-Retarget"] = retarget
    if reswap:
        headers["HX-Reswap"] = reswap

    return HTMLResponse(content=content, status_code=status_code, headers=headers)


def range_trigger_headers(event_name: str, payload: RangePayload) -> dict[str, str]:
    """Build an HX-Trigger header dict carrying a range payload.

    Returns:
        Dictionary with "HX-Trigger" key ready to pass to Response headers.
    """
    return {"HX-Trigger": json.dumps({event_name: payload.as_dict()})}


def range_slider_response(
    slider: RangeSlider,
    *,
    event: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Re-render *slider* as an HTMX fragment swapped over its own element.

    Args:
        slider: The widget whose current state is rendered.
        event: Optional client event (e.g. ``CHANGE_EVENT``) fired with the
            current payload after the swap.
        status_code: HTTP status code (default 200).
    """
    triggers = {event: slider.payload().as_dict()} if event else None
    return htmx_response(
        str(render_range_slider(slider)),
        status_code=status_code,
        triggers=triggers,
        retarget=f"#{slider.options.dom_id}",
        reswap="outerHTML",
    )


def _encode_trigger(value: dict[str, Any] | list[str]) -> str:
    """Encode trigger value to HX-Trigger header format."""
    if isinstance(value, list):
        # Simple event names -- join with commas
        if all(isinstance(v, str) for v in value):
            return ", ".join(value)
        return json.dumps(value)
    return json.dumps(value)
