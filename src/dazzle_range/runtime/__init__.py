"""
Server-side runtime for range sliders: rendering, form and HTMX glue.
"""

from dazzle_range.runtime.forms import form_keys, read_form_values
from dazzle_range.runtime.htmx import (
    CHANGE_EVENT,
    SLIDE_EVENT,
    htmx_response,
    range_slider_response,
    range_trigger_headers,
)
from dazzle_range.runtime.template_context import (
    HiddenInputContext,
    PipContext,
    RangeSliderContext,
    ThumbContext,
    build_range_slider_context,
)
from dazzle_range.runtime.template_renderer import (
    configure_project_templates,
    create_jinja_env,
    get_jinja_env,
    render_fragment,
    render_range_slider,
)

__all__ = [
    # Rendering
    "RangeSliderContext",
    "ThumbContext",
    "HiddenInputContext",
    "PipContext",
    "build_range_slider_context",
    "create_jinja_env",
    "get_jinja_env",
    "configure_project_templates",
    "render_fragment",
    "render_range_slider",
    # Forms
    "form_keys",
    "read_form_values",
    # HTMX
    "SLIDE_EVENT",
    "CHANGE_EVENT",
    "htmx_response",
    "range_slider_response",
    "range_trigger_headers",
]
