"""
Jinja2 template renderer for server-rendered range sliders.

Sets up the Jinja2 environment with custom filters and template loading
from the package ``templates/`` directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PrefixLoader, select_autoescape
from markupsafe import Markup

from dazzle_range.config import RangeSliderOptions
from dazzle_range.engine.controller import RangeSlider
from dazzle_range.runtime.template_context import RangeSliderContext, build_range_slider_context

logger = logging.getLogger(__name__)

# Template directory
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

RANGE_SLIDER_TEMPLATE = "components/range_slider.html"


def _percent_filter(value: Any) -> str:
    """Format a track offset as a CSS percentage (``12.5%``)."""
    if value is None:
        return "0%"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0%"
    text = f"{number:.2f}".rstrip("0").rstrip(".")
    return f"{text or '0'}%"


def create_jinja_env(project_templates_dir: Path | None = None) -> Environment:
    """Create and configure the Jinja2 environment.

    Args:
        project_templates_dir: Optional path to project-level templates.
            When provided, project templates take priority over the packaged
            ones. Packaged originals remain accessible via the ``range://``
            prefix (e.g. ``{% include "range://components/range_slider.html" %}``).
    """
    framework_loader = FileSystemLoader(str(TEMPLATES_DIR))

    if project_templates_dir and project_templates_dir.is_dir():
        project_loader = FileSystemLoader(str(project_templates_dir))
        main_loader = ChoiceLoader([project_loader, framework_loader])
    else:
        main_loader = ChoiceLoader([framework_loader])

    loader = PrefixLoader({"range": framework_loader}, delimiter="://")
    combined = ChoiceLoader([loader, main_loader])

    env = Environment(
        loader=combined,
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.filters["percent"] = _percent_filter

    return env


# Module-level singleton
_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get the shared Jinja2 environment (lazy singleton)."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def configure_project_templates(project_templates_dir: Path) -> None:
    """Reconfigure the Jinja2 environment with project-level template overrides.

    Call this during app startup to let a project restyle the slider markup.
    Packaged templates remain accessible via ``range://``.
    """
    global _env
    logger.debug("Using project templates from %s", project_templates_dir)
    _env = create_jinja_env(project_templates_dir)


def render_fragment(template_name: str, **kwargs: Any) -> str:
    """
    Render an HTML fragment (for HTMX partial responses).

    Args:
        template_name: Template path relative to templates/.
        **kwargs: Template variables.

    Returns:
        Rendered HTML fragment string.
    """
    env = get_jinja_env()
    template = env.get_template(template_name)
    return template.render(**kwargs)


def render_range_slider(
    source: RangeSlider | RangeSliderOptions | RangeSliderContext,
) -> Markup:
    """Render a range slider from a live widget, bare options or a prepared context."""
    if isinstance(source, RangeSliderContext):
        context = source
    else:
        context = build_range_slider_context(source)
    return Markup(render_fragment(RANGE_SLIDER_TEMPLATE, slider=context))
