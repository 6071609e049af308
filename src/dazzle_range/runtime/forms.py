"""
Form integration: reading the two submitted range values.

A form carrying a range slider posts ``<name>_min`` and ``<name>_max``. The
values are untrusted; they go through the same coercion as external sync
and fall back to the widget defaults when missing or malformed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dazzle_range.config import Number, RangeConfig
from dazzle_range.engine.snapping import format_value, snap
from dazzle_range.engine.sync import coerce_external, normalize_pair

logger = logging.getLogger(__name__)


def form_keys(name: str) -> tuple[str, str]:
    """Hidden input names for a slider called *name*."""
    return f"{name}_min", f"{name}_max"


def read_form_values(
    form: Mapping[str, Any],
    name: str,
    config: RangeConfig,
) -> tuple[Number, Number]:
    """Return the ``(min, max)`` pair submitted for slider *name*.

    Values are typed by the config precision (int for integral steps).
    """
    default_min, default_max = config.default_values()
    resolved: list[Number] = []
    for key, default in zip(form_keys(name), (default_min, default_max), strict=True):
        raw = form.get(key)
        value = coerce_external(raw, config) if raw is not None else None
        if value is None:
            if raw is not None:
                logger.warning("Ignoring malformed form value %s=%r", key, raw)
            value = snap(default, config)
        resolved.append(value)
    value_min, value_max = normalize_pair(resolved[0], resolved[1])
    return format_value(value_min, config), format_value(value_max, config)
