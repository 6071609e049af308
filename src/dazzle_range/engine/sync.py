"""
External synchronization helpers.

Values pushed by the host (a server round-trip, a form re-render) are
untrusted: anything non-numeric, non-finite or outside the domain is
rejected and the widget keeps its last valid state.
"""

from __future__ import annotations

import logging
from typing import Any

from dazzle_range.config import Number, RangeConfig, parse_number
from dazzle_range.engine.snapping import snap

logger = logging.getLogger(__name__)


def coerce_external(value: Any, config: RangeConfig) -> Number | None:
    """Parse and snap one external value; None when it must be dropped."""
    number = parse_number(value)
    if number is None:
        return None
    if number < config.min or number > config.max:
        return None
    return snap(number, config)


def normalize_pair(value_min: Number, value_max: Number) -> tuple[Number, Number]:
    """Clamp an inverted pair by pulling ``value_min`` down to ``value_max``."""
    if value_min > value_max:
        return value_max, value_max
    return value_min, value_max


def resolve_external(
    config: RangeConfig,
    current: tuple[Number, Number],
    value_min: Any = None,
    value_max: Any = None,
) -> tuple[Number, Number] | None:
    """Compute the pair an external update would install.

    ``None`` for either side keeps the current value. Returns None when the
    update must be discarded as a whole.
    """
    resolved = list(current)
    for index, raw in enumerate((value_min, value_max)):
        if raw is None:
            continue
        coerced = coerce_external(raw, config)
        if coerced is None:
            logger.warning("Ignoring malformed external range value %r", raw)
            return None
        resolved[index] = coerced
    return normalize_pair(resolved[0], resolved[1])
