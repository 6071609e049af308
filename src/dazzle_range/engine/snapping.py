"""
Snap/clamp engine.

Pure functions mapping an arbitrary real number onto a valid, in-domain,
step-aligned value. Step counts are rounded half away from zero.
"""

from __future__ import annotations

import math

from dazzle_range.config import Number, RangeConfig


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Standard clamp, no snapping."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def snap(value: Number, config: RangeConfig) -> Number:
    """Snap *value* to the nearest step from ``config.min`` and clamp into the domain.

    The step count is bounded to ``[0, config.max_steps]`` so the result is
    always on the grid, which keeps ``snap`` idempotent even when ``max``
    itself is not step-aligned.
    """
    if config.is_degenerate:
        return config.min
    steps = round_half_away((value - config.min) / config.step)
    steps = clamp(steps, 0, config.max_steps)
    snapped = config.min + steps * config.step
    if config.rounding_digits == 0:
        snapped = int(round(snapped))
    else:
        snapped = round(snapped, config.rounding_digits)
    return clamp(snapped, config.min, config.max)


def format_value(value: Number, config: RangeConfig) -> Number:
    """Value as handed to the host.

    ``int`` when the grid is integral, else a float rounded to
    ``config.rounding_digits``. Rounding is lossless for snapped values, so an
    off-grid ``min`` such as 0.5 is emitted as 0.5, never 0.
    """
    if config.rounding_digits == 0:
        return int(round(value))
    return round(float(value), config.rounding_digits)


def is_snapped(value: Number, config: RangeConfig) -> bool:
    """True when *value* is already a fixed point of ``snap``."""
    tolerance = 10 ** -(config.rounding_digits + 6)
    return math.isclose(snap(value, config), value, rel_tol=0.0, abs_tol=tolerance)
