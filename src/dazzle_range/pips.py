"""
Scale markers ("pips") drawn below the slider track.
"""

from __future__ import annotations

from dataclasses import dataclass

from dazzle_range.config import Number, PipsSpec, RangeConfig
from dazzle_range.engine.positions import DISPLAY_PRECISION
from dazzle_range.engine.snapping import format_value

DEFAULT_POSITIONS: tuple[int, ...] = (0, 25, 50, 75, 100)


@dataclass(frozen=True, slots=True)
class Pip:
    """One marker; ``large`` pips carry a value label."""

    percent: float
    value: Number
    large: bool = True


def generate_pips(pips: bool | PipsSpec | None, config: RangeConfig) -> list[Pip]:
    """Expand a pips option into concrete markers.

    ``True`` means markers at 0/25/50/75/100%. A degenerate range puts every
    marker at 0%.
    """
    if pips is None or pips is False:
        return []
    spec = PipsSpec(values=list(DEFAULT_POSITIONS)) if pips is True else pips

    match spec.mode:
        case "positions":
            return [_at_percent(p, config) for p in spec.values]
        case "count":
            return [_at_percent(i * 100 / (spec.count - 1), config) for i in range(spec.count)]
        case "steps":
            return _step_pips(config)
        case "values":
            return [_at_value(v, config) for v in spec.values]
        case _:
            return []


def _at_percent(percent: Number, config: RangeConfig) -> Pip:
    value = config.min + config.span * percent / 100
    offset = 0.0 if config.is_degenerate else round(float(percent), DISPLAY_PRECISION)
    return Pip(percent=offset, value=format_value(value, config))


def _at_value(value: Number, config: RangeConfig) -> Pip:
    return Pip(percent=_percent_of(value, config), value=format_value(value, config))


def _percent_of(value: Number, config: RangeConfig) -> float:
    if config.is_degenerate:
        return 0.0
    return round((value - config.min) / config.span * 100, DISPLAY_PRECISION)


def _step_pips(config: RangeConfig) -> list[Pip]:
    step_count = config.max_steps
    # Label first, last and roughly every fifth marker
    label_every = max(1, step_count // 5)
    result: list[Pip] = []
    for i in range(step_count + 1):
        value = config.min + i * config.step
        large = i == 0 or i == step_count or i % label_every == 0
        result.append(
            Pip(percent=_percent_of(value, config), value=format_value(value, config), large=large)
        )
    return result
