"""
Position mapper: value <-> percent along the track, and pointer -> value.
"""

from __future__ import annotations

from dataclasses import dataclass

from dazzle_range.config import Number, RangeConfig
from dazzle_range.engine.snapping import clamp, snap

# Percent positions are only used for CSS offsets
DISPLAY_PRECISION = 2


@dataclass(frozen=True, slots=True)
class TrackRect:
    """Horizontal geometry of the slider track, as reported by the client."""

    left: float = 0.0
    width: float = 0.0

    @classmethod
    def from_client_rect(cls, rect: dict[str, float]) -> TrackRect:
        """Build from a ``getBoundingClientRect()``-shaped mapping."""
        left = float(rect.get("left", rect.get("x", 0.0)))
        width = rect.get("width")
        if width is None:
            width = float(rect.get("right", left)) - left
        return cls(left=left, width=float(width))


def to_percent(value: Number, config: RangeConfig) -> float:
    """Percent offset of *value* along the track; 0 for a degenerate range."""
    if config.is_degenerate:
        return 0.0
    return round((value - config.min) / config.span * 100, DISPLAY_PRECISION)


def from_percent(percent: float, config: RangeConfig) -> Number:
    """Inverse of ``to_percent``, snapped onto the step grid."""
    return snap(config.min + (percent / 100) * config.span, config)


def from_client_position(client_x: float, track: TrackRect, config: RangeConfig) -> Number:
    """Map a pointer x coordinate onto a snapped value.

    A track that has not been laid out yet (zero width) maps every
    coordinate to 0%.
    """
    if track.width <= 0:
        percent = 0.0
    else:
        percent = (client_x - track.left) / track.width * 100
    return from_percent(clamp(percent, 0.0, 100.0), config)
