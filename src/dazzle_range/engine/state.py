"""
Slider state and interaction states.

``SliderState`` holds the two values; ``Idle`` / ``Dragging`` form the closed
set of interaction states the controller matches on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from dazzle_range.config import Number, RangeConfig


class Thumb(IntEnum):
    """Thumb identity. Roles never swap, even when both values coincide."""

    MIN = 0
    MAX = 1

    @property
    def other(self) -> Thumb:
        return Thumb.MAX if self is Thumb.MIN else Thumb.MIN

    @property
    def aria_label(self) -> str:
        return "Minimum value" if self is Thumb.MIN else "Maximum value"


@dataclass(frozen=True, slots=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True, slots=True)
class Dragging:
    """A pointer or touch gesture is moving ``thumb``."""

    thumb: Thumb


InteractionState = Idle | Dragging


@dataclass
class SliderState:
    """Current pair of values plus the interaction flags exposed to the host."""

    value_min: Number
    value_max: Number
    active_thumb: Thumb | None = None
    dragging: bool = False

    def value_of(self, thumb: Thumb) -> Number:
        return self.value_min if thumb is Thumb.MIN else self.value_max

    def set_value(self, thumb: Thumb, value: Number) -> None:
        if thumb is Thumb.MIN:
            self.value_min = value
        else:
            self.value_max = value

    def holds_invariant(self, config: RangeConfig) -> bool:
        """min <= value_min <= value_max <= max."""
        return config.min <= self.value_min <= self.value_max <= config.max

    def copy(self) -> SliderState:
        return SliderState(
            value_min=self.value_min,
            value_max=self.value_max,
            active_thumb=self.active_thumb,
            dragging=self.dragging,
        )
