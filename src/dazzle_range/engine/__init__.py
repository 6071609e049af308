"""
Dual-handle range-value engine.

Pure snapping and position mapping, the interaction controller, the
slide/change emission protocol and external synchronization.
"""

from dazzle_range.engine.controller import STEP_KEYS, RangeSlider
from dazzle_range.engine.emission import (
    AsyncioScheduler,
    Channel,
    DebouncedChannel,
    Emitter,
    ManualScheduler,
    RangePayload,
    Scheduler,
    Subscription,
)
from dazzle_range.engine.positions import TrackRect, from_client_position, from_percent, to_percent
from dazzle_range.engine.snapping import clamp, format_value, is_snapped, round_half_away, snap
from dazzle_range.engine.state import Dragging, Idle, InteractionState, SliderState, Thumb
from dazzle_range.engine.sync import coerce_external, normalize_pair, resolve_external

__all__ = [
    # Controller
    "RangeSlider",
    "STEP_KEYS",
    # State
    "SliderState",
    "Thumb",
    "Idle",
    "Dragging",
    "InteractionState",
    # Snapping
    "snap",
    "clamp",
    "format_value",
    "is_snapped",
    "round_half_away",
    # Positions
    "TrackRect",
    "to_percent",
    "from_percent",
    "from_client_position",
    # Emission
    "RangePayload",
    "Channel",
    "DebouncedChannel",
    "Emitter",
    "Subscription",
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    # Sync
    "coerce_external",
    "normalize_pair",
    "resolve_external",
]
