"""
dazzle-range - dual-handle range slider engine for server-driven UIs.

Converts pointer and keyboard input into ordered, step-snapped value pairs,
emits debounced slide and immediate change notifications, and renders the
slider fragment through Jinja2.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from dazzle_range.config import (
    PipsSpec,
    RangeConfig,
    RangeDefaults,
    RangeSliderOptions,
    infer_precision,
)
from dazzle_range.engine import (
    Dragging,
    Idle,
    ManualScheduler,
    RangePayload,
    RangeSlider,
    SliderState,
    Thumb,
    TrackRect,
    snap,
)
from dazzle_range.errors import ConfigurationError, RangeSliderError

try:
    __version__ = version("dazzle-range")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ConfigurationError",
    "Dragging",
    "Idle",
    "ManualScheduler",
    "PipsSpec",
    "RangeConfig",
    "RangeDefaults",
    "RangePayload",
    "RangeSlider",
    "RangeSliderError",
    "RangeSliderOptions",
    "SliderState",
    "Thumb",
    "TrackRect",
    "infer_precision",
    "snap",
]
