"""
Range configuration and widget options.

``RangeConfig`` is the immutable numeric domain of one slider instance.
``RangeSliderOptions`` is the host-facing construction configuration,
validated by pydantic; numeric domain problems surface as
``ConfigurationError`` when the options are turned into a ``RangeConfig``.
"""

from __future__ import annotations

import math
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dazzle_range.errors import make_configuration_error

Number = int | float

DEFAULT_MIN = 0
DEFAULT_MAX = 100
DEFAULT_STEP = 1
DEFAULT_DEBOUNCE_MS = 50


def parse_number(value: Any) -> Number | None:
    """Coerce *value* to a finite int or float.

    Accepts ints, floats, Decimals and numeric strings (as found in form
    posts and data attributes). Returns None for anything else, including
    booleans, NaN and infinities.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return parse_number(float(value)) if value.is_finite() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def decimal_places(value: Number) -> int:
    """Number of fractional digits in the canonical decimal form of *value*."""
    try:
        exponent = Decimal(str(value)).normalize().as_tuple().exponent
    except InvalidOperation:
        return 0
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


def infer_precision(step: Number) -> int:
    """Derive output precision from the step.

    An integral step (``1``, ``5``, ``1.0``) yields 0 and integer output;
    otherwise the count of fractional digits (``0.5`` -> 1, ``0.01`` -> 2).
    """
    return decimal_places(step)


@dataclass(frozen=True)
class RangeConfig:
    """Immutable numeric domain: bounds, step and derived precision."""

    min: Number = DEFAULT_MIN
    max: Number = DEFAULT_MAX
    step: Number = DEFAULT_STEP
    precision: int = field(init=False)

    def __post_init__(self) -> None:
        for name in ("min", "max", "step"):
            value = getattr(self, name)
            if parse_number(value) is None or isinstance(value, str):
                raise make_configuration_error(f"{name} must be a finite number", name, value)
            if isinstance(value, Decimal):
                object.__setattr__(self, name, parse_number(value))
        if self.step <= 0:
            raise make_configuration_error("step must be greater than zero", "step", self.step)
        if self.min > self.max:
            raise make_configuration_error(
                f"min must not exceed max ({self.min} > {self.max})", "min", self.min
            )
        object.__setattr__(self, "precision", infer_precision(self.step))

    @classmethod
    def from_values(
        cls, min: Any = DEFAULT_MIN, max: Any = DEFAULT_MAX, step: Any = DEFAULT_STEP
    ) -> RangeConfig:
        """Build a config from loosely typed values (e.g. numeric strings)."""
        parsed: dict[str, Number] = {}
        for name, raw in (("min", min), ("max", max), ("step", step)):
            number = parse_number(raw)
            if number is None:
                raise make_configuration_error(f"{name} must be a finite number", name, raw)
            parsed[name] = number
        return cls(**parsed)

    @property
    def span(self) -> Number:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        """True when min == max; accepted, but no value mutation is possible."""
        return self.min == self.max

    @property
    def rounding_digits(self) -> int:
        """Digits that represent every grid value and both bounds exactly.

        The step precision, widened when ``min`` or ``max`` carries more
        fractional digits than the step (``min=0.5, step=1`` needs 1).
        """
        return max(self.precision, decimal_places(self.min), decimal_places(self.max))

    @property
    def max_steps(self) -> int:
        """Largest whole number of steps that stays within the domain."""
        if self.is_degenerate:
            return 0
        return math.floor(round(self.span / self.step, 9))

    def default_values(self) -> tuple[float, float]:
        """Default thumb positions at 25% and 75% of the range (unsnapped)."""
        quarter = self.span / 4
        return self.min + quarter, self.max - quarter


@dataclass(frozen=True)
class RangeDefaults:
    """Process-wide defaults for options the host leaves unset."""

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    tooltips: bool = False

    @classmethod
    def from_env(cls) -> RangeDefaults:
        """Load defaults from environment variables."""
        raw_debounce = os.environ.get("DAZZLE_RANGE_DEBOUNCE_MS", str(DEFAULT_DEBOUNCE_MS))
        try:
            debounce_ms = max(0, int(raw_debounce))
        except ValueError:
            debounce_ms = DEFAULT_DEBOUNCE_MS
        return cls(
            debounce_ms=debounce_ms,
            tooltips=os.environ.get("DAZZLE_RANGE_TOOLTIPS", "0") == "1",
        )


class PipsSpec(BaseModel):
    """
    Scale marker configuration.

    Example:
        PipsSpec(mode="positions", values=[0, 50, 100])
        PipsSpec(mode="count", count=5)
        PipsSpec(mode="steps")
        PipsSpec(mode="values", values=[0, 250, 500, 1000])
    """

    mode: Literal["positions", "count", "steps", "values"] = Field(
        default="positions", description="How pip positions are chosen"
    )
    values: list[Number] = Field(
        default_factory=list, description="Percent positions or domain values, by mode"
    )
    count: int = Field(default=5, ge=2, description="Number of evenly spaced pips (count mode)")

    model_config = ConfigDict(frozen=True)


PayloadCallback = Callable[[dict[str, Any]], None]


class RangeSliderOptions(BaseModel):
    """
    Host-supplied construction configuration for one range slider.

    Example:
        RangeSliderOptions(name="price", min=0, max=1000, step=5, on_change=handler)
        RangeSliderOptions(name="rating", min=0, max=5, step=0.5, initial_min=1.5)
    """

    name: str = Field(min_length=1, description="Base key for emitted values and hidden inputs")
    id: str | None = Field(default=None, description="DOM id (default: range-slider-<name>)")
    min: Number = Field(default=DEFAULT_MIN, description="Domain lower bound")
    max: Number = Field(default=DEFAULT_MAX, description="Domain upper bound")
    step: Number = Field(default=DEFAULT_STEP, description="Step; determines output precision")
    initial_min: Number | None = Field(default=None, description="Initial min (default 25%)")
    initial_max: Number | None = Field(default=None, description="Initial max (default 75%)")
    tooltips: bool | None = Field(default=None, description="Show value tooltips on thumbs")
    disabled: bool = Field(default=False, description="Ignore all pointer/keyboard input")
    debounce_ms: int | None = Field(default=None, ge=0, description="Slide debounce interval")
    on_slide: PayloadCallback | None = Field(default=None, description="Debounced drag callback")
    on_change: PayloadCallback | None = Field(default=None, description="Committed value callback")
    on_input: PayloadCallback | None = Field(
        default=None, description="Undebounced mirror of every accepted mutation"
    )
    format: Callable[[Number], str] | None = Field(
        default=None, description="Display formatter; never affects emitted values"
    )
    pips: bool | PipsSpec | None = Field(default=None, description="Scale markers")
    css_class: str | None = Field(default=None, description="Additional CSS classes")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names become form keys, so surrounding whitespace is rejected."""
        if v != v.strip():
            raise ValueError(f"Invalid name '{v}'. Must not have leading/trailing whitespace")
        return v

    @property
    def dom_id(self) -> str:
        return self.id or f"range-slider-{self.name}"

    def range_config(self) -> RangeConfig:
        """Build the numeric domain; raises ConfigurationError when invalid."""
        return RangeConfig(min=self.min, max=self.max, step=self.step)

    def resolved_debounce_ms(self, defaults: RangeDefaults | None = None) -> int:
        if self.debounce_ms is not None:
            return self.debounce_ms
        return (defaults or RangeDefaults.from_env()).debounce_ms

    def resolved_tooltips(self, defaults: RangeDefaults | None = None) -> bool:
        if self.tooltips is not None:
            return self.tooltips
        return (defaults or RangeDefaults.from_env()).tooltips
