"""
Template context models for the server-rendered range slider.

Pydantic models that carry everything ``components/range_slider.html``
needs; built from a live ``RangeSlider`` or from bare options.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dazzle_range.config import RangeSliderOptions
from dazzle_range.engine.controller import RangeSlider
from dazzle_range.engine.emission import ManualScheduler
from dazzle_range.engine.state import Thumb
from dazzle_range.pips import generate_pips


class ThumbContext(BaseModel):
    """One draggable handle."""

    index: int
    percent: float
    aria: dict[str, str] = Field(default_factory=dict)
    display: str = ""
    active: bool = False


class HiddenInputContext(BaseModel):
    """Form field mirrored from the slider state."""

    name: str
    value: str


class PipContext(BaseModel):
    """Scale marker for rendering."""

    percent: float
    label: str
    large: bool = True


class RangeSliderContext(BaseModel):
    """Context for rendering ``components/range_slider.html``."""

    id: str
    name: str
    classes: list[str] = Field(default_factory=list)
    data: dict[str, str] = Field(default_factory=dict)  # rendered as data-<key>
    range_left: float = 0.0
    range_width: float = 0.0
    thumbs: list[ThumbContext] = Field(default_factory=list)
    inputs: list[HiddenInputContext] = Field(default_factory=list)
    tooltips: bool = False
    pips: list[PipContext] = Field(default_factory=list)

    @property
    def class_attr(self) -> str:
        return " ".join(self.classes)


def _bool_attr(value: bool) -> str:
    return "true" if value else "false"


def build_range_slider_context(source: RangeSlider | RangeSliderOptions) -> RangeSliderContext:
    """Build the render context.

    Options are turned into a throwaway slider so initial values go through
    the same snapping and ordering rules as a live widget.
    """
    if isinstance(source, RangeSliderOptions):
        with RangeSlider(source, scheduler=ManualScheduler()) as slider:
            return build_range_slider_context(slider)

    slider = source
    options = slider.options
    config = slider.config

    classes = ["range-slider"]
    if slider.disabled:
        classes.append("range-slider-disabled")
    if slider.is_dragging:
        classes.append("range-slider-dragging")
    if options.css_class:
        classes.append(options.css_class)

    data = {
        "id": options.dom_id,
        "name": slider.name,
        "min": str(config.min),
        "max": str(config.max),
        "step": str(config.step),
        "precision": str(config.precision),
        "value-min": str(slider.value_min),
        "value-max": str(slider.value_max),
        "debounce": str(slider.emitter.slide.delay_ms),
        "tooltips": _bool_attr(slider.tooltips),
        "disabled": _bool_attr(slider.disabled),
    }

    thumbs = [
        ThumbContext(
            index=int(thumb),
            percent=slider.percent_min if thumb is Thumb.MIN else slider.percent_max,
            aria=slider.aria_attributes(thumb),
            display=slider.display_value(thumb),
            active=slider.state.active_thumb is thumb,
        )
        for thumb in Thumb
    ]

    inputs = [
        HiddenInputContext(name=key, value=str(value))
        for key, value in slider.form_values.items()
    ]

    pips = [
        PipContext(percent=pip.percent, label=str(pip.value), large=pip.large)
        for pip in generate_pips(options.pips, config)
    ]

    return RangeSliderContext(
        id=options.dom_id,
        name=slider.name,
        classes=classes,
        data=data,
        range_left=slider.percent_min,
        range_width=round(slider.percent_max - slider.percent_min, 2),
        thumbs=thumbs,
        inputs=inputs,
        tooltips=slider.tooltips,
        pips=pips,
    )

