"""
Interaction controller for the dual-handle range slider.

``RangeSlider`` is one widget instance. It consumes pointer, touch and
keyboard input and produces ordered, step-snapped ``(value_min, value_max)``
pairs. Interaction state is either ``Idle`` or ``Dragging(thumb)``:

    Idle --pointer_down(i)--> Dragging(i)
    Dragging(i) --pointer_move--> Dragging(i)     (slide, debounced)
    Dragging(i) --pointer_up--> Idle              (change, immediate)
    Idle --track_click--> Idle                    (change, immediate)
    any --key_down--> same state                  (change, immediate)

Ordering is enforced by clamping the moving thumb against the other
thumb's current value; thumb roles never swap.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from dazzle_range.config import (
    Number,
    RangeConfig,
    RangeDefaults,
    RangeSliderOptions,
    parse_number,
)
from dazzle_range.engine.emission import (
    AsyncioScheduler,
    Emitter,
    Listener,
    RangePayload,
    Scheduler,
    Subscription,
)
from dazzle_range.engine.positions import TrackRect, from_client_position, to_percent
from dazzle_range.engine.snapping import clamp, format_value, snap
from dazzle_range.engine.state import Dragging, Idle, InteractionState, SliderState, Thumb
from dazzle_range.engine.sync import normalize_pair, resolve_external
from dazzle_range.errors import make_configuration_error

logger = logging.getLogger(__name__)

# Key -> number of steps
STEP_KEYS: dict[str, int] = {
    "ArrowLeft": -1,
    "ArrowDown": -1,
    "ArrowRight": 1,
    "ArrowUp": 1,
    "PageDown": -10,
    "PageUp": 10,
}


class RangeSlider:
    """
    One dual-handle range slider instance.

    Slide notifications are debounced on the running asyncio loop. Built
    outside a running loop, the default scheduler delivers every slide
    immediately, so synchronous hosts that want debouncing should pass
    ``scheduler=ManualScheduler()`` and call ``advance()`` from their own clock.

    Example:
        slider = RangeSlider(RangeSliderOptions(name="price", max=1000, on_change=save))
        slider.layout(TrackRect(left=0, width=500))
        slider.pointer_down(Thumb.MAX)
        slider.pointer_move(400)
        slider.pointer_up()          # on_change({"name": "price", "min": 250, "max": 800, ...})
        slider.close()
    """

    def __init__(
        self,
        options: RangeSliderOptions,
        *,
        scheduler: Scheduler | None = None,
        defaults: RangeDefaults | None = None,
    ) -> None:
        defaults = defaults or RangeDefaults.from_env()
        self.options = options
        self.name = options.name
        self.config: RangeConfig = options.range_config()
        self.disabled = options.disabled
        self.tooltips = options.resolved_tooltips(defaults)
        self.state = self._initial_state()
        self._interaction: InteractionState = Idle()
        self._track = TrackRect()
        self._closed = False

        debounce_ms = options.resolved_debounce_ms(defaults)
        self.emitter = Emitter(scheduler or AsyncioScheduler(), debounce_ms)
        self._subscriptions: list[Subscription] = []
        if options.on_slide is not None:
            self._subscriptions.append(self.emitter.slide.subscribe(options.on_slide))
        if options.on_change is not None:
            self._subscriptions.append(self.emitter.change.subscribe(options.on_change))
        if options.on_input is not None:
            self._subscriptions.append(self.emitter.input.subscribe(options.on_input))

    @classmethod
    def from_dataset(
        cls,
        dataset: Mapping[str, str],
        *,
        scheduler: Scheduler | None = None,
        **kwargs: Any,
    ) -> RangeSlider:
        """Build a slider from the ``data-*`` attributes of a rendered fragment.

        Extra keyword arguments (callbacks, ``format``) go to the options.
        """
        name = dataset.get("name", "")
        config = RangeConfig.from_values(
            dataset.get("min", 0), dataset.get("max", 100), dataset.get("step", 1)
        )
        try:
            debounce_ms = int(dataset.get("debounce", "") or 50)
        except ValueError as e:
            raise make_configuration_error(
                "debounce must be an integer", "debounce", dataset.get("debounce"), name
            ) from e
        options = RangeSliderOptions(
            name=name,
            id=dataset.get("id"),
            min=config.min,
            max=config.max,
            step=config.step,
            initial_min=_dataset_number(dataset, "value-min"),
            initial_max=_dataset_number(dataset, "value-max"),
            tooltips=dataset.get("tooltips") == "true",
            disabled=dataset.get("disabled") == "true",
            debounce_ms=debounce_ms,
            **kwargs,
        )
        return cls(options, scheduler=scheduler)

    def _initial_state(self) -> SliderState:
        config = self.config
        default_min, default_max = config.default_values()
        raw_min = default_min if self.options.initial_min is None else self.options.initial_min
        raw_max = default_max if self.options.initial_max is None else self.options.initial_max
        value_min = snap(clamp(raw_min, config.min, config.max), config)
        value_max = snap(clamp(raw_max, config.min, config.max), config)
        value_min, value_max = normalize_pair(value_min, value_max)
        return SliderState(value_min=value_min, value_max=value_max)

    # --- read views ---

    @property
    def interaction(self) -> InteractionState:
        return self._interaction

    @property
    def is_dragging(self) -> bool:
        return isinstance(self._interaction, Dragging)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def value_min(self) -> Number:
        return format_value(self.state.value_min, self.config)

    @property
    def value_max(self) -> Number:
        return format_value(self.state.value_max, self.config)

    @property
    def percent_min(self) -> float:
        return to_percent(self.state.value_min, self.config)

    @property
    def percent_max(self) -> float:
        return to_percent(self.state.value_max, self.config)

    @property
    def focusable(self) -> bool:
        return not self.disabled

    @property
    def form_values(self) -> dict[str, Number]:
        """Hidden input values, ``<name>_min`` / ``<name>_max``."""
        return self.payload().form_values()

    def payload(self) -> RangePayload:
        return RangePayload.from_state(self.name, self.state, self.config)

    def snapshot(self) -> SliderState:
        return self.state.copy()

    def display_value(self, thumb: Thumb | int) -> str:
        """Tooltip text for a thumb; ``options.format`` affects display only."""
        value = format_value(self.state.value_of(Thumb(thumb)), self.config)
        formatter = self.options.format
        return formatter(value) if formatter is not None else str(value)

    def aria_attributes(self, thumb: Thumb | int) -> dict[str, str]:
        thumb = Thumb(thumb)
        return {
            "role": "slider",
            "aria-label": thumb.aria_label,
            "aria-valuemin": str(format_value(self.config.min, self.config)),
            "aria-valuemax": str(format_value(self.config.max, self.config)),
            "aria-valuenow": str(format_value(self.state.value_of(thumb), self.config)),
            "tabindex": "0" if self.focusable else "-1",
        }

    # --- subscriptions ---

    def on_slide(self, listener: Listener) -> Subscription:
        return self._track_subscription(self.emitter.slide.subscribe(listener))

    def on_change(self, listener: Listener) -> Subscription:
        return self._track_subscription(self.emitter.change.subscribe(listener))

    def on_input(self, listener: Listener) -> Subscription:
        return self._track_subscription(self.emitter.input.subscribe(listener))

    def _track_subscription(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    # --- layout ---

    def layout(self, track: TrackRect) -> None:
        """Record the current track geometry used for pointer mapping."""
        self._track = track

    # --- pointer / touch ---

    @property
    def _accepts_input(self) -> bool:
        return not (self.disabled or self._closed)

    def pointer_down(self, thumb: Thumb | int) -> bool:
        if not self._accepts_input:
            return False
        match self._interaction:
            case Idle():
                thumb = Thumb(thumb)
                self._interaction = Dragging(thumb)
                self.state.dragging = True
                self.state.active_thumb = thumb
                logger.debug("Range slider %s: drag start on thumb %d", self.name, thumb)
                return True
            case Dragging():
                return False

    def touch_start(self, thumb: Thumb | int) -> bool:
        return self.pointer_down(thumb)

    def pointer_move(self, client_x: float, track: TrackRect | None = None) -> bool:
        match self._interaction:
            case Dragging(thumb=thumb):
                candidate = from_client_position(client_x, track or self._track, self.config)
                if self._move(thumb, candidate):
                    self.emitter.mutated(self.payload)
                return True
            case Idle():
                return False

    def touch_move(self, touches: Sequence[float], track: TrackRect | None = None) -> bool:
        """Touch drag; only the first touch point is followed."""
        if not touches:
            return False
        return self.pointer_move(touches[0], track)

    def pointer_up(self) -> bool:
        match self._interaction:
            case Dragging(thumb=thumb):
                self._interaction = Idle()
                self.state.dragging = False
                self.state.active_thumb = None
                logger.debug("Range slider %s: drag end on thumb %d", self.name, thumb)
                self.emitter.settle(self.payload())
                return True
            case Idle():
                return False

    def touch_end(self) -> bool:
        return self.pointer_up()

    def track_click(self, client_x: float, track: TrackRect | None = None) -> bool:
        """Jump the closer thumb to the clicked position (ties move the min thumb)."""
        if not self._accepts_input:
            return False
        match self._interaction:
            case Dragging():
                return False
            case Idle():
                value = from_client_position(client_x, track or self._track, self.config)
                to_min = abs(value - self.state.value_min)
                to_max = abs(value - self.state.value_max)
                thumb = Thumb.MIN if to_min <= to_max else Thumb.MAX
                self._move(thumb, value)
                self.emitter.settle(self.payload())
                return True

    # --- keyboard ---

    def key_down(self, key: str, thumb: Thumb | int) -> bool:
        """Handle a key on a focused thumb. Returns True when the key is consumed.

        Home and End always commit a change, like a track click; step keys
        commit only when the value moved.
        """
        if not self._accepts_input:
            return False
        thumb = Thumb(thumb)
        current = self.state.value_of(thumb)
        match key:
            case "Home":
                target = self.config.min if thumb is Thumb.MIN else self.state.value_min
            case "End":
                target = self.state.value_max if thumb is Thumb.MIN else self.config.max
            case _ if key in STEP_KEYS:
                target = current + STEP_KEYS[key] * self.config.step
            case _:
                return False
        moved = self._move(thumb, target)
        if moved or key in ("Home", "End"):
            self.emitter.settle(self.payload())
        return True

    def _move(self, thumb: Thumb, candidate: Number) -> bool:
        """Snap *candidate*, clamp it against the other thumb and install it."""
        value = snap(candidate, self.config)
        if thumb is Thumb.MIN:
            value = min(value, self.state.value_max)
        else:
            value = max(value, self.state.value_min)
        if value == self.state.value_of(thumb):
            return False
        self.state.set_value(thumb, value)
        return True

    # --- external synchronization ---

    def sync(self, value_min: Any = None, value_max: Any = None) -> bool:
        """Install host-pushed values unless a drag is in progress.

        No notification fires. Returns True when the values were applied.
        """
        if self._closed:
            return False
        match self._interaction:
            case Dragging():
                logger.debug("Range slider %s: discarding external sync during drag", self.name)
                return False
            case Idle():
                current = (self.state.value_min, self.state.value_max)
                resolved = resolve_external(self.config, current, value_min, value_max)
                if resolved is None:
                    return False
                self.state.value_min, self.state.value_max = resolved
                return True

    # --- teardown ---

    def close(self) -> None:
        """Detach listeners and cancel any pending slide timer."""
        if self._closed:
            return
        self._closed = True
        self._interaction = Idle()
        self.state.dragging = False
        self.state.active_thumb = None
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()
        self.emitter.close()

    def __enter__(self) -> RangeSlider:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _dataset_number(dataset: Mapping[str, str], key: str) -> Number | None:
    return parse_number(dataset.get(key))
