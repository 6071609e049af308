"""
Emission protocol for range slider notifications.

Three channels carry the same payload shape:

- ``slide``  -- debounced; only the last mutation of a burst is delivered.
- ``change`` -- immediate; exactly once per committed interaction.
- ``input``  -- immediate mirror of every accepted mutation, for live form
  change tracking.

``Emitter.settle()`` is the single place that cancels a pending slide before
a change goes out, so a late slide can never overwrite a committed value.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from dazzle_range.config import Number, RangeConfig
from dazzle_range.engine.snapping import format_value
from dazzle_range.engine.state import SliderState

logger = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]
PayloadFactory = Callable[[], "RangePayload"]


# =============================================================================
# Payload
# =============================================================================


@dataclass(frozen=True, slots=True)
class RangePayload:
    """Notification payload; values are already typed by precision."""

    name: str
    min: Number
    max: Number

    @classmethod
    def from_state(cls, name: str, state: SliderState, config: RangeConfig) -> RangePayload:
        return cls(
            name=name,
            min=format_value(state.value_min, config),
            max=format_value(state.value_max, config),
        )

    def form_values(self) -> dict[str, Number]:
        """The two persisted values, keyed ``<name>_min`` / ``<name>_max``."""
        return {f"{self.name}_min": self.min, f"{self.name}_max": self.max}

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "min": self.min, "max": self.max, **self.form_values()}


# =============================================================================
# Schedulers
# =============================================================================


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with an ``asyncio.AbstractEventLoop.call_later``-shaped method."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class _SpentHandle:
    def cancel(self) -> None:
        return None


class AsyncioScheduler:
    """Schedule on the running event loop.

    Without a running loop (e.g. a synchronous host) the callback is
    delivered immediately, which degrades debouncing to pass-through.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; delivering debounced callback immediately")
            callback()
            return _SpentHandle()
        return loop.call_later(delay, callback)


@dataclass
class _ManualTimer:
    due: float
    callback: Callable[[], None]
    seq: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """
    Deterministic virtual clock for tests and synchronous hosts.

    Example:
        scheduler = ManualScheduler()
        slider = RangeSlider(options, scheduler=scheduler)
        ...
        scheduler.advance(0.05)  # fires timers due within the next 50 ms
    """

    now: float = 0.0
    _timers: list[_ManualTimer] = field(default_factory=list)
    _seq: int = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        self._seq += 1
        timer = _ManualTimer(due=self.now + max(0.0, delay), callback=callback, seq=self._seq)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in order. Returns the number fired."""
        target = self.now + seconds
        fired = 0
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self._timers.remove(timer)
            self.now = timer.due
            timer.callback()
            fired += 1
        self._timers = [t for t in self._timers if not t.cancelled]
        self.now = target
        return fired


# =============================================================================
# Channels
# =============================================================================


class Subscription:
    """Handle returned by ``Channel.subscribe``; dispose to stop delivery."""

    def __init__(self, channel: Channel, listener: Listener) -> None:
        self._channel: Channel | None = channel
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._channel is not None

    def dispose(self) -> None:
        if self._channel is not None:
            self._channel._remove(self._listener)
            self._channel = None

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class Channel:
    """Immediate observable: every ``emit`` reaches every listener."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Listener] = []

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def subscribe(self, listener: Listener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def clear(self) -> None:
        self._listeners.clear()

    def emit(self, payload: RangePayload) -> None:
        data = payload.as_dict()
        for listener in list(self._listeners):
            try:
                listener(dict(data))
            except Exception:
                # A failing host callback must not break the interaction loop
                logger.exception("Range slider %s listener failed for %s", self.name, payload.name)


class DebouncedChannel(Channel):
    """Coalescing observable.

    Each ``schedule`` cancels the pending timer and starts a new one; the
    payload is built when the timer fires, so it reflects the state current
    at fire time.
    """

    def __init__(self, name: str, scheduler: Scheduler, delay_ms: int) -> None:
        super().__init__(name)
        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self._handle: TimerHandle | None = None
        self._factory: PayloadFactory | None = None

    @property
    def pending(self) -> bool:
        return self._factory is not None

    def schedule(self, factory: PayloadFactory) -> None:
        self.cancel()
        if not self.has_listeners:
            return
        self._factory = factory
        handle = self._scheduler.call_later(self.delay_ms / 1000, self._fire)
        # The scheduler may have delivered synchronously
        self._handle = handle if self._factory is not None else None

    def cancel(self) -> bool:
        """Drop the pending delivery, if any. Returns True when one was dropped."""
        was_pending = self.pending
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._factory = None
        return was_pending

    def flush(self) -> bool:
        """Deliver the pending payload now instead of waiting for the timer."""
        if not self.pending:
            return False
        if self._handle is not None:
            self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        factory = self._factory
        self._handle = None
        self._factory = None
        if factory is not None:
            self.emit(factory())


class Emitter:
    """The three per-widget channels plus the settle rule."""

    def __init__(self, scheduler: Scheduler, debounce_ms: int) -> None:
        self.slide = DebouncedChannel("slide", scheduler, debounce_ms)
        self.change = Channel("change")
        self.input = Channel("input")

    def mutated(self, factory: PayloadFactory) -> None:
        """An accepted drag mutation: mirror now, slide later."""
        self.input.emit(factory())
        self.slide.schedule(factory)

    def settle(self, payload: RangePayload) -> None:
        """A committed interaction: cancel any pending slide, then change."""
        if self.slide.cancel():
            logger.debug("Dropped pending slide for %s on settle", payload.name)
        self.change.emit(payload)
        self.input.emit(payload)

    def close(self) -> None:
        self.slide.cancel()
        for channel in (self.slide, self.change, self.input):
            channel.clear()
