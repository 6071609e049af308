"""Shared pytest fixtures for dazzle-range tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from dazzle_range.config import RangeDefaults, RangeSliderOptions
from dazzle_range.engine import ManualScheduler, RangeSlider, TrackRect


class Recorder:
    """Collects payloads delivered to a callback."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def __call__(self, payload: dict[str, Any]) -> None:
        self.calls.append(payload)

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Return a deterministic virtual clock."""
    return ManualScheduler()


@pytest.fixture
def defaults() -> RangeDefaults:
    """Return defaults independent of the process environment."""
    return RangeDefaults()


@pytest.fixture
def track() -> TrackRect:
    """A 1000px track starting at x=0, so client x maps 1:1 onto 0..1000."""
    return TrackRect(left=0, width=1000)


@pytest.fixture
def make_slider(
    scheduler: ManualScheduler, defaults: RangeDefaults, track: TrackRect
) -> Iterator[Callable[..., tuple[RangeSlider, Recorder, Recorder]]]:
    """Factory returning ``(slider, slides, changes)`` for the given options."""
    created: list[RangeSlider] = []

    def _make(**kwargs: Any) -> tuple[RangeSlider, Recorder, Recorder]:
        slides, changes = Recorder(), Recorder()
        kwargs.setdefault("name", "budget")
        kwargs.setdefault("max", 1000)
        options = RangeSliderOptions(on_slide=slides, on_change=changes, **kwargs)
        slider = RangeSlider(options, scheduler=scheduler, defaults=defaults)
        slider.layout(track)
        created.append(slider)
        return slider, slides, changes

    yield _make
    for slider in created:
        slider.close()
