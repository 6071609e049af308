"""Tests for range configuration, options and environment defaults."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest
from pydantic import ValidationError

from dazzle_range.config import (
    PipsSpec,
    RangeConfig,
    RangeDefaults,
    RangeSliderOptions,
    infer_precision,
    parse_number,
)
from dazzle_range.engine import ManualScheduler, RangeSlider
from dazzle_range.errors import ConfigurationError, ErrorContext


class TestInferPrecision:
    def test_integer_step(self) -> None:
        assert infer_precision(1) == 0

    def test_half_step(self) -> None:
        assert infer_precision(0.5) == 1

    def test_hundredth_step(self) -> None:
        assert infer_precision(0.01) == 2

    def test_whole_float_step_is_integral(self) -> None:
        assert infer_precision(1.0) == 0

    def test_multi_digit_integer_step(self) -> None:
        assert infer_precision(10) == 0

    def test_scientific_notation(self) -> None:
        assert infer_precision(1e-05) == 5


class TestRangeConfig:
    def test_defaults(self) -> None:
        config = RangeConfig()
        assert (config.min, config.max, config.step, config.precision) == (0, 100, 1, 0)

    def test_precision_is_derived(self) -> None:
        assert RangeConfig(0, 5, 0.5).precision == 1

    def test_precision_cannot_be_supplied(self) -> None:
        with pytest.raises(TypeError):
            RangeConfig(0, 5, 0.5, precision=3)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        config = RangeConfig()
        with pytest.raises(AttributeError):
            config.min = 5  # type: ignore[misc]

    @pytest.mark.parametrize("step", [0, -1, -0.5])
    def test_non_positive_step_rejected(self, step: float) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            RangeConfig(0, 100, step)
        assert exc_info.value.context is not None
        assert exc_info.value.context.field == "step"

    def test_inverted_bounds_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="min must not exceed max"):
            RangeConfig(10, 0, 1)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, "5", None, True])
    def test_non_numeric_rejected(self, bad: object) -> None:
        with pytest.raises(ConfigurationError):
            RangeConfig(bad, 100, 1)  # type: ignore[arg-type]

    def test_degenerate_range_accepted(self) -> None:
        config = RangeConfig(50, 50, 1)
        assert config.is_degenerate
        assert config.max_steps == 0

    def test_max_steps_ignores_partial_step(self) -> None:
        assert RangeConfig(0, 10, 3).max_steps == 3

    def test_max_steps_tolerates_float_drift(self) -> None:
        # 0.3 / 0.1 == 2.9999999999999996
        assert RangeConfig(0, 0.3, 0.1).max_steps == 3

    def test_default_values(self) -> None:
        assert RangeConfig(0, 1000, 1).default_values() == (250, 750)

    def test_rounding_digits_widened_by_min(self) -> None:
        assert RangeConfig(0.25, 10, 0.5).rounding_digits == 2

    def test_rounding_digits_widened_by_max(self) -> None:
        assert RangeConfig(0, 10.25, 0.5).rounding_digits == 2

    def test_decimal_values_become_floats(self) -> None:
        config = RangeConfig(Decimal("0"), Decimal("5"), Decimal("0.5"))
        assert (config.min, config.max, config.step) == (0.0, 5.0, 0.5)
        assert all(isinstance(v, float) for v in (config.min, config.max, config.step))
        assert config.precision == 1


class TestFromValues:
    def test_numeric_strings(self) -> None:
        config = RangeConfig.from_values("0", "10", "0.5")
        assert (config.min, config.max, config.step, config.precision) == (0, 10, 0.5, 1)

    def test_garbage_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="max"):
            RangeConfig.from_values("0", "lots", "1")


class TestParseNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(3, 3), (2.5, 2.5), ("7", 7), (" 1.5 ", 1.5), ("1e2", 100.0)],
    )
    def test_accepts(self, raw: object, expected: float) -> None:
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, "", "abc", "nan", math.inf, [1]])
    def test_rejects(self, raw: object) -> None:
        assert parse_number(raw) is None


class TestErrorContext:
    def test_format_with_widget(self) -> None:
        ctx = ErrorContext(field="step", value=0, widget="price")
        assert ctx.format() == "price.step=0"

    def test_message_includes_context(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            RangeConfig(0, 100, 0)
        assert str(exc_info.value) == "step=0: step must be greater than zero"


class TestRangeDefaults:
    def test_from_env_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DAZZLE_RANGE_DEBOUNCE_MS", raising=False)
        monkeypatch.delenv("DAZZLE_RANGE_TOOLTIPS", raising=False)
        defaults = RangeDefaults.from_env()
        assert defaults.debounce_ms == 50
        assert defaults.tooltips is False

    def test_from_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAZZLE_RANGE_DEBOUNCE_MS", "120")
        monkeypatch.setenv("DAZZLE_RANGE_TOOLTIPS", "1")
        defaults = RangeDefaults.from_env()
        assert defaults.debounce_ms == 120
        assert defaults.tooltips is True

    def test_from_env_garbage_debounce(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAZZLE_RANGE_DEBOUNCE_MS", "soon")
        assert RangeDefaults.from_env().debounce_ms == 50


class TestRangeSliderOptions:
    def test_minimal(self) -> None:
        options = RangeSliderOptions(name="price")
        assert options.dom_id == "range-slider-price"
        assert options.min == 0
        assert options.max == 100
        assert isinstance(options.step, int)

    def test_explicit_id(self) -> None:
        assert RangeSliderOptions(name="price", id="filters-price").dom_id == "filters-price"

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RangeSliderOptions(name="")

    def test_padded_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RangeSliderOptions(name=" price")

    def test_negative_debounce_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RangeSliderOptions(name="price", debounce_ms=-1)

    def test_pips_spec_count_minimum(self) -> None:
        with pytest.raises(ValidationError):
            PipsSpec(mode="count", count=1)

    def test_explicit_values_win_over_defaults(self) -> None:
        defaults = RangeDefaults(debounce_ms=200, tooltips=True)
        options = RangeSliderOptions(name="price", debounce_ms=10, tooltips=False)
        assert options.resolved_debounce_ms(defaults) == 10
        assert options.resolved_tooltips(defaults) is False

    def test_unset_values_use_defaults(self) -> None:
        defaults = RangeDefaults(debounce_ms=200, tooltips=True)
        options = RangeSliderOptions(name="price")
        assert options.resolved_debounce_ms(defaults) == 200
        assert options.resolved_tooltips(defaults) is True

    def test_invalid_step_fails_construction(self) -> None:
        options = RangeSliderOptions(name="price", step=0)
        with pytest.raises(ConfigurationError):
            RangeSlider(options, scheduler=ManualScheduler())

    def test_inverted_bounds_fail_construction(self) -> None:
        options = RangeSliderOptions(name="price", min=100, max=0)
        with pytest.raises(ConfigurationError):
            RangeSlider(options, scheduler=ManualScheduler())
