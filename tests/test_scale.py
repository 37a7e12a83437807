"""Tests for tonal scale generation."""

from __future__ import annotations

import pytest

from tonescale.models import STEPS, Color, ColorConfig, InvalidSeedColorError
from tonescale.scale import (
    DEFAULT_CONTRAST_RATIOS,
    generate_color_scale,
    generate_color_scales,
    reference_background,
    taper_chroma,
)
from tonescale.utils import oklch
from tonescale.utils.contrast import contrast_ratio


def _ratio(value: str, hue: float = 250.0) -> float:
    return contrast_ratio(oklch.parse(value), reference_background(hue))


class TestDefaultRatios:
    def test_covers_every_step(self) -> None:
        assert tuple(DEFAULT_CONTRAST_RATIOS) == STEPS

    def test_monotonic(self) -> None:
        values = [DEFAULT_CONTRAST_RATIOS[s] for s in STEPS]
        assert values == sorted(values)

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_CONTRAST_RATIOS[500] = 3.0  # type: ignore[index]


class TestReferenceBackground:
    def test_matches_seed_hue(self) -> None:
        bg = reference_background(140.0)
        assert (bg.lightness, bg.chroma, bg.hue) == (0.99, 0.01, 140.0)


class TestGenerateColorScale:
    def test_all_steps_present(self, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config)
        assert tuple(scale) == STEPS

    @pytest.mark.parametrize(
        "base",
        ["oklch(0.55 0.02 250)", "oklch(0.7 0.2 140)", "oklch(0.6 0.22 25)", "oklch(0.2 0 0)", "oklch(1 0 0)"],
    )
    def test_complete_for_any_seed(self, base: str) -> None:
        scale = generate_color_scale(ColorConfig(name="c", base_color=base))
        assert tuple(scale) == STEPS
        for value in scale.values():
            oklch.parse(value)

    def test_base_step_is_seed(self, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config)
        assert scale[500] == "oklch(0.55 0.22 250)"

    def test_base_step_ignores_target(self) -> None:
        config = ColorConfig(
            name="primary",
            base_color="oklch(55% 0.22 250deg)",
            target_contrasts={500: 12.0},
        )
        scale = generate_color_scale(config)
        assert scale[500] == oklch.format(oklch.parse(config.base_color))

    def test_hue_and_chroma_held(self, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config)
        for value in scale.values():
            color = oklch.parse(value)
            assert color.hue == 250.0
            assert color.chroma == 0.22

    @pytest.mark.parametrize("step", [50, 100, 200, 300, 400, 600, 700, 800, 900, 950])
    def test_steps_hit_default_targets(self, step: int, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config)
        assert _ratio(scale[step]) == pytest.approx(DEFAULT_CONTRAST_RATIOS[step], abs=0.1)

    def test_darker_steps_are_darker(self, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config)
        generated = [oklch.parse(scale[s]).lightness for s in STEPS if s != 500]
        assert generated == sorted(generated, reverse=True)

    def test_custom_targets(self) -> None:
        config = ColorConfig(
            name="primary",
            base_color="oklch(0.55 0.22 250)",
            target_contrasts={"700": 8.0, 900: 12.0},
        )
        scale = generate_color_scale(config)
        assert _ratio(scale[700]) == pytest.approx(8.0, abs=0.1)
        assert _ratio(scale[900]) == pytest.approx(12.0, abs=0.1)
        # Unspecified steps keep the defaults
        assert _ratio(scale[800]) == pytest.approx(13.0, abs=0.1)

    def test_tighter_tolerance(self, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config, tolerance=0.001)
        assert _ratio(scale[600]) == pytest.approx(7.0, abs=0.001)

    def test_override_wins(self) -> None:
        config = ColorConfig(
            name="primary",
            base_color="oklch(0.55 0.22 250)",
            overrides={700: "oklch(0.98 0.01 250)"},
        )
        scale = generate_color_scale(config)
        assert scale[700] == "oklch(0.98 0.01 250)"

    def test_override_string_kept_verbatim(self) -> None:
        config = ColorConfig(
            name="primary",
            base_color="oklch(0.55 0.22 250)",
            overrides={"50": "OKLCH(97% 0.01 250)"},
        )
        assert generate_color_scale(config)[50] == "OKLCH(97% 0.01 250)"

    def test_invalid_seed(self) -> None:
        with pytest.raises(InvalidSeedColorError) as excinfo:
            generate_color_scale(ColorConfig(name="brand", base_color="#3366FF"))
        assert excinfo.value.name == "brand"
        assert excinfo.value.base_color == "#3366FF"
        assert "brand" in str(excinfo.value)

    def test_invalid_override(self) -> None:
        config = ColorConfig(
            name="brand",
            base_color="oklch(0.55 0.22 250)",
            overrides={900: "almost-black"},
        )
        with pytest.raises(InvalidSeedColorError) as excinfo:
            generate_color_scale(config)
        assert excinfo.value.base_color == "almost-black"


class TestChromaTaper:
    def test_taper_factor(self) -> None:
        assert taper_chroma(Color(0.5, 0.2, 10.0)).chroma == pytest.approx(0.2)
        assert taper_chroma(Color(0.0, 0.2, 10.0)).chroma == 0.0
        assert taper_chroma(Color(0.9, 0.2, 10.0)).chroma == pytest.approx(0.2 * 0.36)

    def test_taper_reduces_extremes(self, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config, chroma_taper=True)
        assert oklch.parse(scale[50]).chroma < 0.22
        assert oklch.parse(scale[950]).chroma < 0.22
        assert oklch.parse(scale[50]).hue == 250.0
        assert scale[500] == "oklch(0.55 0.22 250)"

    def test_off_by_default(self, blue_config: ColorConfig) -> None:
        scale = generate_color_scale(blue_config)
        assert oklch.parse(scale[50]).chroma == 0.22


class TestGenerateColorScales:
    def test_keeps_input_order(self) -> None:
        configs = [
            ColorConfig(name="warning", base_color="oklch(0.75 0.15 85)"),
            ColorConfig(name="error", base_color="oklch(0.60 0.22 25)"),
            ColorConfig(name="info", base_color="oklch(0.60 0.18 240)"),
        ]
        scales = generate_color_scales(configs)
        assert list(scales) == ["warning", "error", "info"]

    def test_bad_color_is_skipped(self) -> None:
        configs = [
            ColorConfig(name="good", base_color="oklch(0.6 0.1 30)"),
            ColorConfig(name="bad", base_color="oklch(nope)"),
        ]
        scales = generate_color_scales(configs)
        assert list(scales) == ["good"]
        assert tuple(scales["good"]) == STEPS

    def test_empty(self) -> None:
        assert generate_color_scales([]) == {}
