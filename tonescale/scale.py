"""Tonal scale generation.

Each step of a scale is found by bisecting lightness until the color's
contrast against a near-white background matches the step's target ratio.
Hue never changes along a scale, and chroma is held at the seed's value
unless the optional taper is enabled.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from tonescale.models import (
    BASE_STEP,
    STEPS,
    Color,
    ColorConfig,
    ColorScale,
    InvalidSeedColorError,
    ParseError,
)
from tonescale.utils import oklch
from tonescale.utils.contrast import find_lightness_for_contrast

logger = logging.getLogger(__name__)

# Target contrast against the light background, per step.
# Higher step = darker = more contrast.
DEFAULT_CONTRAST_RATIOS: Mapping[int, float] = MappingProxyType({
    50: 1.05,  # nearly white
    100: 1.15,
    200: 1.3,
    300: 1.6,
    400: 2.5,
    500: 4.5,  # base, AA for text
    600: 7.0,  # AAA for text
    700: 10.0,
    800: 13.0,
    900: 15.0,
    950: 18.0,  # nearly black
})

BACKGROUND_LIGHTNESS = 0.99
BACKGROUND_CHROMA = 0.01


def reference_background(hue: float) -> Color:
    """Near-white background tinted with *hue*, shared by every step of a scale."""
    return Color(lightness=BACKGROUND_LIGHTNESS, chroma=BACKGROUND_CHROMA, hue=hue)


def taper_chroma(color: Color) -> Color:
    """Reduce chroma towards 0 as lightness approaches 0 or 1.

    A simple parabola, ``4·L·(1−L)`` capped at 1, keeps mid-tones at full
    chroma while pulling extreme steps back towards the sRGB gamut.
    """
    factor = min(1.0, 4 * color.lightness * (1 - color.lightness))
    return oklch.adjust_chroma(color, color.chroma * factor)


def _target_ratios(config: ColorConfig) -> dict[int, float]:
    ratios = dict(DEFAULT_CONTRAST_RATIOS)
    if config.target_contrasts:
        ratios.update(config.target_contrasts)
    return ratios


def generate_color_scale(
    config: ColorConfig,
    *,
    tolerance: float = 0.1,
    max_iterations: int = 50,
    chroma_taper: bool = False,
) -> ColorScale:
    """Generate the 11-step scale for one seed color.

    Step 500 is the seed itself. Overrides replace generated steps as-is
    once they parse; their contrast is not checked.

    Raises :class:`InvalidSeedColorError` if the seed or an override is
    not a valid OKLCH color.
    """
    try:
        base = oklch.parse(config.base_color)
    except ParseError as exc:
        raise InvalidSeedColorError(config.name, config.base_color, str(exc)) from exc

    overrides = config.overrides or {}
    for step, value in overrides.items():
        try:
            oklch.parse(value)
        except ParseError as exc:
            raise InvalidSeedColorError(config.name, value, f"override for step {step}") from exc

    background = reference_background(base.hue)
    ratios = _target_ratios(config)

    scale: ColorScale = {}
    for step in STEPS:
        if step == BASE_STEP:
            scale[step] = oklch.format(base)
            continue
        color = find_lightness_for_contrast(
            base,
            background,
            ratios[step],
            tolerance=tolerance,
            max_iterations=max_iterations,
        )
        if chroma_taper:
            color = taper_chroma(color)
        scale[step] = oklch.format(color)

    for step, value in overrides.items():
        scale[step] = value

    logger.debug("Generated scale %r from %s", config.name, config.base_color)
    return scale


def generate_color_scales(configs: Iterable[ColorConfig], **kwargs) -> dict[str, ColorScale]:
    """Generate scales for several colors, keyed by name in input order.

    A color that fails is logged and left out; the others are unaffected.
    Use :func:`tonescale.pipeline.run_batch` to collect the failures.
    """
    scales: dict[str, ColorScale] = {}
    for config in configs:
        try:
            scales[config.name] = generate_color_scale(config, **kwargs)
        except InvalidSeedColorError as exc:
            logger.warning("Skipping %s", exc)
    return scales
