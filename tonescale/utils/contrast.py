"""WCAG 2.1 contrast ratio utilities.

Implements the relative luminance and contrast ratio calculations defined in
WCAG 2.1 Success Criterion 1.4.3 (Contrast — Minimum), for both sRGB byte
triples and OKLCH colors, plus the lightness search used to hit a target
ratio.
"""

from __future__ import annotations

import logging
import math

from tonescale.models import Color, ContrastCheckResult, ContrastPasses, WcagLevel
from tonescale.utils import oklch

logger = logging.getLogger(__name__)

AA_THRESHOLD = 4.5
AAA_THRESHOLD = 7.0


def relative_luminance(r: int, g: int, b: int) -> float:
    """Compute relative luminance for an sRGB color (0-255 per channel).

    Per WCAG 2.1: L = 0.2126*R + 0.7152*G + 0.0722*B
    where R, G, B are linearized sRGB values.
    """
    rl = oklch.srgb_to_linear(r / 255.0)
    gl = oklch.srgb_to_linear(g / 255.0)
    bl = oklch.srgb_to_linear(b / 255.0)
    return 0.2126 * rl + 0.7152 * gl + 0.0722 * bl


def contrast_ratio_rgb(color1: tuple[int, int, int], color2: tuple[int, int, int]) -> float:
    """Compute the WCAG contrast ratio between two sRGB byte triples.

    Returns a value between 1.0 (identical) and 21.0 (black on white).
    """
    return _ratio(relative_luminance(*color1), relative_luminance(*color2))


def luminance(color: Color) -> float:
    """Relative luminance of an OKLCH color, clamped to [0, 1].

    Computed from unclipped linear sRGB so it keeps varying smoothly with
    lightness for out-of-gamut colors.
    """
    r, g, b = oklch.to_linear_rgb(color)
    y = 0.2126 * r + 0.7152 * g + 0.0722 * b
    if not math.isfinite(y):
        raise ValueError(f"Luminance is not finite for {color}")
    return max(0.0, min(1.0, y))


def _ratio(l1: float, l2: float) -> float:
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_ratio(foreground: Color, background: Color) -> float:
    """WCAG contrast ratio between two OKLCH colors.

    Fails closed: if the ratio cannot be resolved (non-finite components),
    returns 1.0 (no contrast) instead of raising, so a single degenerate
    color never aborts a batch.
    """
    try:
        ratio = _ratio(luminance(foreground), luminance(background))
    except (ArithmeticError, TypeError, ValueError) as exc:
        logger.debug("Contrast unresolved for %s on %s: %s", foreground, background, exc)
        return 1.0
    if not math.isfinite(ratio):
        logger.debug("Contrast unresolved for %s on %s", foreground, background)
        return 1.0
    return ratio


def passes_aa(ratio: float, *, large_text: bool = False) -> bool:
    """Check whether a contrast ratio meets WCAG AA.

    Normal text: 4.5:1 minimum.
    Large text (>=18pt or >=14pt bold): 3:1 minimum.
    """
    threshold = 3.0 if large_text else AA_THRESHOLD
    return ratio >= threshold


def passes_aaa(ratio: float, *, large_text: bool = False) -> bool:
    """Check whether a contrast ratio meets WCAG AAA (7:1, or 4.5:1 for large text)."""
    threshold = AA_THRESHOLD if large_text else AAA_THRESHOLD
    return ratio >= threshold


def _as_color(value: Color | str) -> Color:
    return oklch.parse(value) if isinstance(value, str) else value


def _label(value: Color | str) -> str:
    return value if isinstance(value, str) else oklch.format(value)


def check_contrast(foreground: Color | str, background: Color | str) -> ContrastCheckResult:
    """Check a color pair against WCAG AA and AAA for normal text.

    Strings must be OKLCH and raise :class:`~tonescale.models.ParseError`
    otherwise.
    """
    ratio = contrast_ratio(_as_color(foreground), _as_color(background))
    return result_for_ratio(ratio, _label(foreground), _label(background))


def result_for_ratio(ratio: float, foreground: str, background: str) -> ContrastCheckResult:
    return ContrastCheckResult(
        ratio=ratio,
        passes=ContrastPasses(aa=passes_aa(ratio), aaa=passes_aaa(ratio)),
        foreground=foreground,
        background=background,
    )


def find_lightness_for_contrast(
    base: Color,
    background: Color,
    target_ratio: float,
    *,
    tolerance: float = 0.1,
    max_iterations: int = 50,
) -> Color:
    """Bisect lightness until *base* reaches *target_ratio* against *background*.

    Chroma and hue stay fixed. Against a light background more contrast
    means darker, against a dark one lighter. Stops once the ratio is
    within *tolerance* of the target; if the iteration budget runs out the
    closest candidate seen is returned.
    """
    low, high = 0.0, 1.0
    towards_dark = background.lightness > 0.5
    best = base
    best_error = math.inf

    for _ in range(max_iterations):
        mid = (low + high) / 2
        candidate = oklch.adjust_lightness(base, mid)
        ratio = contrast_ratio(candidate, background)
        error = abs(ratio - target_ratio)

        if error < best_error:
            best, best_error = candidate, error
        if error < tolerance:
            return candidate

        need_more = ratio < target_ratio
        if need_more == towards_dark:
            high = mid
        else:
            low = mid

    logger.debug(
        "Lightness search for %.2f:1 exhausted %d iterations, closest %.3f off",
        target_ratio, max_iterations, best_error,
    )
    return best


def accessible_text_color(background: Color, level: WcagLevel = WcagLevel.AAA) -> Color:
    """Pick a text color that meets *level* on *background*.

    Tries near-black first, then near-white, tinted with the background's
    hue; falls back to searching for a suitable lightness.
    """
    target = level.threshold

    dark_text = Color(lightness=0.15, chroma=0.02, hue=background.hue)
    if contrast_ratio(dark_text, background) >= target:
        return dark_text

    light_text = Color(lightness=0.99, chroma=0.01, hue=background.hue)
    if contrast_ratio(light_text, background) >= target:
        return light_text

    return find_lightness_for_contrast(
        Color(lightness=0.5, chroma=0.02, hue=background.hue),
        background,
        target,
    )
