"""Accessibility validation of generated scales."""

from __future__ import annotations

from collections.abc import Mapping

from tonescale.models import TEXT_STEPS, Color, ParseError, ValidationResult, WcagLevel, normalize_step
from tonescale.utils import oklch
from tonescale.utils.contrast import contrast_ratio

# Light theme page background the text steps are checked against.
REFERENCE_BACKGROUND = Color(lightness=0.99, chroma=0.01, hue=250.0)


def validate_color_scale(
    scale: Mapping[int | str, str],
    level: WcagLevel | str = WcagLevel.AAA,
    *,
    background: Color = REFERENCE_BACKGROUND,
) -> ValidationResult:
    """Check that steps 600-950 are usable as text on *background*.

    Steps 50-500 are backgrounds and fills, not text, and are never
    reported. A text step whose value does not parse is reported as an
    issue. Step keys may be ints or strings such as ``"700"``.
    """
    level = WcagLevel(level)
    target = level.threshold
    result = ValidationResult()
    steps = {normalize_step(step): value for step, value in scale.items()}

    for step in TEXT_STEPS:
        value = steps[step]
        try:
            color = oklch.parse(value)
        except ParseError:
            result.issues.append(f"Shade {step} is not a valid OKLCH color ({value})")
            continue

        ratio = contrast_ratio(color, background)
        if ratio < target:
            result.issues.append(
                f"Shade {step} has insufficient contrast ({ratio:.2f}:1, needs {target}:1)"
            )

    return result
