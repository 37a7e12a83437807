"""Shared data models used across the tonescale pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# Ordered scale steps, lightest to darkest.
STEPS: tuple[int, ...] = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 950)
BASE_STEP = 500
# Steps intended for use as text on the light reference background.
TEXT_STEPS: tuple[int, ...] = (600, 700, 800, 900, 950)

ColorScale = dict[int, str]


class ColorError(ValueError):
    """Base class for color handling errors."""


class ParseError(ColorError):
    """A color string does not match the expected syntax."""

    def __init__(self, value: str, reason: str = "") -> None:
        self.value = value
        message = f"Invalid OKLCH color: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidSeedColorError(ColorError):
    """Scale generation for one named color failed because a color did not parse."""

    def __init__(self, name: str, base_color: str, reason: str = "") -> None:
        self.name = name
        self.base_color = base_color
        message = f"Color {name!r}: invalid color {base_color!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class WcagLevel(str, enum.Enum):
    """WCAG conformance level for normal-size text."""

    AA = "AA"
    AAA = "AAA"

    @property
    def threshold(self) -> float:
        return 7.0 if self is WcagLevel.AAA else 4.5


@dataclass(frozen=True)
class Color:
    """An OKLCH color.

    ``lightness`` runs from 0 (black) to 1 (white), ``chroma`` from 0
    (grey) to roughly 0.4, ``hue`` is in degrees.
    """

    lightness: float
    chroma: float
    hue: float
    alpha: float = 1.0


def normalize_step(step: int | str) -> int:
    """Coerce a step key such as ``"700"`` to ``700``, rejecting unknown steps."""
    try:
        value = int(step)
    except (TypeError, ValueError):
        raise ValueError(f"Unknown scale step: {step!r}") from None
    if value not in STEPS:
        raise ValueError(f"Unknown scale step: {step!r}. Expected one of {', '.join(map(str, STEPS))}")
    return value


@dataclass
class ColorConfig:
    """Request to generate one named scale."""

    name: str
    base_color: str  # OKLCH string, becomes step 500
    target_contrasts: dict[int, float] | None = None
    overrides: dict[int, str] | None = None

    def __post_init__(self) -> None:
        if self.target_contrasts is not None:
            contrasts: dict[int, float] = {}
            for step, ratio in self.target_contrasts.items():
                ratio = float(ratio)
                if ratio < 1:
                    raise ValueError(f"Target contrast for step {step} must be >= 1, got {ratio}")
                contrasts[normalize_step(step)] = ratio
            self.target_contrasts = contrasts
        if self.overrides is not None:
            self.overrides = {normalize_step(step): value for step, value in self.overrides.items()}


@dataclass(frozen=True)
class ContrastPasses:
    aa: bool
    aaa: bool


@dataclass(frozen=True)
class ContrastCheckResult:
    """Contrast between a foreground and a background color."""

    ratio: float
    passes: ContrastPasses
    foreground: str
    background: str


@dataclass
class ValidationResult:
    """Outcome of checking a scale's text steps against a WCAG level."""

    issues: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues


@dataclass
class ScaleFailure:
    """A config whose scale could not be generated."""

    name: str
    base_color: str
    error: str


@dataclass
class BatchResult:
    """Aggregate result from generating and validating several scales."""

    level: WcagLevel = WcagLevel.AAA
    scales: dict[str, ColorScale] = field(default_factory=dict)
    validations: dict[str, ValidationResult] = field(default_factory=dict)
    failed: list[ScaleFailure] = field(default_factory=list)

    @property
    def total_colors(self) -> int:
        return len(self.scales) + len(self.failed)

    @property
    def succeeded_count(self) -> int:
        return len(self.scales)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def invalid_count(self) -> int:
        return sum(1 for v in self.validations.values() if not v.valid)

    @property
    def all_valid(self) -> bool:
        return not self.failed and self.invalid_count == 0
