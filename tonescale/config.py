"""Pydantic configuration model with YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from tonescale.models import STEPS, ColorConfig

_DEFAULT_CONFIG_NAME = "tonescale.yaml"

OutputFormat = Literal["json", "dtcg", "css", "html", "markdown"]


class ColorEntry(BaseModel):
    """One named seed color."""

    name: str
    base_color: str
    target_contrasts: dict[int, float] = Field(default_factory=dict)
    overrides: dict[int, str] = Field(default_factory=dict)

    @field_validator("target_contrasts", "overrides")
    @classmethod
    def _known_steps(cls, value: dict[int, Any]) -> dict[int, Any]:
        unknown = sorted(set(value) - set(STEPS))
        if unknown:
            raise ValueError(f"unknown scale step(s): {', '.join(map(str, unknown))}")
        return value

    @field_validator("target_contrasts")
    @classmethod
    def _ratios_at_least_one(cls, value: dict[int, float]) -> dict[int, float]:
        for step, ratio in value.items():
            if ratio < 1:
                raise ValueError(f"target contrast for step {step} must be >= 1")
        return value

    def to_color_config(self) -> ColorConfig:
        return ColorConfig(
            name=self.name,
            base_color=self.base_color,
            target_contrasts=dict(self.target_contrasts) or None,
            overrides=dict(self.overrides) or None,
        )


def _default_colors() -> list[ColorEntry]:
    return [
        ColorEntry(name="primary", base_color="oklch(0.55 0.22 250)"),  # blue
        ColorEntry(name="secondary", base_color="oklch(0.65 0.18 320)"),  # purple
        ColorEntry(name="accent", base_color="oklch(0.70 0.20 140)"),  # green
        ColorEntry(name="neutral", base_color="oklch(0.55 0.02 250)"),  # blue-tinted grey
        ColorEntry(name="success", base_color="oklch(0.65 0.18 145)"),
        ColorEntry(name="warning", base_color="oklch(0.75 0.15 85)"),  # yellow-orange
        ColorEntry(name="error", base_color="oklch(0.60 0.22 25)"),  # red
        ColorEntry(name="info", base_color="oklch(0.60 0.18 240)"),
    ]


class GeneratorSettings(BaseModel):
    """Scale search and validation settings."""

    wcag_level: Literal["AA", "AAA"] = "AAA"
    tolerance: float = Field(default=0.1, gt=0)
    max_iterations: int = Field(default=50, ge=1)
    chroma_taper: bool = False


class OutputConfig(BaseModel):
    """Output file settings."""

    directory: Path = Path("output")
    formats: list[OutputFormat] = Field(default_factory=lambda: ["dtcg", "html"])
    hex: bool = False


class TonescaleConfig(BaseModel):
    """Top-level configuration for tonescale."""

    colors: list[ColorEntry] = Field(default_factory=_default_colors)
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("colors")
    @classmethod
    def _unique_names(cls, value: list[ColorEntry]) -> list[ColorEntry]:
        seen: set[str] = set()
        for entry in value:
            if entry.name in seen:
                raise ValueError(f"duplicate color name: {entry.name!r}")
            seen.add(entry.name)
        return value

    def color_configs(self) -> list[ColorConfig]:
        return [entry.to_color_config() for entry in self.colors]

    @classmethod
    def load(cls, path: Path | None = None) -> TonescaleConfig:
        """Load config from a YAML file.

        Search order when *path* is None:
          1. ./tonescale.yaml
          2. ~/.config/tonescale/tonescale.yaml

        Returns default config if no file is found.
        """
        if path is not None:
            return cls._from_yaml(path)

        candidates = [
            Path.cwd() / _DEFAULT_CONFIG_NAME,
            Path.home() / ".config" / "tonescale" / _DEFAULT_CONFIG_NAME,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return cls._from_yaml(candidate)

        return cls()

    @classmethod
    def _from_yaml(cls, path: Path) -> TonescaleConfig:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(raw)
