"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from tonescale.models import Color, ColorConfig

MID_BLUE = "oklch(0.55 0.22 250)"


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Alias for pytest's tmp_path fixture."""
    return tmp_path


@pytest.fixture
def mid_blue() -> Color:
    return Color(lightness=0.55, chroma=0.22, hue=250.0)


@pytest.fixture
def light_background() -> Color:
    return Color(lightness=0.99, chroma=0.01, hue=250.0)


@pytest.fixture
def blue_config() -> ColorConfig:
    return ColorConfig(name="primary", base_color=MID_BLUE)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A small YAML config with one malformed color."""
    path = tmp_path / "tonescale.yaml"
    path.write_text(
        """\
colors:
  - name: primary
    base_color: oklch(0.55 0.22 250)
  - name: neutral
    base_color: oklch(0.55 0.02 250)
  - name: broken
    base_color: not-a-color
generator:
  wcag_level: AA
output:
  formats: [json]
""",
        encoding="utf-8",
    )
    return path
