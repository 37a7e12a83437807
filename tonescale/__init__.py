"""Perceptual OKLCH color-scale generator with WCAG contrast validation."""

__version__ = "0.1.0"
