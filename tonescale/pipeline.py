"""Batch pipeline — generates and validates scales for many named colors."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tonescale.models import BatchResult, ColorConfig, InvalidSeedColorError, ScaleFailure, WcagLevel
from tonescale.scale import generate_color_scale
from tonescale.validator import validate_color_scale

logger = logging.getLogger(__name__)


def run_batch(
    configs: Iterable[ColorConfig],
    level: WcagLevel | str = WcagLevel.AAA,
    *,
    tolerance: float = 0.1,
    max_iterations: int = 50,
    chroma_taper: bool = False,
) -> BatchResult:
    """Generate a scale for every config and validate each one.

    Configs are independent: a failure is recorded in ``failed`` and the
    remaining configs still run. Scales keep the order of *configs*. A
    repeated name keeps the first config and records the repeat as failed.
    """
    result = BatchResult(level=WcagLevel(level))

    for config in configs:
        if config.name in result.scales or any(f.name == config.name for f in result.failed):
            logger.warning("Duplicate color name %r; skipping", config.name)
            result.failed.append(
                ScaleFailure(
                    name=config.name,
                    base_color=config.base_color,
                    error=f"Duplicate color name {config.name!r}",
                )
            )
            continue
        try:
            scale = generate_color_scale(
                config,
                tolerance=tolerance,
                max_iterations=max_iterations,
                chroma_taper=chroma_taper,
            )
        except InvalidSeedColorError as exc:
            logger.error("Scale %s failed: %s", config.name, exc, exc_info=True)
            result.failed.append(
                ScaleFailure(name=config.name, base_color=exc.base_color, error=str(exc))
            )
            continue

        result.scales[config.name] = scale
        result.validations[config.name] = validate_color_scale(scale, result.level)

    logger.info(
        "Generated %d of %d scale(s), %d failing validation",
        result.succeeded_count, result.total_colors, result.invalid_count,
    )
    return result
