"""Output formatting — CSS, JSON, DTCG tokens, Markdown and an HTML preview."""

from __future__ import annotations

import html
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from tonescale.models import BatchResult, ColorScale, ParseError, WcagLevel
from tonescale.utils import oklch

logger = logging.getLogger(__name__)

FORMATS: dict[str, str] = {
    "json": "generated-colors.json",
    "dtcg": "generated-colors.tokens.json",
    "css": "generated-colors.css",
    "html": "preview.html",
    "markdown": "validation-report.md",
}


def to_hex_scales(scales: Mapping[str, ColorScale]) -> dict[str, ColorScale]:
    """Convert every OKLCH value to ``#RRGGBB``; other values pass through."""
    out: dict[str, ColorScale] = {}
    for name, scale in scales.items():
        converted: ColorScale = {}
        for step, value in scale.items():
            try:
                converted[step] = oklch.to_display_hex(value)
            except ParseError:
                converted[step] = value
        out[name] = converted
    return out


def _json_scales(scales: Mapping[str, ColorScale]) -> dict[str, dict[str, str]]:
    return {name: {str(step): value for step, value in scale.items()} for name, scale in scales.items()}


def format_css(scales: Mapping[str, ColorScale], *, hex_output: bool = False) -> str:
    """Render scales as sorted ``--color-{name}-{step}`` custom properties."""
    if hex_output:
        scales = to_hex_scales(scales)
    lines = sorted(
        f"  --color-{name}-{step}: {value};"
        for name, scale in scales.items()
        for step, value in scale.items()
    )
    return ":root {\n" + "\n".join(lines) + "\n}\n"


def format_json(scales: Mapping[str, ColorScale]) -> str:
    return json.dumps(_json_scales(scales), indent=2) + "\n"


def format_dtcg(scales: Mapping[str, ColorScale], level: WcagLevel = WcagLevel.AAA) -> str:
    """Wrap scales in a Design Tokens Community Group style document."""
    document = {
        "$description": (
            f"Generated color scales - WCAG 2.2 {WcagLevel(level).value} checked. Safe to edit manually."
        ),
        "$type": "color",
        "color": {"scales": _json_scales(scales)},
    }
    return json.dumps(document, indent=2) + "\n"


def format_html_preview(scales: Mapping[str, ColorScale], title: str = "Color Scale Preview") -> str:
    """Return a standalone HTML page with one swatch column per scale."""
    sections: list[str] = []
    for name, scale in scales.items():
        rows = []
        for step, value in scale.items():
            color = html.escape(value)
            rows.append(
                '    <div style="display: flex; align-items: center; margin: 4px 0;">\n'
                f'      <div style="width: 60px; height: 40px; background: {color}; '
                'border: 1px solid #ddd; border-radius: 4px;"></div>\n'
                '      <div style="margin-left: 12px; font-family: monospace; font-size: 12px;">\n'
                f'        <div style="font-weight: 600;">{step}</div>\n'
                f'        <div style="color: #666;">{color}</div>\n'
                "      </div>\n"
                "    </div>"
            )
        sections.append(
            '  <section style="margin-bottom: 32px;">\n'
            '    <h2 style="font-size: 18px; margin-bottom: 16px; text-transform: capitalize;">'
            f"{html.escape(name)}</h2>\n" + "\n".join(rows) + "\n  </section>"
        )

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>{html.escape(title)}</title>\n"
        "</head>\n"
        '<body style="font-family: system-ui; padding: 40px; background: #fafafa;">\n'
        f'  <h1 style="font-size: 24px; margin-bottom: 40px;">{html.escape(title)}</h1>\n'
        + "\n".join(sections)
        + "\n</body>\n</html>\n"
    )


def format_markdown_report(result: BatchResult) -> str:
    """Summarise a batch run: one heading per scale with its issues."""
    lines: list[str] = [
        f"# Color Scale Validation (WCAG {result.level.value})",
        "",
        f"- **Colors:** {result.total_colors}",
        f"- **Generated:** {result.succeeded_count}",
        f"- **Failed:** {result.failed_count}",
        f"- **Failing validation:** {result.invalid_count}",
        "",
    ]

    for name, validation in result.validations.items():
        status = "PASS" if validation.valid else "FAIL"
        lines.append(f"## {name} [{status}]")
        lines.append("")
        for issue in validation.issues:
            lines.append(f"- {issue}")
        if validation.issues:
            lines.append("")

    if result.failed:
        lines.append("## Errors")
        lines.append("")
        for failure in result.failed:
            lines.append(f"- **{failure.name}** (`{failure.base_color}`): {failure.error}")
        lines.append("")

    return "\n".join(lines)


def write_outputs(
    result: BatchResult,
    output_dir: Path,
    formats: Iterable[str],
    *,
    hex_output: bool = False,
) -> list[Path]:
    """Write the requested formats into *output_dir* and return the paths."""
    output_dir.mkdir(parents=True, exist_ok=True)
    scales = to_hex_scales(result.scales) if hex_output else result.scales

    written: list[Path] = []
    for fmt in formats:
        if fmt not in FORMATS:
            raise ValueError(f"Unknown output format: {fmt!r}. Available: {', '.join(FORMATS)}")
        if fmt == "json":
            text = format_json(scales)
        elif fmt == "dtcg":
            text = format_dtcg(scales, result.level)
        elif fmt == "css":
            text = format_css(scales)
        elif fmt == "html":
            text = format_html_preview(scales)
        else:
            text = format_markdown_report(result)

        path = output_dir / FORMATS[fmt]
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", path)
        written.append(path)
    return written
