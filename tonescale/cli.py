"""CLI entry point — all commands defined here."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tonescale import __version__
from tonescale.models import Color, ParseError, WcagLevel

app = typer.Typer(
    name="tonescale",
    help="Accessible OKLCH color scale generator.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"tonescale {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """tonescale — perceptual color scales with WCAG validation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_color(value: str) -> Color:
    """Accept an OKLCH string or a hex color."""
    from tonescale.utils import oklch

    if value.strip().startswith("#"):
        return oklch.from_hex(value)
    return oklch.parse(value)


def _parse_or_exit(value: str) -> Color:
    try:
        return _parse_color(value)
    except ParseError as exc:
        console.print(f"[red]Invalid color:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)


@app.command()
def generate(
    config_path: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--config", "-c", help="YAML config. Defaults to ./tonescale.yaml or built-in colors.",
    ),
    output_dir: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--output-dir", "-o", help="Output directory. Overrides the config file.",
    ),
    formats: Optional[List[str]] = typer.Option(  # noqa: UP006, UP007
        None, "--format", "-f", help="Output format (json, dtcg, css, html, markdown). Repeatable.",
    ),
    level: Optional[WcagLevel] = typer.Option(  # noqa: UP007
        None, "--level", "-l", help="WCAG level for validation. Overrides the config file.",
    ),
    hex_output: bool = typer.Option(False, "--hex", help="Write #RRGGBB values instead of OKLCH."),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any scale fails or is invalid."),
) -> None:
    """Generate scales for every configured color and write them out."""
    import yaml
    from pydantic import ValidationError

    from tonescale.config import TonescaleConfig
    from tonescale.pipeline import run_batch
    from tonescale.reporter import FORMATS, write_outputs

    if config_path is not None and not config_path.is_file():
        console.print(f"[red]File not found:[/red] {config_path}")
        raise typer.Exit(code=1)

    try:
        config = TonescaleConfig.load(config_path)
    except (ValidationError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid config:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    chosen_formats = formats or list(config.output.formats)
    unknown = [f for f in chosen_formats if f not in FORMATS]
    if unknown:
        console.print(f"[red]Unknown format(s):[/red] {', '.join(unknown)}")
        raise typer.Exit(code=1)

    wcag_level = level or WcagLevel(config.generator.wcag_level)
    target_dir = output_dir or config.output.directory

    console.print(f"[dim]Generating {len(config.colors)} color scale(s)...[/dim]")
    result = run_batch(
        config.color_configs(),
        wcag_level,
        tolerance=config.generator.tolerance,
        max_iterations=config.generator.max_iterations,
        chroma_taper=config.generator.chroma_taper,
    )

    table = Table(title=f"Validation (WCAG {wcag_level.value})")
    table.add_column("Color", style="bold")
    table.add_column("Base")
    table.add_column("Status")

    for name, scale in result.scales.items():
        validation = result.validations[name]
        if validation.valid:
            status = "[green]OK[/green]"
        else:
            status = f"[yellow]{len(validation.issues)} issue(s)[/yellow]"
        table.add_row(name, scale[500], status)
    for failure in result.failed:
        table.add_row(failure.name, failure.base_color, "[red]Failed[/red]")

    console.print(table)

    for name, validation in result.validations.items():
        for issue in validation.issues:
            console.print(f"  [yellow]![/yellow] {name}: {issue}")
    for failure in result.failed:
        console.print(f"  [red]X[/red] {failure.name}: {escape(failure.error)}")

    written = write_outputs(result, target_dir, chosen_formats, hex_output=hex_output or config.output.hex)
    for path in written:
        console.print(f"[green]OK[/green] Wrote {path}")

    if not result.all_valid:
        console.print("[yellow]Some colors failed WCAG validation. Review and adjust as needed.[/yellow]")
        if strict:
            raise typer.Exit(code=1)


@app.command()
def scale(
    color: str = typer.Argument(..., help="Seed color, e.g. 'oklch(0.55 0.22 250)' or '#3366FF'."),
    name: str = typer.Option("color", "--name", "-n", help="Name used in the table title."),
    level: WcagLevel = typer.Option(WcagLevel.AAA, "--level", "-l", help="WCAG level for validation."),
    hex_output: bool = typer.Option(False, "--hex", help="Show #RRGGBB values."),
    taper: bool = typer.Option(False, "--taper", help="Taper chroma at the lightness extremes."),
) -> None:
    """Generate and print a single scale with the contrast of each step."""
    from tonescale.models import ColorConfig, InvalidSeedColorError
    from tonescale.scale import generate_color_scale
    from tonescale.utils import oklch
    from tonescale.utils.contrast import contrast_ratio
    from tonescale.validator import REFERENCE_BACKGROUND, validate_color_scale

    seed = _parse_or_exit(color)
    try:
        result = generate_color_scale(ColorConfig(name=name, base_color=oklch.format(seed)), chroma_taper=taper)
    except InvalidSeedColorError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    table = Table(title=f"Scale: {name}")
    table.add_column("Step", style="bold")
    table.add_column("Color")
    table.add_column("Contrast")

    for step, value in result.items():
        ratio = contrast_ratio(oklch.parse(value), REFERENCE_BACKGROUND)
        shown = oklch.to_display_hex(value) if hex_output else value
        table.add_row(str(step), shown, f"{ratio:.2f}:1")
    console.print(table)

    validation = validate_color_scale(result, level)
    if validation.valid:
        console.print(f"[green]OK[/green] Text steps meet WCAG {level.value}")
    else:
        for issue in validation.issues:
            console.print(f"  [yellow]![/yellow] {issue}")


@app.command()
def check(
    foreground: str = typer.Argument(..., help="Foreground (text) color, OKLCH or hex."),
    background: str = typer.Argument(..., help="Background color, OKLCH or hex."),
) -> None:
    """Show the WCAG contrast ratio between two colors."""
    from tonescale.utils.contrast import check_contrast

    result = check_contrast(_parse_or_exit(foreground), _parse_or_exit(background))

    def mark(passed: bool) -> str:
        return "[green]Pass[/green]" if passed else "[red]Fail[/red]"

    table = Table(title="Contrast")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Foreground", result.foreground)
    table.add_row("Background", result.background)
    table.add_row("Ratio", f"{result.ratio:.2f}:1")
    table.add_row("AA (4.5:1)", mark(result.passes.aa))
    table.add_row("AAA (7:1)", mark(result.passes.aaa))
    console.print(table)


@app.command(name="text-color")
def text_color(
    background: str = typer.Argument(..., help="Background color, OKLCH or hex."),
    level: WcagLevel = typer.Option(WcagLevel.AAA, "--level", "-l", help="WCAG level for validation."),
) -> None:
    """Suggest an accessible text color for a background."""
    from tonescale.utils import oklch
    from tonescale.utils.contrast import accessible_text_color, contrast_ratio

    bg = _parse_or_exit(background)
    text = accessible_text_color(bg, level)
    ratio = contrast_ratio(text, bg)

    console.print(f"{oklch.format(text)}  ({oklch.to_display_hex(text)})  {ratio:.2f}:1")
    if ratio < level.threshold:
        console.print(f"[yellow]![/yellow] Closest match does not reach WCAG {level.value}")
