"""Command-line interface for the kolam generator."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import get_config
from .models.design import KolamDesign
from .models.render import AnimationSettings, RenderSettings
from .services.export_service import EXPORT_FORMATS, ExportService
from .services.synthesis_service import InvalidSizeError, half_period


def timestamped_filename(base_name: str, extension: str = "svg") -> str:
    """Generate a filename with timestamp to avoid overwrites.

    Args:
        base_name: Base name for the file (e.g., 'kolam_7x7')
        extension: File extension without dot (default: 'svg')

    Returns:
        Filename like 'kolam_7x7_20240201_143052.svg'
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{base_name}_{timestamp}.{extension}"


console = Console()


def _resolve_output(output: Optional[str], base_name: str, fmt: Optional[str]) -> tuple[Path, str]:
    """Pick the output path and format from --output/--format."""
    if output:
        path = Path(output)
        fmt = (fmt or path.suffix.lstrip(".") or "svg").lower()
        if path.suffix.lstrip(".").lower() != fmt:
            path = path.with_suffix(f".{fmt}")
        return path, fmt

    fmt = (fmt or "svg").lower()
    config = get_config()
    config.ensure_directories()
    return config.output_dir / timestamped_filename(base_name, fmt), fmt


def _render_settings(
    animate: bool,
    speed: int,
    background: Optional[str],
    stroke_color: Optional[str],
    scale: float,
) -> RenderSettings:
    config = get_config()
    return RenderSettings(
        background_color=background or config.background_color,
        stroke_color=stroke_color or config.stroke_color,
        scale=scale,
        animation=AnimationSettings(enabled=animate, speed=speed),
    )


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Kolam Generator - Create symmetric kolam floor-art patterns."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@main.command()
@click.argument("size", type=int)
@click.option("--seed", type=int, default=None, help="Random seed for a reproducible pattern")
@click.option("--spacing", type=float, default=None, help="Pixels between grid dots")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
@click.option("--format", "-f", "fmt", type=click.Choice(EXPORT_FORMATS), default=None,
              help="Output format (default: from --output suffix, else svg)")
@click.option("--animate", is_flag=True, help="Animate the SVG drawing")
@click.option("--speed", type=click.IntRange(1, 10), default=5, help="Animation speed (1-10)")
@click.option("--background", type=str, default=None, help="Background color (hex)")
@click.option("--stroke-color", type=str, default=None, help="Curve color (hex)")
@click.option("--scale", type=click.FloatRange(0, 8, min_open=True), default=1.0,
              help="PNG scale factor (0-8)")
@click.option("--save-design", is_flag=True, help="Also save a YAML design next to the output")
def generate(
    size: int,
    seed: Optional[int],
    spacing: Optional[float],
    output: Optional[str],
    fmt: Optional[str],
    animate: bool,
    speed: int,
    background: Optional[str],
    stroke_color: Optional[str],
    scale: float,
    save_design: bool,
):
    """Generate a SIZE x SIZE kolam pattern."""
    from .services.generation_service import GenerationService

    config = get_config()
    cell_spacing = spacing if spacing is not None else config.cell_spacing

    try:
        result = GenerationService().generate(size, seed=seed, cell_spacing=cell_spacing)
        settings = _render_settings(animate, speed, background, stroke_color, scale)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    pattern = result.pattern
    output_path, fmt = _resolve_output(output, f"kolam_{pattern.rows}x{pattern.cols}", fmt)

    try:
        ExportService().save(pattern, output_path, settings, fmt=fmt)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[bold]Pattern:[/bold] {pattern.name}")
    console.print(f"[bold]Dots / curves:[/bold] {len(pattern.dots)} / {len(pattern.curves)}")
    console.print(f"[bold]Dimensions:[/bold] {pattern.dimensions.width:g} x {pattern.dimensions.height:g} px")
    if result.report.fallbacks:
        console.print(f"[dim]Empty-tile fallbacks: {result.report.fallbacks}[/dim]")
    console.print(f"[green]Saved:[/green] {output_path}")

    if save_design:
        design = KolamDesign.from_pattern(pattern, seed=seed, render=settings)
        design_path = output_path.with_suffix(".yaml")
        design.to_yaml(design_path)
        console.print(f"[green]Saved design:[/green] {design_path}")


@main.command()
@click.argument("design_path", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output file path")
@click.option("--format", "-f", "fmt", type=click.Choice(EXPORT_FORMATS), default=None,
              help="Output format (default: from --output suffix, else svg)")
@click.option("--animate/--no-animate", default=None, help="Override the design's animation setting")
def render(design_path: str, output: Optional[str], fmt: Optional[str], animate: Optional[bool]):
    """Re-render a saved YAML design."""
    try:
        design = KolamDesign.from_yaml(Path(design_path))
    except (ValueError, TypeError) as e:
        console.print(f"[red]Error:[/red] Invalid design file: {e}")
        raise SystemExit(1)

    settings = design.render
    if animate is not None:
        settings = settings.model_copy(
            update={"animation": settings.animation.model_copy(update={"enabled": animate})}
        )

    pattern = design.to_pattern()
    output_path, fmt = _resolve_output(output, design.name.replace(" ", "_"), fmt)
    try:
        ExportService().save(pattern, output_path, settings, fmt=fmt)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[bold]Design:[/bold] {design.name}")
    console.print(f"[green]Saved:[/green] {output_path}")


@main.command()
def tiles():
    """Show the tile catalog with edges and mirror images."""
    from .services.compatibility_service import get_rules

    rules = get_rules()

    table = Table(title="Kolam Tiles")
    table.add_column("Id", style="cyan", justify="right")
    table.add_column("Edges (TRBL)", style="green")
    table.add_column("H-mirror", justify="right")
    table.add_column("V-mirror", justify="right")
    table.add_column("Self-inverse")
    table.add_column("Compatible", justify="right")

    for tile in rules.catalog:
        self_axes = []
        if tile.id in rules.horizontal_self_inverse:
            self_axes.append("H")
        if tile.id in rules.vertical_self_inverse:
            self_axes.append("V")
        table.add_row(
            str(tile.id),
            tile.edge_signature,
            str(rules.mirror_horizontal(tile.id)),
            str(rules.mirror_vertical(tile.id)),
            ",".join(self_axes) or "-",
            str(len(rules.compatible_with(tile.id))),
        )

    console.print(table)


@main.command()
@click.argument("size", type=int)
@click.option("--spacing", type=float, default=None, help="Pixels between grid dots")
def info(size: int, spacing: Optional[float]):
    """Show the grid layout a SIZE request produces."""
    from .services.synthesis_service import validate_size

    try:
        size = validate_size(size)
    except InvalidSizeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    cell_spacing = spacing if spacing is not None else get_config().cell_spacing
    h = half_period(size)
    extent = (size + 1) * cell_spacing

    table = Table(title=f"Kolam {size}x{size}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Parity", "odd (shared center row/column)" if size % 2 else "even (four quadrants)")
    table.add_row("Half period", str(h))
    table.add_row("Working quadrant", f"{h + 2} x {h + 2}")
    table.add_row("Matrix", f"{size} x {size}")
    table.add_row("Cell spacing", f"{cell_spacing:g} px")
    table.add_row("Dimensions", f"{extent:g} x {extent:g} px")
    console.print(table)


if __name__ == "__main__":
    main()
