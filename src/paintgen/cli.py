"""Click CLI for paintgen: describe paintings and draft exhibition material."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from paintgen.config.hierarchy import load_config_hierarchy
from paintgen.config.schema import PaintgenSettings
from paintgen.errors.exceptions import CancellationError, ConfigError, PaintgenError
from paintgen.types import ImageFile

console = Console()
error_console = Console(stderr=True)

T = TypeVar("T")


def _log_level(verbosity: int, base_level: int = logging.WARNING) -> int:
    """Configured level, lowered by each -v."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return min(base_level, logging.INFO)
    return base_level


def _setup_logging(verbosity: int, base_level: int = logging.WARNING) -> None:
    """Configure logging based on the configured level and verbosity."""
    logging.basicConfig(
        level=_log_level(verbosity, base_level),
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _load_settings(model: str | None) -> PaintgenSettings:
    config = load_config_hierarchy(model=model)
    try:
        return PaintgenSettings.from_config(config)
    except ConfigError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def _load_files(paths: tuple[str, ...]) -> list[ImageFile]:
    from paintgen.utils.image import load_image

    files: list[ImageFile] = []
    for path in paths:
        try:
            files.append(load_image(path))
        except (FileNotFoundError, ValueError) as e:
            error_console.print(f"[yellow]Skipping:[/yellow] {e}")
    if not files:
        error_console.print("[red]Error:[/red] no usable images given")
        sys.exit(1)
    return files


def _run_studio(
    settings: PaintgenSettings,
    action: Callable[..., Awaitable[T]],
) -> T:
    """Run ``action(studio)`` and always tear the studio down."""
    from paintgen.core import PaintingStudio

    async def _run() -> T:
        studio = PaintingStudio(settings=settings)
        try:
            return await action(studio)
        finally:
            await studio.close()

    try:
        return asyncio.run(_run())
    except CancellationError:
        error_console.print("[yellow]Cancelled.[/yellow]")
        sys.exit(130)
    except PaintgenError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="paintgen")
def cli() -> None:
    """paintgen: AI descriptions, exhibition titles and posters for paintings."""


@cli.command()
@click.argument("images", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--model", type=str, default=None, help="Override the generation model.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def describe(images: tuple[str, ...], model: str | None, verbose: int) -> None:
    """Describe each painting."""
    settings = _load_settings(model)
    _setup_logging(verbose, settings.log_level_number)
    files = _load_files(images)

    results = _run_studio(settings, lambda studio: studio.describe_paintings(files))
    for item in results:
        console.rule(item.image_name)
        if item.error:
            console.print(f"[red]Failed:[/red] {item.error}")
        else:
            console.print(item.description)


@cli.command()
@click.argument("images", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--model", type=str, default=None, help="Override the generation model.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def exhibition(images: tuple[str, ...], model: str | None, verbose: int) -> None:
    """Suggest exhibition titles for a set of paintings."""
    settings = _load_settings(model)
    _setup_logging(verbose, settings.log_level_number)
    files = _load_files(images)

    async def _action(studio):
        descriptions = await studio.describe_paintings(files)
        return await studio.suggest_exhibition_titles(descriptions)

    options = _run_studio(settings, _action)
    table = Table(title="Exhibition Titles", show_header=True)
    table.add_column("#", style="cyan")
    table.add_column("Title")
    for option in options:
        table.add_row(str(option.id), option.title)
    console.print(table)


@cli.command()
@click.argument("images", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--title", "-t", required=True, help="Exhibition title.")
@click.option("--model", type=str, default=None, help="Override the generation model.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def poster(images: tuple[str, ...], title: str, model: str | None, verbose: int) -> None:
    """Draft a poster layout and short description for an exhibition."""
    settings = _load_settings(model)
    _setup_logging(verbose, settings.log_level_number)
    files = _load_files(images) if images else []

    async def _action(studio):
        descriptions = await studio.describe_paintings(files) if files else []
        return await studio.create_poster(title, descriptions)

    result = _run_studio(settings, _action)
    console.rule("Poster layout")
    console.print(result.poster)
    console.rule("Exhibition description")
    console.print(result.description)


@cli.command()
@click.argument("images", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output-dir", type=click.Path(file_okay=False), required=True,
    help="Directory for optimized images.",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def optimize(images: tuple[str, ...], output_dir: str, verbose: int) -> None:
    """Resize and compress images the way they are sent for generation."""
    from paintgen.images.normalizer import ImageNormalizer

    settings = _load_settings(None)
    _setup_logging(verbose, settings.log_level_number)
    files = _load_files(images)
    try:
        normalizer = ImageNormalizer(settings.image_constraints())
    except ConfigError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    results = asyncio.run(normalizer.normalize_batch(files))

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    table = Table(title="Optimized Images", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Before")
    table.add_column("After")
    table.add_column("Size")
    table.add_column("Quality")

    for source, result in zip(files, results, strict=True):
        suffix = ".jpg" if result.mime_type == "image/jpeg" else Path(source.name).suffix
        out_path = out_dir / f"{Path(source.name).stem}{suffix}"
        out_path.write_bytes(result.data)
        quality = getattr(result, "quality", None)
        table.add_row(
            source.name,
            f"{source.size_bytes / 1024:.1f} KB",
            f"{result.size_bytes / 1024:.1f} KB",
            f"{result.width}x{result.height}" if result.width else "-",
            str(quality) if quality is not None else "-",
        )

    console.print(table)


@cli.command("config")
def show_config() -> None:
    """Show the resolved configuration."""
    settings = _load_settings(None)

    table = Table(title="Configuration", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in settings.masked().items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()
