"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional, Tuple

import typer
from rich import print
from rich.logging import RichHandler
from rich.table import Table

from .application.document_manager import DocumentManager
from .application.use_cases import (
    CropDocumentRequest,
    CropDocumentUseCase,
    SaveDocumentRequest,
    SaveDocumentUseCase,
    TransformAction,
    TransformDocumentRequest,
    TransformDocumentUseCase,
)
from .config import DEFAULT_EXPORT_QUALITY
from .domain.crop import CropRegion
from .errors import (
    CacheError,
    DocumentLoadError,
    ExportError,
    IViewError,
    SettingsError,
    WallpaperError,
)
from .infrastructure.cache.thumbnail_cache import ThumbnailCache

app = typer.Typer(help="Inspect, transform and export images and documents")
thumbs_app = typer.Typer(help="Manage the page thumbnail cache")
app.add_typer(thumbs_app, name="thumbs")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (DocumentLoadError, ExportError, CacheError, WallpaperError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except IViewError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _fail(message: Optional[str]) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Configure logging for every sub-command."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.command()
@_handle_errors
def info(path: Path = typer.Argument(..., exists=True)) -> None:
    """Show format, resolution and size of a document."""

    manager = DocumentManager()
    manager.open_document(path)
    meta = manager.current_metadata()
    basic = meta.basic

    table = Table(show_header=False, box=None)
    table.add_row("File", basic.file_name)
    table.add_row("Format", basic.format)
    table.add_row("Resolution", basic.resolution_display())
    table.add_row("Size", basic.file_size_display())
    table.add_row("Color", basic.color_type)
    if meta.page_count is not None:
        table.add_row("Pages", str(meta.page_count))
    print(table)


@app.command()
@_handle_errors
def export(
    source: Path = typer.Argument(..., exists=True, dir_okay=False),
    destination: Path = typer.Argument(...),
    rotate: float = typer.Option(0.0, "--rotate", help="Clockwise degrees; non-right angles rotate finely"),
    flip_h: bool = typer.Option(False, "--flip-h", help="Mirror left to right"),
    flip_v: bool = typer.Option(False, "--flip-v", help="Mirror top to bottom"),
    crop: Optional[Tuple[int, int, int, int]] = typer.Option(
        None, "--crop", help="X Y WIDTH HEIGHT in pixels of the transformed image"
    ),
    quality: int = typer.Option(DEFAULT_EXPORT_QUALITY, "--quality", min=1, max=100),
) -> None:
    """Apply flips, a rotation and a crop (in that order) and save the result."""

    manager = DocumentManager()
    manager.open_document(source)
    transform = TransformDocumentUseCase(manager)

    steps: list[TransformDocumentRequest] = []
    if flip_h:
        steps.append(TransformDocumentRequest(action=TransformAction.FLIP_HORIZONTAL))
    if flip_v:
        steps.append(TransformDocumentRequest(action=TransformAction.FLIP_VERTICAL))
    if rotate % 90 == 0:
        quarter_turns = int(rotate // 90) % 4
        steps.extend(TransformDocumentRequest(action=TransformAction.ROTATE_CW) for _ in range(quarter_turns))
    else:
        steps.append(TransformDocumentRequest(action=TransformAction.ROTATE_FINE, degrees=rotate))

    for request in steps:
        response = transform.execute(request)
        if not response.success:
            _fail(response.error)

    if crop is not None:
        cropped = CropDocumentUseCase(manager).execute(CropDocumentRequest(region=CropRegion(*crop)))
        if not cropped.success:
            _fail(cropped.error)

    saved = SaveDocumentUseCase(manager).execute(
        SaveDocumentRequest(destination=destination, quality=quality)
    )
    if not saved.success:
        _fail(saved.error)
    print(f"[green]Exported {saved.path}")


@thumbs_app.command("clear")
@_handle_errors
def thumbs_clear(
    cache_dir: Optional[Path] = typer.Option(None, "--cache-dir", help="Override the configured cache"),
) -> None:
    """Delete every cached page thumbnail."""

    if cache_dir is None:
        from .settings.manager import SettingsManager, default_cache_dir

        settings = SettingsManager()
        settings.load()
        configured = settings.get("cache_dir")
        cache_dir = Path(configured).expanduser() if configured else default_cache_dir()
    ThumbnailCache(cache_dir).clear_all()
    print(f"[green]Cleared thumbnails in {cache_dir}")


@app.command()
@_handle_errors
def wallpaper(path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Set an image as the desktop wallpaper."""

    from .infrastructure.system.wallpaper import set_as_wallpaper

    backend = set_as_wallpaper(path.resolve())
    print(f"[green]Wallpaper set via {backend}")


if __name__ == "__main__":  # pragma: no cover
    app()
