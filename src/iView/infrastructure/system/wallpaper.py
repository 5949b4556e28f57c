"""Set the desktop wallpaper through whichever backend the session accepts."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
from pathlib import Path
from typing import Callable, Optional, Sequence

from ...errors import WallpaperError

LOGGER = logging.getLogger(__name__)

COSMIC_CONFIG = Path(".config/cosmic/com.system76.CosmicBackground/v1/all")

_COSMIC_TEMPLATE = """(
    output: "all",
    source: Path("{path}"),
    filter_by_theme: true,
    rotation_frequency: 300,
    filter_method: Lanczos,
    scaling_mode: Zoom,
    sampling_method: Alphanumeric,
)"""

Runner = Callable[[Sequence[str]], subprocess.CompletedProcess]


def _run_command(command: Sequence[str]) -> subprocess.CompletedProcess:
    """Execute *command* and return the completed process."""

    return subprocess.run(
        list(command),
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )


def _try_cosmic(path: str, home: Path) -> bool:
    config = home / COSMIC_CONFIG
    if not config.exists():
        return False
    try:
        config.write_text(_COSMIC_TEMPLATE.format(path=path), encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Failed to write COSMIC config: %s", exc)
        return False
    LOGGER.info("Wallpaper set via COSMIC config")
    return True


def _try_gsettings(path: str, runner: Runner) -> bool:
    if shutil.which("gsettings") is None:
        LOGGER.debug("gsettings not available")
        return False
    uri = Path(path).as_uri()
    try:
        process = runner(["gsettings", "set", "org.gnome.desktop.background", "picture-uri", uri])
    except OSError as exc:
        LOGGER.warning("gsettings command failed: %s", exc)
        return False
    if process.returncode != 0:
        LOGGER.warning("gsettings failed: %s", (process.stderr or b"").decode("utf-8", "replace").strip())
        return False
    # Dark-mode key is absent on older GNOME; its failure does not matter.
    try:
        runner(["gsettings", "set", "org.gnome.desktop.background", "picture-uri-dark", uri])
    except OSError as exc:
        LOGGER.debug("Could not set dark-mode wallpaper: %s", exc)
    LOGGER.info("Wallpaper set via gsettings")
    return True


def _try_feh(path: str, runner: Runner) -> bool:
    if shutil.which("feh") is None:
        LOGGER.debug("feh not available")
        return False
    try:
        process = runner(["feh", "--bg-scale", path])
    except OSError as exc:
        LOGGER.warning("feh failed: %s", exc)
        return False
    if process.returncode != 0:
        LOGGER.warning("feh failed with exit code %d", process.returncode)
        return False
    LOGGER.info("Wallpaper set via feh")
    return True


def set_as_wallpaper(
    path: Path,
    *,
    home: Optional[Path] = None,
    runner: Runner = _run_command,
) -> str:
    """Set *path* as the desktop wallpaper and return the backend that accepted it.

    Backends are tried in order: COSMIC config file, GNOME ``gsettings``,
    then ``feh``.

    Raises
    ------
    WallpaperError
        If the path cannot be resolved or every backend fails.
    """
    try:
        resolved = Path(path).resolve(strict=True)
    except OSError as exc:
        LOGGER.error("Failed to resolve wallpaper path %s: %s", path, exc)
        raise WallpaperError(f"Cannot resolve {path}: {exc}") from exc

    path_str = os.fspath(resolved)
    LOGGER.info("Attempting to set wallpaper: %s", path_str)

    if _try_cosmic(path_str, home or Path.home()):
        return "cosmic"
    if _try_gsettings(path_str, runner):
        return "gsettings"
    if _try_feh(path_str, runner):
        return "feh"

    LOGGER.error("All methods failed to set wallpaper")
    raise WallpaperError(f"No wallpaper backend accepted {path_str}")


def spawn_wallpaper_task(path: Path, **kwargs) -> threading.Thread:
    """Run :func:`set_as_wallpaper` on a daemon thread and return it.

    The outcome is only logged; nothing is reported back to the caller.
    """

    def _worker() -> None:
        try:
            set_as_wallpaper(path, **kwargs)
        except WallpaperError as exc:
            LOGGER.warning("Wallpaper task failed: %s", exc)

    thread = threading.Thread(target=_worker, name="iView-wallpaper", daemon=True)
    thread.start()
    return thread
