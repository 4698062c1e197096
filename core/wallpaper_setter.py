"""Apply a cached wallpaper image to the desktop.

Updates:
  v0.1.1 - 2026-09-28 - Add command template setter for non-GNOME desktops.
  v0.1.0 - 2026-09-21 - Apply wallpapers through gsettings.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .exceptions import WallpaperApplyError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("quote_wall.wallpaper")

PATH_PLACEHOLDER = "{path}"
GNOME_BACKGROUND_SCHEMA = "org.gnome.desktop.background"


@runtime_checkable
class WallpaperSetter(Protocol):
    async def apply(self, image_path: Path) -> bool:
        """Set *image_path* as the wallpaper; return ``True`` on success."""
        ...


async def _run_command(argv: Sequence[str]) -> int:
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise WallpaperApplyError(f"Wallpaper command not found: {argv[0]}") from exc
    except OSError as exc:
        raise WallpaperApplyError(f"Unable to run wallpaper command {argv[0]}: {exc}") from exc
    _, stderr = await process.communicate()
    if process.returncode != 0:
        logger.warning(
            "Wallpaper command %s exited with %s: %s",
            shlex.join(argv),
            process.returncode,
            (stderr or b"").decode(errors="replace").strip(),
        )
    return process.returncode or 0


class GnomeWallpaperSetter:
    """Set both light and dark GNOME background URIs with ``gsettings``."""

    def __init__(self, executable: str = "gsettings") -> None:
        self._executable = executable

    async def apply(self, image_path: Path) -> bool:
        path = Path(image_path)
        if not path.is_file():
            logger.warning("Wallpaper image %s does not exist", path)
            return False
        uri = path.resolve().as_uri()
        for key in ("picture-uri", "picture-uri-dark"):
            argv = [self._executable, "set", GNOME_BACKGROUND_SCHEMA, key, uri]
            if await _run_command(argv) != 0:
                return False
        logger.info("Applied wallpaper %s", path)
        return True


class CommandWallpaperSetter:
    """Run a user supplied command with ``{path}`` replaced by the image path."""

    def __init__(self, template: str) -> None:
        if PATH_PLACEHOLDER not in template:
            raise ValueError(f"Wallpaper command must contain {PATH_PLACEHOLDER}")
        self._template = template

    def build_argv(self, image_path: Path) -> list[str]:
        return [
            part.replace(PATH_PLACEHOLDER, str(image_path))
            for part in shlex.split(self._template)
        ]

    async def apply(self, image_path: Path) -> bool:
        path = Path(image_path)
        if not path.is_file():
            logger.warning("Wallpaper image %s does not exist", path)
            return False
        argv = self.build_argv(path)
        if not argv:
            raise WallpaperApplyError("Wallpaper command is empty")
        if await _run_command(argv) != 0:
            return False
        logger.info("Applied wallpaper %s", path)
        return True


__all__ = [
    "CommandWallpaperSetter",
    "GnomeWallpaperSetter",
    "WallpaperSetter",
]
