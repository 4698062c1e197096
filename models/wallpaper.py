"""Wallpaper rendering style definitions.

Updates: v0.1.0 - 2026-08-30 - Add WallpaperStyle enum for dark/light backgrounds.
"""

from __future__ import annotations

from enum import StrEnum


class WallpaperStyle(StrEnum):
    """Background mode used when rendering a quote wallpaper."""

    DARK = "dark"
    LIGHT = "light"

    @property
    def is_dark(self) -> bool:
        return self is WallpaperStyle.DARK

    @classmethod
    def from_dark_flag(cls, dark: bool) -> WallpaperStyle:
        """Return the style matching a dark-background boolean preference."""
        return cls.DARK if dark else cls.LIGHT


__all__ = ["WallpaperStyle"]
