"""Data models for Quote Wall.

Updates: v0.2.0 - 2026-09-14 - Export RotationState and WallpaperStyle.
Updates: v0.1.0 - 2026-08-30 - Export Quote and Category dataclasses.
"""

from .category_model import Category
from .quote_model import Quote
from .rotation_state import RotationState
from .wallpaper import WallpaperStyle

__all__ = [
    "Category",
    "Quote",
    "RotationState",
    "WallpaperStyle",
]
