"""Pillow-based wallpaper rendering.

Updates:
  v0.1.1 - 2026-09-21 - Wrap lines by measured pixel width instead of character count.
  v0.1.0 - 2026-08-30 - Render quotes to PNG bytes with dark and light palettes.
"""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

from .exceptions import RenderError

if TYPE_CHECKING:
    from models.quote_model import Quote
    from models.wallpaper import WallpaperStyle

logger = logging.getLogger("quote_wall.rendering")

_FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont


@dataclass(frozen=True, slots=True)
class Palette:
    background: str
    text: str
    author: str


DARK_PALETTE = Palette(background="#000000", text="#FFFFFF", author="#AAAAAA")
LIGHT_PALETTE = Palette(background="#FFFFFF", text="#000000", author="#666666")


def palette_for(style: WallpaperStyle) -> Palette:
    return DARK_PALETTE if style.is_dark else LIGHT_PALETTE


def wrap_text(
    text: str,
    draw: ImageDraw.ImageDraw,
    font: _FontType,
    max_width: float,
) -> list[str]:
    """Greedily wrap *text* so each line fits within *max_width* pixels.

    Words longer than a full line are kept on their own line rather than split.
    """
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if current and draw.textlength(candidate, font=font) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


class PillowWallpaperRenderer:
    """Draw a quote centred on a solid background and encode it as PNG."""

    def __init__(self, width: int, height: int, font_path: str | Path | None = None) -> None:
        self._width = int(width)
        self._height = int(height)
        self._font_path = Path(font_path) if font_path else None

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    async def render(self, quote: Quote, style: WallpaperStyle) -> bytes:
        return await asyncio.to_thread(self.render_sync, quote, style)

    def render_sync(self, quote: Quote, style: WallpaperStyle) -> bytes:
        """Render *quote* synchronously; used from a worker thread."""
        if self._width <= 0 or self._height <= 0:
            raise RenderError(f"Invalid wallpaper size {self._width}x{self._height}")

        palette = palette_for(style)
        image = Image.new("RGB", (self._width, self._height), palette.background)
        draw = ImageDraw.Draw(image)

        text_size = max(12, int(self._width * 0.06))
        author_size = max(10, int(text_size * 0.6))
        text_font = self._load_font(text_size)
        author_font = self._load_font(author_size)

        padding = int(self._width * 0.1)
        max_width = self._width - 2 * padding
        line_spacing = int(text_size * 0.4)

        quote_lines = wrap_text(f"“{quote.text}”", draw, text_font, max_width)
        blocks: list[tuple[str, _FontType, str]] = [
            (line, text_font, palette.text) for line in quote_lines
        ]
        author_gap = 0
        if quote.author:
            author_gap = int(text_size * 0.5)
            blocks.extend(
                (line, author_font, palette.author)
                for line in wrap_text(f"- {quote.author}", draw, author_font, max_width)
            )

        heights = [self._line_height(draw, line or " ", font) for line, font, _ in blocks]
        total_height = sum(heights) + line_spacing * (len(blocks) - 1) + author_gap
        y = max(0, (self._height - total_height) // 2)

        rows = zip(blocks, heights, strict=True)
        for index, ((line, font, colour), line_height) in enumerate(rows):
            if index == len(quote_lines) and author_gap:
                y += author_gap
            line_width = draw.textlength(line, font=font)
            x = (self._width - line_width) / 2
            draw.text((x, y), line, font=font, fill=colour)
            y += line_height + line_spacing

        buffer = io.BytesIO()
        try:
            image.save(buffer, format="PNG")
        except (OSError, ValueError) as exc:
            raise RenderError(f"Failed to encode wallpaper for quote {quote.id}") from exc
        return buffer.getvalue()

    def _load_font(self, size: int) -> _FontType:
        if self._font_path is not None:
            try:
                return ImageFont.truetype(str(self._font_path), size=size)
            except OSError:
                logger.warning(
                    "Unable to load font %s; falling back to the default font",
                    self._font_path,
                )
                self._font_path = None
        return ImageFont.load_default(size=size)

    @staticmethod
    def _line_height(draw: ImageDraw.ImageDraw, line: str, font: _FontType) -> int:
        left, top, right, bottom = draw.textbbox((0, 0), line, font=font)
        return int(bottom - top)


__all__ = ["DARK_PALETTE", "LIGHT_PALETTE", "Palette", "PillowWallpaperRenderer", "wrap_text"]
