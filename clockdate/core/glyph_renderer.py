"""
Glyph Renderer - Turns text into multi-line glyph blocks
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .glyph_font import FontError, GlyphFont


FALLBACK_TEXT = 'ERR'

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlyphBlock:
    """One rendered string: ``height`` rows of glyph art."""
    rows: Tuple[str, ...]

    @property
    def width(self) -> int:
        """Column width (longest row)"""
        return max((len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        """Row count"""
        return len(self.rows)

    def __str__(self) -> str:
        return '\n'.join(self.rows)


def convert(font: GlyphFont, text: str) -> Optional[GlyphBlock]:
    """
    Concatenate the glyph cells of ``text`` row by row.

    Returns:
        GlyphBlock, or None if ``text`` is empty or uses a character the
        font does not define
    """
    if not text:
        return None

    cells = []
    for char in text:
        cell = font.glyphs.get(char)
        if cell is None:
            return None
        cells.append(cell)

    return GlyphBlock(tuple(
        ''.join(cell[row] for cell in cells) for row in range(font.height)
    ))


def render_text(font: GlyphFont, text: str) -> GlyphBlock:
    """
    Render ``text`` with ``font``, falling back to FALLBACK_TEXT.

    Raises:
        FontError: If even the fallback text cannot be rendered
    """
    block = convert(font, text)
    if block is not None:
        return block

    logger.debug(f"Cannot render {text!r} with font '{font.name}', showing {FALLBACK_TEXT}")
    block = convert(font, FALLBACK_TEXT)
    if block is None:
        raise FontError(f"{font.name}: fallback text {FALLBACK_TEXT!r} is not renderable")
    return block
