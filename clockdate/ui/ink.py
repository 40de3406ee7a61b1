"""
Ink - Pixel measurement and drawing of glyph blocks with Pillow
"""
import logging
import os
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..core.glyph_renderer import GlyphBlock


# Pango-style point sizes are converted at 96 DPI
POINTS_TO_PIXELS = 96 / 72

MONOSPACE_FONT_PATHS = (
    '/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf',
    '/usr/share/fonts/TTF/DejaVuSansMono.ttf',
    '/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf',
    '/usr/share/fonts/liberation-mono/LiberationMono-Regular.ttf',
    '/System/Library/Fonts/Menlo.ttc',
    'C:\\Windows\\Fonts\\consola.ttf',
)

logger = logging.getLogger(__name__)


def find_monospace_font(paths: Sequence[str] = MONOSPACE_FONT_PATHS) -> Optional[str]:
    """First existing monospace TrueType font, or None"""
    for path in paths:
        if os.path.exists(path):
            return path
    return None


def points_to_pixels(points: int) -> int:
    return max(1, round(points * POINTS_TO_PIXELS))


class InkMeasurer:
    """
    Measures and draws glyph blocks with one monospace font size.

    Sizes are ink extents: the bounding box of painted pixels, which is
    tighter than the nominal cell grid.
    """

    def __init__(self, point_size: int, font_file: Optional[str] = None):
        """
        Args:
            point_size: Font size in points
            font_file: TrueType font path (default: Pillow's built-in font)
        """
        self.pixel_size = points_to_pixels(point_size)
        if font_file:
            try:
                self.font = ImageFont.truetype(font_file, self.pixel_size)
            except OSError as e:
                logger.warning(f"Failed to load {font_file}: {e}, using default font")
                self.font = ImageFont.load_default(size=self.pixel_size)
        else:
            self.font = ImageFont.load_default(size=self.pixel_size)
        self._draw = ImageDraw.Draw(Image.new('RGB', (1, 1)))

    def measure(self, block: GlyphBlock) -> Tuple[int, int]:
        """
        Get ink extents of a block.

        Returns:
            (width, height) in pixels
        """
        bbox = self._draw.multiline_textbbox((0, 0), str(block), font=self.font, spacing=0)
        return bbox[2] - bbox[0], bbox[3] - bbox[1]

    def draw(self, draw: ImageDraw.ImageDraw, block: GlyphBlock, xy: Tuple[int, int], fill) -> None:
        """Draw a block with its layout origin at ``xy``"""
        draw.multiline_text(xy, str(block), font=self.font, fill=fill, spacing=0)
