"""
Layout - Positions the time and date glyph blocks on a canvas
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.glyph_renderer import GlyphBlock
from .theme import Color, Theme


Size = Tuple[int, int]          # (width, height)
Position = Tuple[int, int]      # (x, y)


@dataclass(frozen=True)
class PlacedBlock:
    """A glyph block with its canvas position and color."""
    role: str
    block: GlyphBlock
    x: int
    y: int
    color: Color


def half(n: int) -> int:
    """Integer halving that truncates toward zero"""
    return n // 2 if n >= 0 else -(-n // 2)


def grid_size(block: GlyphBlock) -> Size:
    """Size of a block in character cells"""
    return (block.width, block.height)


def arrange(time_size: Size, date_size: Size, canvas_width: int, vertical_offset: int) -> Tuple[Position, Position]:
    """
    Center both blocks horizontally and stack the date under the time.

    ``vertical_offset`` is added to the time block height as is; negative
    values pull the date block up over the time block. Nothing is clamped.

    Args:
        time_size: (width, height) of the time block
        date_size: (width, height) of the date block
        canvas_width: Canvas width in the same unit as the sizes
        vertical_offset: Extra distance between the two blocks

    Returns:
        ((time_x, time_y), (date_x, date_y))
    """
    time_width, time_height = time_size
    date_width, _ = date_size

    time_x = half(canvas_width - time_width)
    time_y = 0
    date_x = half(canvas_width - date_width)
    date_y = time_y + time_height + vertical_offset

    return (time_x, time_y), (date_x, date_y)


class Layout:
    """
    Manages layout calculations for the clock face.
    """

    def __init__(self, width: int, date_offset: int = 0):
        """
        Initialize layout manager.

        Args:
            width: Canvas width (pixels)
            date_offset: Vertical offset added below the time block
        """
        self._width = width
        self._date_offset = date_offset

        # Terminal regions as fractions of the screen
        self._regions = {
            'time': {'x': 0.0, 'y': 0.0, 'width': 1.0, 'height': 0.5},
            'date': {'x': 0.0, 'y': 0.5, 'width': 1.0, 'height': 0.5},
        }

    def get_region(self, name: str, width: int, height: int) -> Dict[str, int]:
        """
        Get cell coordinates for a named region.

        Args:
            name: Region name ('time', 'date')
            width: Screen width in columns
            height: Screen height in rows

        Returns:
            Dictionary with x, y, width, height
        """
        if name not in self._regions:
            raise ValueError(f"Unknown region: {name}")

        region = self._regions[name]
        x = int(region['x'] * width)
        y = int(region['y'] * height)

        return {
            'x': x,
            'y': y,
            # Last region absorbs rounding remainders
            'width': int((region['x'] + region['width']) * width) - x,
            'height': int((region['y'] + region['height']) * height) - y,
        }

    def place(
        self,
        time_block: GlyphBlock,
        date_block: GlyphBlock,
        theme: Theme,
        time_size: Optional[Size] = None,
        date_size: Optional[Size] = None
    ) -> List[PlacedBlock]:
        """
        Position both blocks on the canvas.

        Args:
            time_block: Rendered time
            date_block: Rendered date
            theme: Resolved colors
            time_size: Measured size of the time block (default: grid size)
            date_size: Measured size of the date block (default: grid size)

        Returns:
            [time, date] placed blocks
        """
        time_pos, date_pos = arrange(
            time_size or grid_size(time_block),
            date_size or grid_size(date_block),
            self._width,
            self._date_offset,
        )
        return [
            PlacedBlock('time', time_block, time_pos[0], time_pos[1], theme.time_color),
            PlacedBlock('date', date_block, date_pos[0], date_pos[1], theme.date_color),
        ]

    def place_in_regions(
        self,
        time_block: GlyphBlock,
        date_block: GlyphBlock,
        theme: Theme,
        columns: int,
        rows: int
    ) -> List[PlacedBlock]:
        """
        Center each block inside its terminal region.

        Args:
            time_block: Rendered time
            date_block: Rendered date
            theme: Resolved colors
            columns: Terminal width
            rows: Terminal height

        Returns:
            [time, date] placed blocks
        """
        placed = []
        for role, block in (('time', time_block), ('date', date_block)):
            r = self.get_region(role, columns, rows)
            placed.append(PlacedBlock(
                role,
                block,
                r['x'] + half(r['width'] - block.width),
                r['y'] + half(r['height'] - block.height),
                theme.color_for(role),
            ))
        return placed

