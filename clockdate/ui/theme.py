"""
Theme - Color palette and color token resolution
"""
import re
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

from ..core.config_service import ColorConfig


RGB = Tuple[int, int, int]

HEX_COLOR_PATTERN = re.compile(r'#[0-9A-Fa-f]{6}')


class NamedColor(Enum):
    """
    Symbolic palette. Each member carries (token, rgb, ansi_code).

    ``ansi_code`` is the SGR foreground code for 16-color terminals, or
    None when the color only exists as 24-bit RGB.
    """
    BLACK = ('Black', (0, 0, 0), 30)
    RED = ('Red', (255, 0, 0), 31)
    GREEN = ('Green', (0, 255, 0), 32)
    YELLOW = ('Yellow', (255, 255, 0), 33)
    BLUE = ('Blue', (0, 0, 255), 34)
    MAGENTA = ('Magenta', (255, 0, 255), 35)
    PURPLE = ('Purple', (160, 32, 240), None)
    CYAN = ('Cyan', (0, 255, 255), 36)
    GRAY = ('Gray', (128, 128, 128), 37)
    DARK_GRAY = ('DarkGray', (64, 64, 64), 90)
    LIGHT_RED = ('LightRed', (255, 128, 128), 91)
    LIGHT_GREEN = ('LightGreen', (128, 255, 128), 92)
    LIGHT_YELLOW = ('LightYellow', (255, 255, 128), 93)
    LIGHT_BLUE = ('LightBlue', (128, 128, 255), 94)
    LIGHT_MAGENTA = ('LightMagenta', (255, 128, 255), 95)
    LIGHT_CYAN = ('LightCyan', (128, 255, 255), 96)
    WHITE = ('White', (255, 255, 255), 97)

    def __init__(self, token: str, rgb: RGB, ansi_code: Optional[int]):
        self.token = token
        self.rgb = rgb
        self.ansi_code = ansi_code

    @classmethod
    def from_token(cls, token: str) -> Optional['NamedColor']:
        """Case-sensitive palette lookup"""
        return _TOKENS.get(token)


_TOKENS = {color.token: color for color in NamedColor}

DEFAULT_COLOR = NamedColor.BLUE


class HexColor(NamedTuple):
    """Explicit '#RRGGBB' color."""
    r: int
    g: int
    b: int


Color = Union[NamedColor, HexColor]


def parse_color(token: str) -> Color:
    """
    Parse a color token. Never fails.

    Args:
        token: '#RRGGBB' or a palette name such as 'LightCyan'

    Returns:
        HexColor for hex tokens, the matching NamedColor otherwise,
        DEFAULT_COLOR for anything unrecognized
    """
    if HEX_COLOR_PATTERN.fullmatch(token):
        return HexColor(int(token[1:3], 16), int(token[3:5], 16), int(token[5:7], 16))

    named = NamedColor.from_token(token)
    if named is not None:
        return named
    return DEFAULT_COLOR


def to_rgb(color: Color) -> RGB:
    if isinstance(color, NamedColor):
        return color.rgb
    return (color.r, color.g, color.b)


def resolve_color(token: str) -> RGB:
    """Resolve a color token straight to an (r, g, b) triple"""
    return to_rgb(parse_color(token))


def ansi_foreground(color: Color) -> str:
    """
    SGR escape that sets the terminal foreground to ``color``.

    Palette colors use their 16-color code so the terminal theme applies;
    everything else uses 24-bit color.
    """
    if isinstance(color, NamedColor) and color.ansi_code is not None:
        return f"\x1b[{color.ansi_code}m"
    r, g, b = to_rgb(color)
    return f"\x1b[38;2;{r};{g};{b}m"


class Theme:
    """
    Resolved colors for the time and date blocks.
    """

    def __init__(self, time_color: Color, date_color: Color):
        self.time_color = time_color
        self.date_color = date_color

    @classmethod
    def from_config(cls, colors: ColorConfig) -> 'Theme':
        return cls(parse_color(colors.time), parse_color(colors.date))

    def color_for(self, role: str) -> Color:
        """
        Get color for a block role.

        Args:
            role: 'time' or 'date'
        """
        if role == 'time':
            return self.time_color
        if role == 'date':
            return self.date_color
        raise ValueError(f"Unknown role: {role}")

