"""
Glyph Font - FIGlet (.flf) bitmap font loading
Parses FIGlet font payloads into per-character glyph cells
"""
import string
from dataclasses import dataclass, field
from importlib import resources
from typing import Dict, Iterable, List, Mapping, Tuple


SIGNATURE = 'flf2a'

# ASCII 32-126 followed by the seven Deutsch characters
REQUIRED_CODES: Tuple[int, ...] = tuple(range(32, 127)) + (196, 214, 220, 228, 246, 252, 223)

# Characters every embedded font must define
REQUIRED_CHARACTERS = string.digits + ':.' + string.ascii_uppercase

FONT_PACKAGE = 'clockdate.fonts'
FONT_RESOURCES = {
    'time': 'time.flf',
    'date': 'date.flf',
}


class FontError(Exception):
    """Raised when a font payload cannot be parsed or is incomplete."""


@dataclass(frozen=True)
class GlyphFont:
    """
    Immutable bitmap font.

    Every cell in ``glyphs`` has exactly ``height`` rows, all of equal width.
    """
    name: str
    height: int
    baseline: int
    glyphs: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __contains__(self, char: str) -> bool:
        return char in self.glyphs

    def glyph(self, char: str) -> Tuple[str, ...]:
        """Get the glyph cell for a character (KeyError if undefined)"""
        return self.glyphs[char]

    @property
    def charset(self) -> str:
        """All defined characters, in code point order"""
        return ''.join(sorted(self.glyphs))

    def missing(self, chars: Iterable[str]) -> List[str]:
        """Characters from ``chars`` that have no cell in this font"""
        return [c for c in chars if c not in self.glyphs]


def _strip_endmark(line: str) -> str:
    """Drop trailing whitespace, then the run of end-mark characters."""
    line = line.rstrip()
    if not line:
        return line
    return line.rstrip(line[-1])


def _parse_code_tag(tag: str, name: str) -> int:
    token = tag.split()[0]
    sign = 1
    if token.startswith('-'):
        sign, token = -1, token[1:]
    try:
        if token[:2].lower() == '0x':
            value = int(token[2:], 16)
        elif len(token) > 1 and token.startswith('0'):
            value = int(token[1:], 8)
        else:
            value = int(token, 10)
    except ValueError as e:
        raise FontError(f"{name}: invalid code tag {tag!r}") from e
    return sign * value


def _read_cell(lines: List[str], cursor: int, height: int, hardblank: str,
               name: str, code: int) -> Tuple[str, ...]:
    if cursor + height > len(lines):
        raise FontError(f"{name}: truncated glyph for code {code}")

    rows = [_strip_endmark(line).replace(hardblank, ' ')
            for line in lines[cursor:cursor + height]]
    width = max(len(row) for row in rows)
    return tuple(row.ljust(width) for row in rows)


def parse_font(content: str, name: str = 'font') -> GlyphFont:
    """
    Parse a FIGlet font payload.

    Args:
        content: Full text of the .flf file
        name: Font name used in error messages

    Returns:
        Parsed GlyphFont

    Raises:
        FontError: If the header or any glyph record is malformed
    """
    lines = content.splitlines()
    if not lines:
        raise FontError(f"{name}: empty font payload")

    header = lines[0]
    if not header.startswith(SIGNATURE) or len(header) <= len(SIGNATURE):
        raise FontError(f"{name}: missing {SIGNATURE} signature")

    hardblank = header[len(SIGNATURE)]
    params = header[len(SIGNATURE) + 1:].split()
    if len(params) < 5:
        raise FontError(f"{name}: incomplete header {header!r}")

    try:
        height, baseline, _max_length, _old_layout, comment_lines = (int(p) for p in params[:5])
    except ValueError as e:
        raise FontError(f"{name}: non-numeric header field in {header!r}") from e

    if height < 1:
        raise FontError(f"{name}: invalid height {height}")
    if comment_lines < 0 or 1 + comment_lines > len(lines):
        raise FontError(f"{name}: comment block runs past end of file")

    glyphs: Dict[str, Tuple[str, ...]] = {}
    cursor = 1 + comment_lines

    for code in REQUIRED_CODES:
        # Glyph rows always carry end marks, so trailing blank lines end the set
        if not any(line.strip() for line in lines[cursor:]):
            break
        cell = _read_cell(lines, cursor, height, hardblank, name, code)
        cursor += height
        # Zero-width records are placeholders, not glyphs
        if cell[0]:
            glyphs[chr(code)] = cell

    while cursor < len(lines):
        tag = lines[cursor].strip()
        cursor += 1
        if not tag:
            continue
        code = _parse_code_tag(tag, name)
        cell = _read_cell(lines, cursor, height, hardblank, name, code)
        cursor += height
        if code >= 0 and cell[0]:
            glyphs[chr(code)] = cell

    return GlyphFont(name=name, height=height, baseline=baseline, glyphs=glyphs)


def load_font(resource: str, name: str) -> GlyphFont:
    """
    Load and validate one embedded font.

    Raises:
        FontError: If the payload is unreadable, malformed or lacks a
            required character
    """
    try:
        content = resources.files(FONT_PACKAGE).joinpath(resource).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise FontError(f"{name}: cannot read embedded font {resource}: {e}") from e

    font = parse_font(content, name)
    missing = font.missing(REQUIRED_CHARACTERS)
    if missing:
        raise FontError(f"{name}: missing glyphs for {''.join(missing)!r}")
    return font


def load_embedded_fonts() -> Tuple[GlyphFont, GlyphFont]:
    """
    Load the time and date fonts bundled with the package.

    Returns:
        Tuple of (time_font, date_font)
    """
    return (
        load_font(FONT_RESOURCES['time'], 'time'),
        load_font(FONT_RESOURCES['date'], 'date'),
    )
