import pytest

from clockdate.core.glyph_font import FontError, GlyphFont
from clockdate.core.glyph_renderer import FALLBACK_TEXT, GlyphBlock, convert, render_text


TINY = GlyphFont(name='tiny', height=2, baseline=2, glyphs={
    '1': ('|', '|'),
    '2': ('--', ' _'),
    'E': ('E', 'E'),
    'R': ('R', 'r'),
})


def test_rows_are_concatenated_in_order():
    assert render_text(TINY, '12') == GlyphBlock(('|--', '| _'))
    assert render_text(TINY, '21') == GlyphBlock(('--|', ' _|'))


def test_block_dimensions():
    block = render_text(TINY, '121')
    assert block.width == 4
    assert block.height == 2
    assert str(block) == '|--|\n| _|'


def test_unknown_character_renders_fallback():
    assert render_text(TINY, '1x2') == render_text(TINY, FALLBACK_TEXT)
    assert str(render_text(TINY, '?')) == 'ERR\nErr'


def test_empty_text_renders_fallback():
    assert convert(TINY, '') is None
    assert render_text(TINY, '') == render_text(TINY, FALLBACK_TEXT)


def test_missing_fallback_is_fatal():
    font = GlyphFont(name='digits', height=1, baseline=1, glyphs={'1': ('1',)})
    with pytest.raises(FontError):
        render_text(font, 'x')


def test_rendering_is_deterministic(time_font, date_font):
    assert render_text(time_font, '23:59') == render_text(time_font, '23:59')
    assert str(render_text(date_font, '31.12.1999')) == str(render_text(date_font, '31.12.1999'))


def test_embedded_fonts_render_every_character(time_font, date_font):
    for font in (time_font, date_font):
        for char in font.charset:
            block = render_text(font, char)
            assert block.height == font.height
            assert block.width > 0
            assert block == GlyphBlock(font.glyph(char))


def test_time_block_shape(time_font):
    block = render_text(time_font, '14:05')
    assert block.height == 5
    # four 6-column digits and a 4-column colon
    assert block.width == 28
    assert block.rows[0].startswith('  █   █   █')


def test_date_block_shape(date_font):
    block = render_text(date_font, '03.11.2024')
    assert block.height == 11
    assert block.width == 36
    assert all(not row.strip() for row in block.rows[:6])
    assert all(row.strip() for row in block.rows[6:])
