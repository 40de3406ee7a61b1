import pytest

from clockdate.core.glyph_font import load_embedded_fonts


@pytest.fixture(scope='session')
def fonts():
    return load_embedded_fonts()


@pytest.fixture(scope='session')
def time_font(fonts):
    return fonts[0]


@pytest.fixture(scope='session')
def date_font(fonts):
    return fonts[1]
